"""Structured logger for observability."""

import logging
from typing import Any

# Configure root logger with JSON-like structured format
_logger = logging.getLogger("transcript_triage")
_logger.setLevel(logging.INFO)

# Create console handler if not exists
if not _logger.handlers:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    _logger.addHandler(handler)


def log_event(
    component: str,
    event: str,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """
    Log a structured event.

    Args:
        component: Component name (e.g., 'http', 'pipeline', 'llm')
        event: Event name (e.g., 'summary_generated')
        level: Log level (default: INFO)
        **kwargs: Additional structured fields to log
    """
    fields = {
        "component": component,
        "event": event,
    }
    fields.update(kwargs)

    # Format as key=value pairs for readability
    log_parts = [f"{k}={v!r}" for k, v in fields.items()]
    log_message = " | ".join(log_parts)

    _logger.log(level, log_message)


# Logger instance for adapters that log plain messages
logger = _logger
