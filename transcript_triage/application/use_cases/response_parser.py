"""Forgiving parsers for raw text-generation output.

Small local models rarely return clean JSON. Each parser runs an ordered chain
of extraction strategies (structured parse, substring extraction, regex
extraction) and falls back to a safe value instead of raising.
"""

import json
import re
from collections.abc import Callable
from typing import Any, Optional

_OPENING_FENCE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_CLOSING_FENCE = re.compile(r"\s*```$")
_SUMMARY_FIELD = re.compile(r'"summary"\s*:\s*"([\s\S]*?)"', re.IGNORECASE)

# Preamble patterns removed by clean_summary_output, applied in order
_HEADING_LABEL = re.compile(r"^#{1,6}\s*summary\s*:?\s*", re.IGNORECASE)
_BARE_LABEL = re.compile(r"^summary\s*:\s*", re.IGNORECASE)
_BULLET_BOLD_LABEL = re.compile(r"^\s*[-*]\s*\*\*[^*]+\*\*:\s*", re.MULTILINE)
_LINE_BOLD_LABEL = re.compile(r"^\s*\*\*[^*]+\*\*:\s*", re.MULTILINE)


def strip_code_fences(text: str) -> str:
    """
    Remove a surrounding markdown code fence and whitespace.

    Args:
        text: Raw model output

    Returns:
        Unfenced, trimmed text
    """
    unfenced = _OPENING_FENCE.sub("", text.strip(), count=1)
    return _CLOSING_FENCE.sub("", unfenced, count=1).strip()


def _summary_from_json(candidate: str) -> Optional[str]:
    try:
        parsed = json.loads(candidate)
    except ValueError:
        return None
    if not isinstance(parsed, dict):
        return None
    summary = parsed.get("summary")
    if isinstance(summary, str) and summary.strip():
        return summary.strip()
    return None


def summary_from_direct_json(text: str) -> Optional[str]:
    """Parse the whole text as a JSON object with a summary field."""
    return _summary_from_json(text)


def summary_from_braced_substring(text: str) -> Optional[str]:
    """Parse the text between the first '{' and the last '}'."""
    start = text.find("{")
    end = text.rfind("}")
    if start < 0 or end <= start:
        return None
    return _summary_from_json(text[start : end + 1])


def summary_from_field_pattern(text: str) -> Optional[str]:
    """Extract a '"summary": "..."' pair from otherwise broken JSON."""
    match = _SUMMARY_FIELD.search(text)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return None


SUMMARY_EXTRACTION_STRATEGIES: tuple[Callable[[str], Optional[str]], ...] = (
    summary_from_direct_json,
    summary_from_braced_substring,
    summary_from_field_pattern,
)


def extract_summary(raw_text: str) -> str:
    """
    Extract the summary text from raw model output.

    Args:
        raw_text: Raw model output

    Returns:
        Summary from the first successful strategy, or the unfenced text
    """
    unfenced = strip_code_fences(raw_text)
    for strategy in SUMMARY_EXTRACTION_STRATEGIES:
        summary = strategy(unfenced)
        if summary is not None:
            return summary
    return unfenced


def clean_summary_output(text: str) -> str:
    """
    Strip label and heading preambles the model tends to prepend.

    Bullet and paragraph content is preserved; bold bullet labels such as
    ``- **Reason**: ...`` become plain ``- ...`` bullets.

    Args:
        text: Extracted summary text

    Returns:
        Cleaned summary
    """
    cleaned = text.strip()
    cleaned = _HEADING_LABEL.sub("", cleaned, count=1)
    cleaned = _BARE_LABEL.sub("", cleaned, count=1)
    cleaned = _BULLET_BOLD_LABEL.sub("- ", cleaned)
    cleaned = _LINE_BOLD_LABEL.sub("", cleaned)
    return cleaned.strip()


def parse_summary_response(raw_text: str) -> str:
    """
    Turn raw model output into a clean summary. Never raises.

    Args:
        raw_text: Raw model output

    Returns:
        Clean summary text
    """
    return clean_summary_output(extract_summary(raw_text))


def _json_array(candidate: str) -> Optional[list[Any]]:
    try:
        parsed = json.loads(candidate)
    except ValueError:
        return None
    return parsed if isinstance(parsed, list) else None


def leads_from_direct_json(text: str) -> Optional[list[Any]]:
    """Parse the whole text as a JSON array."""
    return _json_array(text)


def leads_from_bracketed_substring(text: str) -> Optional[list[Any]]:
    """Parse the text between the first '[' and the last ']'."""
    start = text.find("[")
    end = text.rfind("]")
    if start < 0 or end <= start:
        return None
    return _json_array(text[start : end + 1])


LEADS_EXTRACTION_STRATEGIES: tuple[Callable[[str], Optional[list[Any]]], ...] = (
    leads_from_direct_json,
    leads_from_bracketed_substring,
)


def parse_leads_response(raw_text: str) -> list[Any]:
    """
    Extract the lead candidate array from raw model output. Never raises.

    Args:
        raw_text: Raw model output

    Returns:
        Untrusted candidate list, empty when nothing parses
    """
    unfenced = strip_code_fences(raw_text)
    for strategy in LEADS_EXTRACTION_STRATEGIES:
        candidates = strategy(unfenced)
        if candidates is not None:
            return candidates
    return []
