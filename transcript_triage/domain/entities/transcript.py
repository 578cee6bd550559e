"""Transcript entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional


@dataclass
class Transcript:
    """Pseudonymized transcript ingested for triage."""

    id: str
    text: str  # Already redacted upstream
    patient_pseudonym: Optional[str] = None
    source: Optional[str] = None
    source_ref: Optional[str] = None
    idempotency_key: Optional[str] = None  # Unique per ingestion request
    meta: Optional[dict[str, Any]] = None
    status: str = "new"  # new -> processed
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_processed(self) -> bool:
        return self.status == "processed"
