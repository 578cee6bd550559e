"""Transcript DTOs."""

from datetime import datetime
from typing import Any, Optional

from transcript_triage.application.dtos.base import DTO
from transcript_triage.domain.entities.transcript import Transcript


class TranscriptInput(DTO):
    """Fields accepted when ingesting a transcript."""

    patient_pseudonym: Optional[str] = None
    source: Optional[str] = None
    source_ref: Optional[str] = None
    text: Optional[str] = None  # Already redacted upstream
    idempotency_key: Optional[str] = None
    meta: Optional[dict[str, Any]] = None


class TranscriptListItem(DTO):
    """Row of the unprocessed transcript list (no text)."""

    id: str
    created_at: datetime
    patient_pseudonym: Optional[str] = None
    source: Optional[str] = None
    source_ref: Optional[str] = None

    @classmethod
    def from_entity(cls, transcript: Transcript) -> "TranscriptListItem":
        return cls(
            id=transcript.id,
            created_at=transcript.created_at,
            patient_pseudonym=transcript.patient_pseudonym,
            source=transcript.source,
            source_ref=transcript.source_ref,
        )


class TranscriptView(DTO):
    """Full read model of a stored transcript."""

    id: str
    patient_pseudonym: Optional[str] = None
    source: Optional[str] = None
    source_ref: Optional[str] = None
    redacted_text: str
    idempotency_key: Optional[str] = None
    status: str
    meta: Optional[dict[str, Any]] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, transcript: Transcript) -> "TranscriptView":
        """Build a view from the entity."""
        return cls(
            id=transcript.id,
            patient_pseudonym=transcript.patient_pseudonym,
            source=transcript.source,
            source_ref=transcript.source_ref,
            redacted_text=transcript.text,
            idempotency_key=transcript.idempotency_key,
            status=transcript.status,
            meta=transcript.meta,
            created_at=transcript.created_at,
        )


class TranscriptPage(DTO):
    """One offset page of unprocessed transcripts."""

    items: list[TranscriptListItem]
    limit: int
    offset: int
    next_offset: Optional[int] = None
    has_more: bool
