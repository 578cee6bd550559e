"""Transcript repository adapters."""

from transcript_triage.adapters.outbound.transcript.postgres_transcript_repository import (
    PostgresTranscriptRepository,
)
from transcript_triage.adapters.outbound.transcript.transcript_repository import (
    InMemoryTranscriptRepository,
)

__all__ = [
    "InMemoryTranscriptRepository",
    "PostgresTranscriptRepository",
]
