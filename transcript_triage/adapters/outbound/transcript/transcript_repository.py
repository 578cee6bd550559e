"""In-memory transcript repository adapter."""

from typing import Optional

from transcript_triage.application.errors import NotFoundError
from transcript_triage.application.ports.transcript_repository import TranscriptRepository
from transcript_triage.domain.entities.transcript import Transcript


class InMemoryTranscriptRepository(TranscriptRepository):
    """In-memory implementation of transcript repository."""

    def __init__(self, transcripts: Optional[list[Transcript]] = None) -> None:
        """
        Initialize in-memory repository.

        Args:
            transcripts: Optional transcripts to preload
        """
        self._storage: dict[str, Transcript] = {}
        for transcript in transcripts or []:
            self.add(transcript)

    def add(self, transcript: Transcript) -> None:
        """Store a transcript as-is (seeding and tests)."""
        self._storage[transcript.id] = transcript

    async def insert_or_get(self, transcript: Transcript) -> tuple[Transcript, bool]:
        if transcript.idempotency_key is not None:
            for existing in self._storage.values():
                if existing.idempotency_key == transcript.idempotency_key:
                    return existing, False
        self._storage[transcript.id] = transcript
        return transcript, True

    async def get(self, transcript_id: str) -> Optional[Transcript]:
        return self._storage.get(transcript_id)

    async def list_unprocessed(
        self,
        limit: int,
        offset: int = 0,
        source: Optional[str] = None,
        patient_pseudonym: Optional[str] = None,
    ) -> list[Transcript]:
        transcripts = [
            transcript
            for transcript in self._storage.values()
            if not transcript.is_processed
            and (source is None or transcript.source == source)
            and (patient_pseudonym is None or transcript.patient_pseudonym == patient_pseudonym)
        ]
        transcripts.sort(key=lambda transcript: transcript.created_at, reverse=True)
        return transcripts[offset : offset + limit]

    async def mark_processed(self, transcript_id: str) -> None:
        transcript = self._storage.get(transcript_id)
        if transcript is None:
            raise NotFoundError(f"Transcript {transcript_id} not found")
        transcript.status = "processed"
