"""Transcript repository port."""

from abc import ABC, abstractmethod
from typing import Optional

from transcript_triage.domain.entities.transcript import Transcript


class TranscriptRepository(ABC):
    """Port interface for transcript repository."""

    @abstractmethod
    async def insert_or_get(self, transcript: Transcript) -> tuple[Transcript, bool]:
        """
        Insert a transcript unless its idempotency key is already stored.

        Args:
            transcript: Transcript to insert (idempotency_key must be set)

        Returns:
            Tuple of (stored transcript, created). When the key already exists
            the stored row is returned unchanged with created=False.
        """
        pass

    @abstractmethod
    async def get(self, transcript_id: str) -> Optional[Transcript]:
        """
        Get a transcript by id.

        Args:
            transcript_id: Transcript identifier

        Returns:
            Transcript entity, or None if not found
        """
        pass

    @abstractmethod
    async def list_unprocessed(
        self,
        limit: int,
        offset: int = 0,
        source: Optional[str] = None,
        patient_pseudonym: Optional[str] = None,
    ) -> list[Transcript]:
        """
        List transcripts that are not processed yet, newest first.

        Args:
            limit: Maximum number of rows
            offset: Number of rows to skip
            source: Optional exact source filter
            patient_pseudonym: Optional exact pseudonym filter

        Returns:
            Transcripts ordered by created_at descending
        """
        pass

    @abstractmethod
    async def mark_processed(self, transcript_id: str) -> None:
        """
        Mark a transcript as processed.

        Args:
            transcript_id: Transcript identifier
        """
        pass
