"""Lead opportunity repository port."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from transcript_triage.domain.entities.lead_opportunity import LeadOpportunity


class LeadRepository(ABC):
    """Port interface for lead opportunity repository."""

    @abstractmethod
    async def get(self, lead_id: str) -> Optional[LeadOpportunity]:
        """
        Get a lead by id.

        Args:
            lead_id: Lead identifier

        Returns:
            Lead entity, or None if not found
        """
        pass

    @abstractmethod
    async def get_by_transcript(self, transcript_id: str) -> Optional[LeadOpportunity]:
        """
        Get the lead owned by a transcript.

        Args:
            transcript_id: Transcript identifier

        Returns:
            Lead entity, or None if the transcript has no lead
        """
        pass

    @abstractmethod
    async def upsert(self, lead: LeadOpportunity) -> LeadOpportunity:
        """
        Insert a lead or overwrite the existing lead of the same transcript.

        Args:
            lead: Freshly generated lead

        Returns:
            Stored lead (keeps the existing id when one was overwritten)
        """
        pass

    @abstractmethod
    async def update(self, lead_id: str, patch: dict[str, Any]) -> None:
        """
        Apply a partial update to a lead.

        Args:
            lead_id: Lead identifier
            patch: Field name to new value
        """
        pass

    @abstractmethod
    async def list(self) -> list[LeadOpportunity]:
        """
        List all leads.

        Returns:
            List of all leads
        """
        pass
