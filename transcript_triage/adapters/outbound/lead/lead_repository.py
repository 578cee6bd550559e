"""In-memory lead opportunity repository adapter."""

from typing import Any, Optional

from transcript_triage.application.errors import NotFoundError
from transcript_triage.application.ports.lead_repository import LeadRepository
from transcript_triage.domain.entities.lead_opportunity import LeadOpportunity


class InMemoryLeadRepository(LeadRepository):
    """In-memory implementation of lead opportunity repository."""

    def __init__(self) -> None:
        """Initialize in-memory repository."""
        self._storage: dict[str, LeadOpportunity] = {}

    async def get(self, lead_id: str) -> Optional[LeadOpportunity]:
        return self._storage.get(lead_id)

    async def get_by_transcript(self, transcript_id: str) -> Optional[LeadOpportunity]:
        for lead in self._storage.values():
            if lead.transcript_id == transcript_id:
                return lead
        return None

    async def upsert(self, lead: LeadOpportunity) -> LeadOpportunity:
        """
        Insert a lead, or overwrite the lead already owned by its transcript.

        Args:
            lead: Freshly generated lead

        Returns:
            Stored lead
        """
        existing = await self.get_by_transcript(lead.transcript_id)
        if existing is None:
            self._storage[lead.id] = lead
            return lead
        existing.overwrite_from(lead)
        return existing

    async def update(self, lead_id: str, patch: dict[str, Any]) -> None:
        lead = self._storage.get(lead_id)
        if lead is None:
            raise NotFoundError(f"Lead {lead_id} not found")
        for field_name, value in patch.items():
            setattr(lead, field_name, value)

    async def list(self) -> list[LeadOpportunity]:
        return list(self._storage.values())
