"""Lead DTOs."""

from datetime import datetime
from typing import Any, Optional

from transcript_triage.application.dtos.base import DTO
from transcript_triage.domain.entities.lead_opportunity import LeadOpportunity


class LeadView(DTO):
    """Read model of a persisted lead opportunity."""

    id: str
    transcript_id: str
    source_artifact_id: Optional[str] = None
    model: str
    title: str
    reason: str
    next_action: str
    lead_score: float
    status: str
    owner: Optional[str] = None
    due_at: Optional[datetime] = None
    last_contacted_at: Optional[datetime] = None
    notes: Optional[str] = None
    metadata: dict[str, Any] = {}
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, lead: LeadOpportunity) -> "LeadView":
        """Build a view from the entity."""
        return cls(
            id=lead.id,
            transcript_id=lead.transcript_id,
            source_artifact_id=lead.source_artifact_id,
            model=lead.model,
            title=lead.title,
            reason=lead.reason,
            next_action=lead.next_action,
            lead_score=lead.lead_score,
            status=lead.status.value,
            owner=lead.owner,
            due_at=lead.due_at,
            last_contacted_at=lead.last_contacted_at,
            notes=lead.notes,
            metadata=dict(lead.metadata),
            created_at=lead.created_at,
            updated_at=lead.updated_at,
        )


class LeadQueue(DTO):
    """Filtered and ordered lead queue with follow-up counters."""

    items: list[LeadView]
    count: int
    followup_open: int
    followup_overdue: int
