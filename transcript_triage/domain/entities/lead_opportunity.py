"""Lead opportunity entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import uuid4

from transcript_triage.domain.value_objects.lead_status import LeadStatus


@dataclass
class LeadOpportunity:
    """Staff-actionable retention follow-up derived from a transcript.

    At most one lead exists per transcript; regenerating a lead for the same
    transcript overwrites this row in place.
    """

    transcript_id: str
    model: str
    title: str
    reason: str
    next_action: str
    lead_score: float
    status: LeadStatus = LeadStatus.OPEN
    source_artifact_id: Optional[str] = None
    owner: Optional[str] = None
    due_at: Optional[datetime] = None
    last_contacted_at: Optional[datetime] = None
    notes: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def touch(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = datetime.now(timezone.utc)

    def overwrite_from(self, regenerated: "LeadOpportunity") -> None:
        """
        Replace generated content with a freshly generated lead.

        Identity, creation time and staff-owned fields (owner, notes,
        last_contacted_at) are kept; the status goes back to open.

        Args:
            regenerated: Lead produced by the latest generation
        """
        self.model = regenerated.model
        self.title = regenerated.title
        self.reason = regenerated.reason
        self.next_action = regenerated.next_action
        self.lead_score = regenerated.lead_score
        self.status = LeadStatus.OPEN
        self.source_artifact_id = regenerated.source_artifact_id
        self.due_at = regenerated.due_at
        self.metadata = dict(regenerated.metadata)
        self.touch()

    def is_overdue(self, now: Optional[datetime] = None) -> bool:
        """
        Check if an active lead is past its due date.

        Args:
            now: Reference time (defaults to current UTC time)

        Returns:
            True if the lead is active and due_at is in the past
        """
        if not self.status.is_active or self.due_at is None:
            return False
        return self.due_at < (now or datetime.now(timezone.utc))
