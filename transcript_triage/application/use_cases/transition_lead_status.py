"""Transition lead status use case."""

from datetime import datetime, timezone
from typing import Any, Callable, Optional

from transcript_triage.application.dtos.lead import LeadView
from transcript_triage.application.errors import NotFoundError
from transcript_triage.application.ports.lead_repository import LeadRepository
from transcript_triage.application.use_cases.audit_trail import AuditTrail
from transcript_triage.domain.value_objects.lead_status import LeadStatus


class TransitionLeadStatus:
    """Use case for moving a lead through its follow-up lifecycle."""

    def __init__(
        self,
        lead_repository: LeadRepository,
        audit_trail: AuditTrail,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize transition use case.

        Args:
            lead_repository: Repository for lead opportunities
            audit_trail: Audit trail for status changes
            logger: Optional logger function (component, event, **kwargs)
        """
        self._lead_repository = lead_repository
        self._audit_trail = audit_trail
        self._logger = logger

    async def execute(
        self,
        lead_id: str,
        status: Any,
        notes: Optional[str] = None,
        due_at: Optional[datetime] = None,
        actor: str = "system",
    ) -> LeadView:
        """
        Apply a status transition.

        Notes are always overwritten, including with None. ``due_at`` is only
        written when given. Moving to ``contacted`` stamps last_contacted_at.

        Args:
            lead_id: Lead identifier
            status: Requested status (raw caller value)
            notes: Notes replacing the current notes
            due_at: Optional due date override
            actor: Acting user identifier

        Returns:
            Updated lead

        Raises:
            InvalidLeadStatusError: If status is not a recognized status
            NotFoundError: If the lead does not exist
        """
        next_status = LeadStatus.parse(status)

        lead = await self._lead_repository.get(lead_id)
        if lead is None:
            raise NotFoundError(f"Lead {lead_id} not found")
        previous_status = lead.status

        now = datetime.now(timezone.utc)
        patch: dict[str, Any] = {
            "status": next_status,
            "notes": notes,
            "updated_at": now,
        }
        if due_at is not None:
            patch["due_at"] = due_at
        if next_status is LeadStatus.CONTACTED:
            patch["last_contacted_at"] = now

        await self._lead_repository.update(lead_id, patch)

        await self._audit_trail.record(
            entity_type="lead",
            entity_id=lead_id,
            actor=actor,
            action="lead.status_updated",
            details={
                "previous_status": previous_status.value,
                "next_status": next_status.value,
                "notes": notes,
            },
        )
        if self._logger:
            self._logger(
                "lead_lifecycle",
                "status_updated",
                lead_id=lead_id,
                status_before=previous_status.value,
                status_after=next_status.value,
                actor=actor,
            )

        updated = await self._lead_repository.get(lead_id)
        return LeadView.from_entity(updated or lead)
