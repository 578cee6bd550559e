"""Lead queue read model."""

from datetime import datetime, timezone
from typing import Optional

from transcript_triage.application.dtos.lead import LeadQueue, LeadView
from transcript_triage.application.ports.lead_repository import LeadRepository
from transcript_triage.domain.entities.lead_opportunity import LeadOpportunity

QUEUE_FILTERS = ("active", "overdue", "all")
QUEUE_SORTS = ("priority", "due_soon", "newest")


def priority_sort_key(lead: LeadOpportunity) -> tuple[int, float, float]:
    """
    Ordering key for the priority queue.

    Status rank first, then higher lead_score, then newest.

    Args:
        lead: Lead entity

    Returns:
        Sort key (ascending)
    """
    return (lead.status.rank, -lead.lead_score, -lead.created_at.timestamp())


def order_leads(leads: list[LeadOpportunity], sort_by: str = "priority") -> list[LeadOpportunity]:
    """
    Order leads for display.

    Args:
        leads: Leads to order
        sort_by: 'priority', 'due_soon' (missing due dates last) or 'newest'

    Returns:
        New ordered list
    """
    if sort_by == "newest":
        return sorted(leads, key=lambda lead: lead.created_at, reverse=True)
    if sort_by == "due_soon":
        return sorted(
            leads,
            key=lambda lead: (lead.due_at is None, lead.due_at or lead.created_at),
        )
    return sorted(leads, key=priority_sort_key)


class ListLeadQueue:
    """Use case for building the staff follow-up queue."""

    def __init__(self, lead_repository: LeadRepository) -> None:
        """
        Initialize lead queue use case.

        Args:
            lead_repository: Repository for lead opportunities
        """
        self._lead_repository = lead_repository

    async def execute(
        self,
        filter_by: str = "active",
        sort_by: str = "priority",
        query: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> LeadQueue:
        """
        Build the lead queue.

        Args:
            filter_by: 'active', 'overdue' or 'all'
            sort_by: 'priority', 'due_soon' or 'newest'
            query: Optional case-insensitive text matched against title and reason
            now: Reference time for overdue checks

        Returns:
            Lead queue with follow-up counters
        """
        if filter_by not in QUEUE_FILTERS:
            raise ValueError(f"filter_by must be one of {QUEUE_FILTERS}")
        if sort_by not in QUEUE_SORTS:
            raise ValueError(f"sort_by must be one of {QUEUE_SORTS}")

        now = now or datetime.now(timezone.utc)
        leads = await self._lead_repository.list()

        followup_open = sum(1 for lead in leads if lead.status.is_active)
        followup_overdue = sum(1 for lead in leads if lead.is_overdue(now))

        if filter_by == "active":
            leads = [lead for lead in leads if lead.status.is_active]
        elif filter_by == "overdue":
            leads = [lead for lead in leads if lead.is_overdue(now)]

        normalized_query = (query or "").strip().lower()
        if normalized_query:
            leads = [
                lead
                for lead in leads
                if normalized_query in lead.title.lower() or normalized_query in lead.reason.lower()
            ]

        items = [LeadView.from_entity(lead) for lead in order_leads(leads, sort_by)]
        return LeadQueue(
            items=items,
            count=len(items),
            followup_open=followup_open,
            followup_overdue=followup_overdue,
        )
