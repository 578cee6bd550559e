"""Lead opportunity repository adapters."""

from transcript_triage.adapters.outbound.lead.lead_repository import InMemoryLeadRepository
from transcript_triage.adapters.outbound.lead.postgres_lead_repository import (
    PostgresLeadRepository,
)

__all__ = [
    "InMemoryLeadRepository",
    "PostgresLeadRepository",
]
