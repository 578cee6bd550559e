"""Audit DTOs."""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import Field

from transcript_triage.application.dtos.base import DTO


class AuditRecord(DTO):
    """One audit trail entry."""

    entity_type: str  # transcript, lead
    entity_id: str
    actor: str
    action: str  # e.g. 'ai.summary_generated', 'lead.status_updated'
    details: Optional[dict[str, Any]] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
