"""Generated artifact entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import uuid4

SUMMARY_KIND = "summary"


@dataclass
class GeneratedArtifact:
    """Persisted output of one model invocation."""

    transcript_id: str
    model: str
    content: str
    kind: str = SUMMARY_KIND
    status: str = "generated"  # generated -> approved
    metadata: dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=lambda: str(uuid4()))
    approved_at: Optional[datetime] = None
    approved_by: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def approve(self, approved_by: Optional[str]) -> None:
        """
        Mark the artifact as approved by staff.

        Args:
            approved_by: Identifier of the approving actor
        """
        self.status = "approved"
        self.approved_at = datetime.now(timezone.utc)
        self.approved_by = approved_by
