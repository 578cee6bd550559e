"""Generated artifact DTOs."""

from datetime import datetime
from typing import Any, Optional

from transcript_triage.application.dtos.base import DTO
from transcript_triage.domain.entities.generated_artifact import GeneratedArtifact


class ArtifactView(DTO):
    """Read model of a stored artifact."""

    id: str
    transcript_id: str
    kind: str
    model: str
    status: str
    content: str
    metadata: dict[str, Any] = {}
    approved_at: Optional[datetime] = None
    approved_by: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, artifact: GeneratedArtifact) -> "ArtifactView":
        return cls(
            id=artifact.id,
            transcript_id=artifact.transcript_id,
            kind=artifact.kind,
            model=artifact.model,
            status=artifact.status,
            content=artifact.content,
            metadata=dict(artifact.metadata),
            approved_at=artifact.approved_at,
            approved_by=artifact.approved_by,
            created_at=artifact.created_at,
        )
