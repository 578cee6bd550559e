"""Generated artifact repository adapters."""

from transcript_triage.adapters.outbound.artifact.artifact_repository import (
    InMemoryArtifactRepository,
)
from transcript_triage.adapters.outbound.artifact.postgres_artifact_repository import (
    PostgresArtifactRepository,
)

__all__ = [
    "InMemoryArtifactRepository",
    "PostgresArtifactRepository",
]
