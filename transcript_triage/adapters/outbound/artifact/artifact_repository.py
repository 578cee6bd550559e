"""In-memory generated artifact repository adapter."""

from typing import Optional

from transcript_triage.application.errors import NotFoundError
from transcript_triage.application.ports.artifact_repository import ArtifactRepository
from transcript_triage.domain.entities.generated_artifact import GeneratedArtifact


class InMemoryArtifactRepository(ArtifactRepository):
    """In-memory implementation of generated artifact repository."""

    def __init__(self) -> None:
        """Initialize in-memory repository."""
        self._storage: dict[str, GeneratedArtifact] = {}

    async def insert(self, artifact: GeneratedArtifact) -> GeneratedArtifact:
        self._storage[artifact.id] = artifact
        return artifact

    async def get(self, artifact_id: str) -> Optional[GeneratedArtifact]:
        return self._storage.get(artifact_id)

    async def list_for_transcript(self, transcript_id: str) -> list[GeneratedArtifact]:
        artifacts = [
            artifact
            for artifact in self._storage.values()
            if artifact.transcript_id == transcript_id
        ]
        return sorted(artifacts, key=lambda artifact: artifact.created_at, reverse=True)

    async def save(self, artifact: GeneratedArtifact) -> None:
        if artifact.id not in self._storage:
            raise NotFoundError(f"Artifact {artifact.id} not found")
        self._storage[artifact.id] = artifact
