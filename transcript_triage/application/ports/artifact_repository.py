"""Generated artifact repository port."""

from abc import ABC, abstractmethod
from typing import Optional

from transcript_triage.domain.entities.generated_artifact import GeneratedArtifact


class ArtifactRepository(ABC):
    """Port interface for generated artifact repository."""

    @abstractmethod
    async def insert(self, artifact: GeneratedArtifact) -> GeneratedArtifact:
        """
        Insert a new artifact.

        Args:
            artifact: Artifact entity to insert

        Returns:
            Stored artifact (with its id)
        """
        pass

    @abstractmethod
    async def get(self, artifact_id: str) -> Optional[GeneratedArtifact]:
        """
        Get an artifact by id.

        Args:
            artifact_id: Artifact identifier

        Returns:
            Artifact entity, or None if not found
        """
        pass

    @abstractmethod
    async def list_for_transcript(self, transcript_id: str) -> list[GeneratedArtifact]:
        """
        List artifacts for a transcript, newest first.

        Args:
            transcript_id: Transcript identifier

        Returns:
            List of artifacts
        """
        pass

    @abstractmethod
    async def save(self, artifact: GeneratedArtifact) -> None:
        """
        Persist changes to an existing artifact (approval only).

        Args:
            artifact: Artifact entity to save
        """
        pass
