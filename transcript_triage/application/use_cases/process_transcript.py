"""Summary approval and artifact listing use cases."""

from typing import Callable, Optional

from transcript_triage.application.errors import NotFoundError
from transcript_triage.application.ports.artifact_repository import ArtifactRepository
from transcript_triage.application.ports.transcript_repository import TranscriptRepository
from transcript_triage.application.use_cases.audit_trail import AuditTrail
from transcript_triage.domain.entities.generated_artifact import SUMMARY_KIND, GeneratedArtifact


class ProcessTranscript:
    """Use case for approving a summary and closing out its transcript."""

    def __init__(
        self,
        transcript_repository: TranscriptRepository,
        artifact_repository: ArtifactRepository,
        audit_trail: AuditTrail,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize process transcript use case.

        Args:
            transcript_repository: Repository for transcripts
            artifact_repository: Repository for generated artifacts
            audit_trail: Audit trail
            logger: Optional logger function (component, event, **kwargs)
        """
        self._transcript_repository = transcript_repository
        self._artifact_repository = artifact_repository
        self._audit_trail = audit_trail
        self._logger = logger

    async def execute(self, transcript_id: str, artifact_id: str, actor: str = "system") -> None:
        """
        Approve a summary artifact and mark its transcript processed.

        Args:
            transcript_id: Transcript identifier
            artifact_id: Summary artifact identifier
            actor: Approving user identifier

        Raises:
            NotFoundError: If the artifact is missing, is not a summary, or
                belongs to another transcript
        """
        artifact = await self._artifact_repository.get(artifact_id)
        if (
            artifact is None
            or artifact.transcript_id != transcript_id
            or artifact.kind != SUMMARY_KIND
        ):
            raise NotFoundError(f"Summary {artifact_id} not found for transcript {transcript_id}")

        artifact.approve(actor)
        await self._artifact_repository.save(artifact)
        await self._transcript_repository.mark_processed(transcript_id)

        await self._audit_trail.record(
            entity_type="transcript",
            entity_id=transcript_id,
            actor=actor,
            action="transcript.processed",
            details={"artifact_id": artifact.id, "model": artifact.model},
        )
        if self._logger:
            self._logger(
                "pipeline",
                "transcript_processed",
                transcript_id=transcript_id,
                artifact_id=artifact.id,
            )


class ListTranscriptArtifacts:
    """Use case for listing the artifacts of a transcript."""

    def __init__(self, artifact_repository: ArtifactRepository) -> None:
        self._artifact_repository = artifact_repository

    async def execute(self, transcript_id: str) -> list[GeneratedArtifact]:
        return await self._artifact_repository.list_for_transcript(transcript_id)
