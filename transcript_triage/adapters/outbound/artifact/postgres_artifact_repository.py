"""Postgres-backed generated artifact repository adapter."""

from typing import Optional

from transcript_triage.application.errors import NotFoundError
from transcript_triage.application.ports.artifact_repository import ArtifactRepository
from transcript_triage.domain.entities.generated_artifact import GeneratedArtifact
from transcript_triage.infrastructure.db import ensure_utc, session_scope

from .models import ArtifactModel


class PostgresArtifactRepository(ArtifactRepository):
    """Postgres implementation of generated artifact repository."""

    def _model_to_entity(self, model: ArtifactModel) -> GeneratedArtifact:
        """
        Convert ArtifactModel to GeneratedArtifact entity.

        Args:
            model: SQLAlchemy model instance

        Returns:
            GeneratedArtifact entity
        """
        return GeneratedArtifact(
            id=model.id,
            transcript_id=model.transcript_id,
            kind=model.artifact_type,
            model=model.model,
            status=model.status,
            content=model.content,
            metadata=dict(model.meta or {}),
            approved_at=ensure_utc(model.approved_at),
            approved_by=model.approved_by,
            created_at=ensure_utc(model.created_at),
        )

    async def insert(self, artifact: GeneratedArtifact) -> GeneratedArtifact:
        """
        Insert a new artifact.

        Args:
            artifact: Artifact entity

        Returns:
            The stored artifact

        Raises:
            StorageError: If the insert fails
        """
        with session_scope(f"insert artifact for transcript {artifact.transcript_id}") as db:
            db.add(
                ArtifactModel(
                    id=artifact.id,
                    transcript_id=artifact.transcript_id,
                    artifact_type=artifact.kind,
                    model=artifact.model,
                    status=artifact.status,
                    content=artifact.content,
                    meta=dict(artifact.metadata),
                    approved_at=artifact.approved_at,
                    approved_by=artifact.approved_by,
                    created_at=artifact.created_at,
                )
            )
        return artifact

    async def get(self, artifact_id: str) -> Optional[GeneratedArtifact]:
        with session_scope(f"get artifact {artifact_id}") as db:
            model = db.get(ArtifactModel, artifact_id)
            if model is None:
                return None
            return self._model_to_entity(model)

    async def list_for_transcript(self, transcript_id: str) -> list[GeneratedArtifact]:
        with session_scope(f"list artifacts for transcript {transcript_id}") as db:
            models = (
                db.query(ArtifactModel)
                .filter(ArtifactModel.transcript_id == transcript_id)
                .order_by(ArtifactModel.created_at.desc())
                .all()
            )
            return [self._model_to_entity(model) for model in models]

    async def save(self, artifact: GeneratedArtifact) -> None:
        """
        Persist the approval fields of an artifact.

        Args:
            artifact: Artifact entity

        Raises:
            NotFoundError: If the artifact does not exist
            StorageError: If the update fails
        """
        with session_scope(f"save artifact {artifact.id}") as db:
            model = db.get(ArtifactModel, artifact.id)
            if model is None:
                raise NotFoundError(f"Artifact {artifact.id} not found")
            model.status = artifact.status
            model.approved_at = artifact.approved_at
            model.approved_by = artifact.approved_by
