"""Postgres-backed transcript repository adapter."""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from transcript_triage.application.errors import NotFoundError, StorageError
from transcript_triage.application.ports.transcript_repository import TranscriptRepository
from transcript_triage.domain.entities.transcript import Transcript
from transcript_triage.infrastructure.db import ensure_utc, session_scope
from transcript_triage.infrastructure.logging.logger import logger

from .models import TranscriptModel


class PostgresTranscriptRepository(TranscriptRepository):
    """Postgres implementation of transcript repository."""

    def _model_to_entity(self, model: TranscriptModel) -> Transcript:
        return Transcript(
            id=model.id,
            text=model.redacted_text,
            patient_pseudonym=model.patient_pseudonym,
            source=model.source,
            source_ref=model.source_ref,
            idempotency_key=model.idempotency_key,
            meta=model.meta,
            status=model.status or "new",
            created_at=ensure_utc(model.created_at),
        )

    def _get_by_idempotency_key(self, idempotency_key: str) -> Optional[Transcript]:
        with session_scope(f"get transcript by idempotency key {idempotency_key}") as db:
            model = (
                db.query(TranscriptModel)
                .filter(TranscriptModel.idempotency_key == idempotency_key)
                .first()
            )
            if model is None:
                return None
            return self._model_to_entity(model)

    async def insert_or_get(self, transcript: Transcript) -> tuple[Transcript, bool]:
        """
        Insert a transcript unless its idempotency key is already stored.

        Args:
            transcript: Transcript to insert

        Returns:
            Tuple of (stored transcript, created)

        Raises:
            StorageError: If the insert or the lookup fails
        """
        if transcript.idempotency_key is not None:
            existing = self._get_by_idempotency_key(transcript.idempotency_key)
            if existing is not None:
                return existing, False

        try:
            with session_scope(f"insert transcript {transcript.id}") as db:
                db.add(
                    TranscriptModel(
                        id=transcript.id,
                        patient_pseudonym=transcript.patient_pseudonym,
                        source=transcript.source,
                        source_ref=transcript.source_ref,
                        idempotency_key=transcript.idempotency_key,
                        redacted_text=transcript.text,
                        status=transcript.status,
                        meta=transcript.meta,
                        created_at=transcript.created_at,
                    )
                )
        except StorageError as e:
            if transcript.idempotency_key is None or not isinstance(e.__cause__, IntegrityError):
                raise
            # A concurrent request stored the same key first
            existing = self._get_by_idempotency_key(transcript.idempotency_key)
            if existing is None:
                raise
            logger.info(f"Idempotent transcript insert resolved to {existing.id}")
            return existing, False

        return transcript, True

    async def get(self, transcript_id: str) -> Optional[Transcript]:
        """
        Get a transcript by id.

        Args:
            transcript_id: Transcript identifier

        Returns:
            Transcript entity, or None if not found

        Raises:
            StorageError: If the query fails
        """
        with session_scope(f"get transcript {transcript_id}") as db:
            model = db.get(TranscriptModel, transcript_id)
            if model is None:
                return None
            return self._model_to_entity(model)

    async def list_unprocessed(
        self,
        limit: int,
        offset: int = 0,
        source: Optional[str] = None,
        patient_pseudonym: Optional[str] = None,
    ) -> list[Transcript]:
        with session_scope("list unprocessed transcripts") as db:
            query = db.query(TranscriptModel).filter(
                or_(TranscriptModel.status.is_(None), TranscriptModel.status != "processed")
            )
            if source:
                query = query.filter(TranscriptModel.source == source)
            if patient_pseudonym:
                query = query.filter(TranscriptModel.patient_pseudonym == patient_pseudonym)
            models = (
                query.order_by(TranscriptModel.created_at.desc(), TranscriptModel.id)
                .offset(offset)
                .limit(limit)
                .all()
            )
            return [self._model_to_entity(model) for model in models]

    async def mark_processed(self, transcript_id: str) -> None:
        """
        Mark a transcript as processed.

        Args:
            transcript_id: Transcript identifier

        Raises:
            NotFoundError: If the transcript does not exist
            StorageError: If the update fails
        """
        with session_scope(f"mark transcript {transcript_id} processed") as db:
            model = db.get(TranscriptModel, transcript_id)
            if model is None:
                raise NotFoundError(f"Transcript {transcript_id} not found")
            model.status = "processed"
