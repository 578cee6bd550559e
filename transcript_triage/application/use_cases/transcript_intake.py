"""Transcript ingestion, listing, detail and audit history use cases."""

from typing import Callable, Optional
from uuid import uuid4

from transcript_triage.application.dtos.audit import AuditRecord
from transcript_triage.application.dtos.transcript import (
    TranscriptInput,
    TranscriptListItem,
    TranscriptPage,
)
from transcript_triage.application.errors import MissingFieldsError, NotFoundError
from transcript_triage.application.ports.transcript_repository import TranscriptRepository
from transcript_triage.application.use_cases.audit_trail import AuditTrail
from transcript_triage.domain.entities.transcript import Transcript

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

REQUIRED_FIELDS = ("patient_pseudonym", "source", "text", "idempotency_key")


class IngestTranscript:
    """Use case for storing a redacted transcript exactly once per idempotency key."""

    def __init__(
        self,
        transcript_repository: TranscriptRepository,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize ingest use case.

        Args:
            transcript_repository: Repository for transcripts
            logger: Optional logger function (component, event, **kwargs)
        """
        self._transcript_repository = transcript_repository
        self._logger = logger

    async def execute(self, payload: TranscriptInput) -> tuple[Transcript, bool]:
        """
        Store a transcript, or return the one already stored under its key.

        Args:
            payload: Ingestion fields

        Returns:
            Tuple of (stored transcript, created)

        Raises:
            MissingFieldsError: If a required field is absent or empty
            StorageError: If the store rejects the write
        """
        missing = [name for name in REQUIRED_FIELDS if not getattr(payload, name)]
        if missing:
            raise MissingFieldsError(f"Missing required fields: {', '.join(missing)}")

        transcript, created = await self._transcript_repository.insert_or_get(
            Transcript(
                id=str(uuid4()),
                text=payload.text,
                patient_pseudonym=payload.patient_pseudonym,
                source=payload.source,
                source_ref=payload.source_ref,
                idempotency_key=payload.idempotency_key,
                meta=payload.meta,
            )
        )
        if self._logger:
            self._logger(
                "intake",
                "transcript_ingested" if created else "transcript_replayed",
                transcript_id=transcript.id,
                source=transcript.source,
            )
        return transcript, created


class ListTranscripts:
    """Use case for paging through transcripts still awaiting review."""

    def __init__(self, transcript_repository: TranscriptRepository) -> None:
        self._transcript_repository = transcript_repository

    async def execute(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        source: Optional[str] = None,
        patient_pseudonym: Optional[str] = None,
    ) -> TranscriptPage:
        """
        List unprocessed transcripts, newest first.

        Args:
            limit: Page size; missing or non-positive means 20, capped at 100
            offset: Rows to skip; negative values count as 0
            source: Optional exact source filter
            patient_pseudonym: Optional exact pseudonym filter

        Returns:
            Page with next_offset set when more rows exist
        """
        limit = min(limit, MAX_PAGE_SIZE) if limit and limit > 0 else DEFAULT_PAGE_SIZE
        offset = max(offset or 0, 0)

        # One extra row tells whether another page exists
        transcripts = await self._transcript_repository.list_unprocessed(
            limit + 1,
            offset,
            source=source or None,
            patient_pseudonym=patient_pseudonym or None,
        )
        has_more = len(transcripts) > limit
        return TranscriptPage(
            items=[TranscriptListItem.from_entity(t) for t in transcripts[:limit]],
            limit=limit,
            offset=offset,
            next_offset=offset + limit if has_more else None,
            has_more=has_more,
        )


class GetTranscript:
    """Use case for opening a transcript; every view is audited."""

    def __init__(
        self, transcript_repository: TranscriptRepository, audit_trail: AuditTrail
    ) -> None:
        self._transcript_repository = transcript_repository
        self._audit_trail = audit_trail

    async def execute(
        self, transcript_id: str, actor: str = "system", from_view: Optional[str] = None
    ) -> Transcript:
        """
        Load a transcript and record that it was viewed.

        Args:
            transcript_id: Transcript identifier
            actor: Viewing user identifier
            from_view: Screen the user navigated from, if known

        Returns:
            Transcript entity

        Raises:
            NotFoundError: If the transcript does not exist
        """
        transcript = await self._transcript_repository.get(transcript_id)
        if transcript is None:
            raise NotFoundError(f"Transcript {transcript_id} not found")

        await self._audit_trail.record(
            entity_type="transcript",
            entity_id=transcript.id,
            actor=actor,
            action="transcript.viewed",
            details={"ui": "detail", "from": from_view},
        )
        return transcript


class ListTranscriptAudit:
    """Use case for reading a transcript's audit history."""

    def __init__(self, audit_trail: AuditTrail) -> None:
        self._audit_trail = audit_trail

    async def execute(self, transcript_id: str) -> list[AuditRecord]:
        return await self._audit_trail.list_for_entity("transcript", transcript_id)
