"""HTTP routes."""

from typing import Literal, Optional

from fastapi import APIRouter, Body, Header, HTTPException, Query, Response, status

from transcript_triage.adapters.inbound.http.schemas import (
    LeadStatusRequest,
    ModelRequest,
    ProcessRequest,
    ProcessResponse,
    TranscriptRequest,
)
from transcript_triage.application.dtos.artifact import ArtifactView
from transcript_triage.application.dtos.audit import AuditRecord
from transcript_triage.application.dtos.generation import (
    LeadGenerationResult,
    SummaryResult,
    WarmupResult,
)
from transcript_triage.application.dtos.lead import LeadQueue, LeadView
from transcript_triage.application.dtos.transcript import (
    TranscriptInput,
    TranscriptPage,
    TranscriptView,
)
from transcript_triage.application.errors import TriageError
from transcript_triage.infrastructure.logging.logger import log_event
from transcript_triage.infrastructure.wiring.dependencies import (
    create_artifact_repository,
    create_audit_sink,
    create_audit_trail,
    create_get_transcript,
    create_ingest_transcript,
    create_lead_queue,
    create_lead_repository,
    create_list_artifacts,
    create_list_transcript_audit,
    create_list_transcripts,
    create_process_transcript,
    create_transcript_ai_pipeline,
    create_transcript_repository,
    create_transition_lead_status,
)

router = APIRouter()

# Shared stores, so every use case sees the same data
_transcript_repository = create_transcript_repository()
_artifact_repository = create_artifact_repository()
_lead_repository = create_lead_repository()
_audit_trail = create_audit_trail(create_audit_sink())

# Create use case instances (wired with dependencies)
_pipeline = create_transcript_ai_pipeline(
    _transcript_repository, _artifact_repository, _lead_repository, _audit_trail
)
_transition_lead_status = create_transition_lead_status(_lead_repository, _audit_trail)
_lead_queue = create_lead_queue(_lead_repository)
_process_transcript = create_process_transcript(
    _transcript_repository, _artifact_repository, _audit_trail
)
_list_artifacts = create_list_artifacts(_artifact_repository)
_ingest_transcript = create_ingest_transcript(_transcript_repository)
_list_transcripts = create_list_transcripts(_transcript_repository)
_get_transcript = create_get_transcript(_transcript_repository, _audit_trail)
_list_transcript_audit = create_list_transcript_audit(_audit_trail)

_ERROR_STATUS = {
    "missing_model": status.HTTP_400_BAD_REQUEST,
    "missing_fields": status.HTTP_400_BAD_REQUEST,
    "model_not_allowed": status.HTTP_400_BAD_REQUEST,
    "invalid_status": status.HTTP_400_BAD_REQUEST,
    "not_found": status.HTTP_404_NOT_FOUND,
    "backend_unavailable": status.HTTP_502_BAD_GATEWAY,
    "storage_error": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _http_error(error: TriageError) -> HTTPException:
    """
    Map an application error to an HTTP error.

    Args:
        error: Application error

    Returns:
        HTTPException whose detail carries the stable error code
    """
    log_event("http", "request_failed", error_code=error.code, message=str(error))
    return HTTPException(
        status_code=_ERROR_STATUS.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR),
        detail={"error": error.code, "message": str(error)},
    )


def _require_model(request: ModelRequest) -> str:
    if not request.model:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "missing_model", "message": "model is required"},
        )
    return request.model


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> dict[str, str]:
    """
    Health check endpoint for liveness/readiness.

    Returns:
        Health status
    """
    return {"status": "ok"}


@router.post("/v1/ai/models/warmup", response_model=WarmupResult)
async def warmup_model(request: ModelRequest) -> WarmupResult:
    """
    Send a trivial prompt so the backend loads the model.

    Args:
        request: Body with the model to warm up

    Returns:
        Warmup result with latency
    """
    model = _require_model(request)
    try:
        return await _pipeline.warmup_model(model)
    except TriageError as e:
        raise _http_error(e) from e


@router.post("/v1/transcripts", response_model=TranscriptView)
async def ingest_transcript(
    response: Response,
    request: Optional[TranscriptRequest] = Body(default=None),
) -> TranscriptView:
    """
    Ingest a redacted transcript, idempotent on idempotency_key.

    Args:
        response: Outgoing response, used to set the status code
        request: Transcript fields

    Returns:
        Stored transcript; 201 when created, 200 when the key was already stored
    """
    payload = TranscriptInput(**request.model_dump()) if request else TranscriptInput()
    try:
        transcript, created = await _ingest_transcript.execute(payload)
    except TriageError as e:
        raise _http_error(e) from e
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return TranscriptView.from_entity(transcript)


@router.get("/v1/transcripts", response_model=TranscriptPage)
async def list_transcripts(
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    source: Optional[str] = None,
    patient_pseudonym: Optional[str] = None,
) -> TranscriptPage:
    """
    List transcripts awaiting review, newest first.

    Args:
        limit: Page size (default 20, max 100)
        offset: Rows to skip
        source: Optional source filter
        patient_pseudonym: Optional pseudonym filter

    Returns:
        One page with has_more and next_offset
    """
    try:
        return await _list_transcripts.execute(
            limit=limit, offset=offset, source=source, patient_pseudonym=patient_pseudonym
        )
    except TriageError as e:
        raise _http_error(e) from e


@router.get("/v1/transcripts/{transcript_id}", response_model=TranscriptView)
async def get_transcript(
    transcript_id: str,
    from_view: Optional[str] = Query(default=None, alias="from"),
    x_actor: Optional[str] = Header(default=None),
) -> TranscriptView:
    try:
        transcript = await _get_transcript.execute(
            transcript_id, actor=x_actor or "system", from_view=from_view
        )
    except TriageError as e:
        raise _http_error(e) from e
    return TranscriptView.from_entity(transcript)


@router.get("/v1/transcripts/{transcript_id}/audit", response_model=list[AuditRecord])
async def list_transcript_audit(transcript_id: str) -> list[AuditRecord]:
    try:
        return await _list_transcript_audit.execute(transcript_id)
    except TriageError as e:
        raise _http_error(e) from e


@router.post("/v1/transcripts/{transcript_id}/ai/summary", response_model=SummaryResult)
async def generate_summary(
    transcript_id: str,
    request: ModelRequest,
    x_actor: Optional[str] = Header(default=None),
) -> SummaryResult:
    """
    Generate a summary artifact, then try to extract a lead from the transcript.

    Args:
        transcript_id: Transcript identifier
        request: Body with the model to use
        x_actor: Acting user identifier (X-Actor header)

    Returns:
        Summary result; lead extraction failures surface as lead_warning
    """
    model = _require_model(request)
    try:
        return await _pipeline.generate_summary(transcript_id, model, actor=x_actor or "system")
    except TriageError as e:
        raise _http_error(e) from e


@router.post("/v1/transcripts/{transcript_id}/ai/leads", response_model=LeadGenerationResult)
async def generate_leads(
    transcript_id: str,
    request: ModelRequest,
    x_actor: Optional[str] = Header(default=None),
) -> LeadGenerationResult:
    model = _require_model(request)
    try:
        return await _pipeline.generate_leads(transcript_id, model, actor=x_actor or "system")
    except TriageError as e:
        raise _http_error(e) from e


@router.post("/v1/transcripts/{transcript_id}/process", response_model=ProcessResponse)
async def process_transcript(
    transcript_id: str,
    request: ProcessRequest,
    x_actor: Optional[str] = Header(default=None),
) -> ProcessResponse:
    """
    Approve a summary artifact and mark the transcript processed.

    Args:
        transcript_id: Transcript identifier
        request: Body with the approved artifact id
        x_actor: Acting user identifier (X-Actor header)

    Returns:
        Processing confirmation
    """
    try:
        await _process_transcript.execute(
            transcript_id, request.artifact_id, actor=x_actor or "system"
        )
    except TriageError as e:
        raise _http_error(e) from e
    return ProcessResponse(transcript_id=transcript_id, artifact_id=request.artifact_id)


@router.get("/v1/transcripts/{transcript_id}/artifacts", response_model=list[ArtifactView])
async def list_artifacts(transcript_id: str) -> list[ArtifactView]:
    try:
        artifacts = await _list_artifacts.execute(transcript_id)
    except TriageError as e:
        raise _http_error(e) from e
    return [ArtifactView.from_entity(artifact) for artifact in artifacts]


@router.post("/v1/leads/{lead_id}/status", response_model=LeadView)
async def update_lead_status(
    lead_id: str,
    request: LeadStatusRequest,
    x_actor: Optional[str] = Header(default=None),
) -> LeadView:
    """
    Move a lead to a new workflow status.

    Args:
        lead_id: Lead identifier
        request: Body with the target status, notes and optional due date
        x_actor: Acting user identifier (X-Actor header)

    Returns:
        Updated lead
    """
    try:
        return await _transition_lead_status.execute(
            lead_id,
            request.status,
            notes=request.notes,
            due_at=request.due_at,
            actor=x_actor or "system",
        )
    except TriageError as e:
        raise _http_error(e) from e


@router.get("/v1/leads/queue", response_model=LeadQueue)
async def lead_queue(
    filter_by: Literal["active", "overdue", "all"] = Query(default="active", alias="filter"),
    sort_by: Literal["priority", "due_soon", "newest"] = Query(default="priority", alias="sort"),
    q: Optional[str] = None,
) -> LeadQueue:
    """
    List leads for staff follow-up.

    Args:
        filter_by: active, overdue or all
        sort_by: priority, due_soon or newest
        q: Case-insensitive search over title and reason

    Returns:
        Lead queue with follow-up counters
    """
    try:
        return await _lead_queue.execute(filter_by=filter_by, sort_by=sort_by, query=q)
    except TriageError as e:
        raise _http_error(e) from e
