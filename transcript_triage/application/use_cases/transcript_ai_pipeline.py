"""Transcript AI pipeline: summaries, lead extraction and model warmup."""

import logging
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, Optional, TypeVar

from transcript_triage.application.dtos.generation import (
    LeadGenerationResult,
    SummaryResult,
    WarmupResult,
)
from transcript_triage.application.errors import LLMUnavailableError, NotFoundError, TriageError
from transcript_triage.application.ports.artifact_repository import ArtifactRepository
from transcript_triage.application.ports.generation_lock import GenerationLock
from transcript_triage.application.ports.lead_repository import LeadRepository
from transcript_triage.application.ports.llm_client import LLMClient
from transcript_triage.application.ports.transcript_repository import TranscriptRepository
from transcript_triage.application.use_cases.audit_trail import AuditTrail
from transcript_triage.application.use_cases.normalize_lead_drafts import normalize_lead_drafts
from transcript_triage.application.use_cases.prompt_builder import (
    WARMUP_PROMPT,
    PromptTask,
    build_prompt,
)
from transcript_triage.application.use_cases.response_parser import (
    parse_leads_response,
    parse_summary_response,
)
from transcript_triage.domain.entities.generated_artifact import GeneratedArtifact
from transcript_triage.domain.entities.lead_opportunity import LeadOpportunity
from transcript_triage.domain.entities.transcript import Transcript
from transcript_triage.domain.value_objects.allowed_model import AllowedModel
from transcript_triage.domain.value_objects.lead_status import LeadStatus

REGENERATION_POLICIES = ("overwrite", "preserve_active")
LEAD_EXTRACTION_FAILED = "lead_extraction_failed"

T = TypeVar("T")


class TranscriptAIPipeline:
    """Use case sequencing prompt -> backend -> parse -> normalize -> persist."""

    def __init__(
        self,
        llm_client: LLMClient,
        transcript_repository: TranscriptRepository,
        artifact_repository: ArtifactRepository,
        lead_repository: LeadRepository,
        audit_trail: AuditTrail,
        generation_lock: GenerationLock,
        generation_timeout_seconds: float = 30.0,
        warmup_timeout_seconds: float = 60.0,
        regeneration_policy: str = "overwrite",
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize the pipeline.

        Args:
            llm_client: Text-generation backend
            transcript_repository: Repository for transcripts
            artifact_repository: Repository for generated artifacts
            lead_repository: Repository for lead opportunities
            audit_trail: Audit trail
            generation_lock: Per-transcript lock around lead upserts
            generation_timeout_seconds: Timeout for summary and lead calls
            warmup_timeout_seconds: Timeout for warmup calls
            regeneration_policy: 'overwrite' replaces any existing lead;
                'preserve_active' keeps a lead whose status is not open
            logger: Optional logger function (component, event, **kwargs)
        """
        if regeneration_policy not in REGENERATION_POLICIES:
            raise ValueError(f"regeneration_policy must be one of {REGENERATION_POLICIES}")

        self._llm_client = llm_client
        self._transcript_repository = transcript_repository
        self._artifact_repository = artifact_repository
        self._lead_repository = lead_repository
        self._audit_trail = audit_trail
        self._generation_lock = generation_lock
        self._generation_timeout = generation_timeout_seconds
        self._warmup_timeout = warmup_timeout_seconds
        self._regeneration_policy = regeneration_policy
        self._logger = logger

    def _log(self, component: str, event: str, **kwargs: Any) -> None:
        if self._logger:
            self._logger(component, event, **kwargs)

    async def generate_summary(
        self, transcript_id: str, model: str, actor: str = "system"
    ) -> SummaryResult:
        """
        Generate and store a summary, then try to extract a lead.

        Args:
            transcript_id: Transcript identifier
            model: Requested model identifier
            actor: Acting user identifier

        Returns:
            Summary result with the secondary lead count

        Raises:
            ModelNotAllowedError: If model is not allow-listed
            NotFoundError: If the transcript does not exist
            LLMUnavailableError: If the backend call fails
            StorageError: If the artifact cannot be stored
        """
        allowed_model = AllowedModel(model)
        transcript = await self._load_transcript(transcript_id)

        raw_text, latency_ms = await self._generate(
            transcript.id,
            allowed_model,
            PromptTask.SUMMARIZE.value,
            build_prompt(PromptTask.SUMMARIZE, transcript.text),
            self._generation_timeout,
        )
        content = parse_summary_response(raw_text)

        artifact = await self._artifact_repository.insert(
            GeneratedArtifact(
                transcript_id=transcript.id,
                model=allowed_model.name,
                content=content,
                metadata={"latency_ms": latency_ms},
            )
        )
        await self._audit_trail.record(
            entity_type="transcript",
            entity_id=transcript.id,
            actor=actor,
            action="ai.summary_generated",
            details={"model": allowed_model.name, "artifact_id": artifact.id},
        )
        self._log(
            "pipeline",
            "summary_generated",
            transcript_id=transcript.id,
            artifact_id=artifact.id,
            model=allowed_model.name,
        )

        try:
            leads = await self._extract_leads(
                transcript, allowed_model, origin="ai_summary", source_artifact_id=artifact.id
            )
        except Exception as e:
            # The summary is already stored; lead extraction must not fail it
            warning = e.code if isinstance(e, TriageError) else LEAD_EXTRACTION_FAILED
            self._log(
                "pipeline",
                "secondary_lead_extraction_failed",
                level=logging.WARNING,
                transcript_id=transcript.id,
                error_code=warning,
                error_type=type(e).__name__,
                error=str(e),
            )
            leads = LeadGenerationResult(
                transcript_id=transcript.id,
                model=allowed_model.name,
                lead_count=0,
                warning=warning,
            )

        return SummaryResult(
            artifact_id=artifact.id,
            transcript_id=transcript.id,
            model=allowed_model.name,
            content=content,
            latency_ms=latency_ms,
            lead_count=leads.lead_count,
            lead_warning=leads.warning,
        )

    async def generate_leads(
        self, transcript_id: str, model: str, actor: str = "system"
    ) -> LeadGenerationResult:
        """
        Extract and upsert a lead without creating a summary artifact.

        Args:
            transcript_id: Transcript identifier
            model: Requested model identifier
            actor: Acting user identifier

        Returns:
            Lead generation result (lead_count is 0 or 1)

        Raises:
            ModelNotAllowedError: If model is not allow-listed
            NotFoundError: If the transcript does not exist
            LLMUnavailableError: If the backend call fails
            StorageError: If the lead cannot be stored
        """
        allowed_model = AllowedModel(model)
        transcript = await self._load_transcript(transcript_id)

        result = await self._extract_leads(
            transcript, allowed_model, origin="manual", source_artifact_id=None
        )

        await self._audit_trail.record(
            entity_type="transcript",
            entity_id=transcript.id,
            actor=actor,
            action="ai.leads_generated",
            details={
                "model": allowed_model.name,
                "lead_count": result.lead_count,
                "lead_id": result.lead_id,
                "trigger": "manual",
            },
        )
        return result

    async def warmup_model(self, model: str) -> WarmupResult:
        """
        Check that the backend can serve a model.

        Args:
            model: Requested model identifier

        Returns:
            Warmup result

        Raises:
            ModelNotAllowedError: If model is not allow-listed
            LLMUnavailableError: If the backend call fails
        """
        allowed_model = AllowedModel(model)
        _, latency_ms = await self._call_backend(
            None,
            allowed_model,
            "warmup",
            self._llm_client.warmup(allowed_model.name, WARMUP_PROMPT, self._warmup_timeout),
        )
        self._log("pipeline", "model_warmed", model=allowed_model.name, latency_ms=latency_ms)
        return WarmupResult(model=allowed_model.name, ok=True, latency_ms=latency_ms)

    async def _load_transcript(self, transcript_id: str) -> Transcript:
        transcript = await self._transcript_repository.get(transcript_id)
        if transcript is None:
            raise NotFoundError(f"Transcript {transcript_id} not found")
        return transcript

    async def _generate(
        self,
        transcript_id: Optional[str],
        model: AllowedModel,
        task: str,
        prompt: str,
        timeout_seconds: float,
    ) -> tuple[str, int]:
        """
        Call the backend once, without retries.

        Returns:
            Tuple of (raw_text, latency_ms)
        """
        return await self._call_backend(
            transcript_id,
            model,
            task,
            self._llm_client.generate(model.name, prompt, timeout_seconds),
        )

    async def _call_backend(
        self,
        transcript_id: Optional[str],
        model: AllowedModel,
        task: str,
        call: Awaitable[T],
    ) -> tuple[T, int]:
        """Await a backend call, logging model, task, latency and outcome."""
        start = time.perf_counter()
        try:
            result = await call
        except LLMUnavailableError:
            self._log(
                "llm",
                "generation",
                level=logging.WARNING,
                transcript_id=transcript_id,
                model=model.name,
                task=task,
                latency_ms=int((time.perf_counter() - start) * 1000),
                outcome="unavailable",
            )
            raise
        latency_ms = int((time.perf_counter() - start) * 1000)
        self._log(
            "llm",
            "generation",
            transcript_id=transcript_id,
            model=model.name,
            task=task,
            latency_ms=latency_ms,
            outcome="ok",
        )
        return result, latency_ms

    async def _extract_leads(
        self,
        transcript: Transcript,
        model: AllowedModel,
        origin: str,
        source_artifact_id: Optional[str],
    ) -> LeadGenerationResult:
        raw_text, latency_ms = await self._generate(
            transcript.id,
            model,
            PromptTask.EXTRACT_LEADS.value,
            build_prompt(PromptTask.EXTRACT_LEADS, transcript.text),
            self._generation_timeout,
        )
        drafts = normalize_lead_drafts(parse_leads_response(raw_text))
        if not drafts:
            return LeadGenerationResult(
                transcript_id=transcript.id,
                model=model.name,
                lead_count=0,
                latency_ms=latency_ms,
            )

        draft = drafts[0]
        lead = LeadOpportunity(
            transcript_id=transcript.id,
            model=model.name,
            title=draft.title,
            reason=draft.reason,
            next_action=draft.next_action,
            lead_score=draft.lead_score,
            source_artifact_id=source_artifact_id,
            due_at=datetime.now(timezone.utc) + timedelta(days=draft.due_in_days),
            metadata={
                "origin": origin,
                "model": model.name,
                "latency_ms": latency_ms,
                "outreach_channel": draft.outreach_channel,
                "due_in_days": draft.due_in_days,
            },
        )

        async with self._generation_lock.hold(transcript.id):
            if self._regeneration_policy == "preserve_active":
                existing = await self._lead_repository.get_by_transcript(transcript.id)
                if existing is not None and existing.status is not LeadStatus.OPEN:
                    self._log(
                        "pipeline",
                        "lead_regeneration_skipped",
                        transcript_id=transcript.id,
                        lead_id=existing.id,
                        status=existing.status.value,
                    )
                    return LeadGenerationResult(
                        transcript_id=transcript.id,
                        model=model.name,
                        lead_count=0,
                        lead_id=existing.id,
                        latency_ms=latency_ms,
                        warning="lead_workflow_in_progress",
                    )
            stored = await self._lead_repository.upsert(lead)

        self._log(
            "pipeline",
            "lead_upserted",
            transcript_id=transcript.id,
            lead_id=stored.id,
            origin=origin,
            lead_score=stored.lead_score,
        )
        return LeadGenerationResult(
            transcript_id=transcript.id,
            model=model.name,
            lead_count=1,
            lead_id=stored.id,
            latency_ms=latency_ms,
        )
