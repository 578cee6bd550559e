"""Dependency injection factory functions."""

from transcript_triage.adapters.outbound.artifact import (
    InMemoryArtifactRepository,
    PostgresArtifactRepository,
)
from transcript_triage.adapters.outbound.audit import InMemoryAuditSink, PostgresAuditSink
from transcript_triage.adapters.outbound.generation_lock import (
    InMemoryGenerationLock,
    NoOpGenerationLock,
    RedisGenerationLock,
)
from transcript_triage.adapters.outbound.lead import (
    InMemoryLeadRepository,
    PostgresLeadRepository,
)
from transcript_triage.adapters.outbound.llm.ollama_llm_client import OllamaLLMClient
from transcript_triage.adapters.outbound.llm.openai_llm_client import OpenAILLMClient
from transcript_triage.adapters.outbound.transcript import (
    InMemoryTranscriptRepository,
    PostgresTranscriptRepository,
)
from transcript_triage.application.ports.artifact_repository import ArtifactRepository
from transcript_triage.application.ports.audit_sink import AuditSink
from transcript_triage.application.ports.generation_lock import GenerationLock
from transcript_triage.application.ports.lead_repository import LeadRepository
from transcript_triage.application.ports.llm_client import LLMClient
from transcript_triage.application.ports.transcript_repository import TranscriptRepository
from transcript_triage.application.use_cases.audit_trail import AuditTrail
from transcript_triage.application.use_cases.lead_queue import ListLeadQueue
from transcript_triage.application.use_cases.process_transcript import (
    ListTranscriptArtifacts,
    ProcessTranscript,
)
from transcript_triage.application.use_cases.transcript_ai_pipeline import TranscriptAIPipeline
from transcript_triage.application.use_cases.transcript_intake import (
    GetTranscript,
    IngestTranscript,
    ListTranscriptAudit,
    ListTranscripts,
)
from transcript_triage.application.use_cases.transition_lead_status import (
    TransitionLeadStatus,
)
from transcript_triage.infrastructure.config.settings import settings
from transcript_triage.infrastructure.logging.logger import log_event


def _use_postgres() -> bool:
    if settings.repository_backend == "postgres":
        if not settings.database_url:
            raise ValueError("DATABASE_URL is required when REPOSITORY_BACKEND=postgres")
        return True
    return False


def create_llm_client() -> LLMClient:
    """
    Factory function to create the text-generation backend client.

    Returns:
        LLMClient instance (Ollama or OpenAI-compatible)
    """
    if settings.llm_backend == "openai":
        return OpenAILLMClient()
    if settings.llm_backend == "ollama":
        return OllamaLLMClient()
    raise ValueError(f"Unsupported LLM_BACKEND: {settings.llm_backend}")


def create_transcript_repository() -> TranscriptRepository:
    """
    Factory function to create transcript repository.

    Returns:
        TranscriptRepository instance
    """
    if _use_postgres():
        return PostgresTranscriptRepository()
    return InMemoryTranscriptRepository()


def create_artifact_repository() -> ArtifactRepository:
    """
    Factory function to create generated artifact repository.

    Returns:
        ArtifactRepository instance
    """
    if _use_postgres():
        return PostgresArtifactRepository()
    return InMemoryArtifactRepository()


def create_lead_repository() -> LeadRepository:
    """
    Factory function to create lead opportunity repository.

    Returns:
        LeadRepository instance
    """
    if _use_postgres():
        return PostgresLeadRepository()
    return InMemoryLeadRepository()


def create_audit_sink() -> AuditSink:
    if _use_postgres():
        return PostgresAuditSink()
    return InMemoryAuditSink()


def create_generation_lock() -> GenerationLock:
    """
    Factory function to create the per-transcript generation lock.

    Returns:
        GenerationLock instance (Redis, in-memory or NoOp)
    """
    if settings.generation_lock_backend == "redis":
        if not settings.redis_url:
            raise ValueError("REDIS_URL is required when GENERATION_LOCK_BACKEND=redis")
        return RedisGenerationLock(
            settings.redis_url, ttl_seconds=settings.generation_lock_ttl_seconds
        )
    if settings.generation_lock_backend == "none":
        return NoOpGenerationLock()
    return InMemoryGenerationLock()


def create_audit_trail(audit_sink: AuditSink) -> AuditTrail:
    return AuditTrail(audit_sink, logger=log_event)


def create_transcript_ai_pipeline(
    transcript_repository: TranscriptRepository,
    artifact_repository: ArtifactRepository,
    lead_repository: LeadRepository,
    audit_trail: AuditTrail,
) -> TranscriptAIPipeline:
    """
    Factory function to create TranscriptAIPipeline with dependencies.

    Repositories are passed in so every use case shares the same stores.

    Returns:
        TranscriptAIPipeline instance
    """
    return TranscriptAIPipeline(
        create_llm_client(),
        transcript_repository,
        artifact_repository,
        lead_repository,
        audit_trail,
        create_generation_lock(),
        generation_timeout_seconds=settings.generation_timeout_seconds,
        warmup_timeout_seconds=settings.warmup_timeout_seconds,
        regeneration_policy=settings.lead_regeneration_policy,
        logger=log_event,
    )


def create_transition_lead_status(
    lead_repository: LeadRepository, audit_trail: AuditTrail
) -> TransitionLeadStatus:
    return TransitionLeadStatus(lead_repository, audit_trail, logger=log_event)


def create_lead_queue(lead_repository: LeadRepository) -> ListLeadQueue:
    return ListLeadQueue(lead_repository)


def create_process_transcript(
    transcript_repository: TranscriptRepository,
    artifact_repository: ArtifactRepository,
    audit_trail: AuditTrail,
) -> ProcessTranscript:
    return ProcessTranscript(
        transcript_repository, artifact_repository, audit_trail, logger=log_event
    )


def create_list_artifacts(artifact_repository: ArtifactRepository) -> ListTranscriptArtifacts:
    return ListTranscriptArtifacts(artifact_repository)


def create_ingest_transcript(transcript_repository: TranscriptRepository) -> IngestTranscript:
    return IngestTranscript(transcript_repository, logger=log_event)


def create_list_transcripts(transcript_repository: TranscriptRepository) -> ListTranscripts:
    return ListTranscripts(transcript_repository)


def create_get_transcript(
    transcript_repository: TranscriptRepository, audit_trail: AuditTrail
) -> GetTranscript:
    return GetTranscript(transcript_repository, audit_trail)


def create_list_transcript_audit(audit_trail: AuditTrail) -> ListTranscriptAudit:
    return ListTranscriptAudit(audit_trail)
