"""Unit tests for Postgres artifact repository using SQLite in-memory."""

from datetime import timedelta

import pytest

from transcript_triage.adapters.outbound.artifact.postgres_artifact_repository import (
    PostgresArtifactRepository,
)
from transcript_triage.application.errors import NotFoundError
from transcript_triage.domain.entities.generated_artifact import GeneratedArtifact


@pytest.fixture
def repository(db_session_factory):
    return PostgresArtifactRepository()


@pytest.mark.asyncio
async def test_insert_and_get_round_trip(repository):
    artifact = GeneratedArtifact(
        transcript_id="t-1",
        model="qwen2.5:1.5b",
        content="Patient reports improvement.",
        metadata={"latency_ms": 812},
    )

    await repository.insert(artifact)
    fetched = await repository.get(artifact.id)

    assert fetched.content == "Patient reports improvement."
    assert fetched.kind == "summary"
    assert fetched.status == "generated"
    assert fetched.metadata == {"latency_ms": 812}
    assert fetched.created_at == artifact.created_at


@pytest.mark.asyncio
async def test_list_for_transcript_newest_first(repository):
    """Test that listing is scoped to one transcript and ordered newest first."""
    older = GeneratedArtifact(transcript_id="t-1", model="llama3.2:1b", content="first")
    newer = GeneratedArtifact(transcript_id="t-1", model="llama3.2:1b", content="second")
    newer.created_at = older.created_at + timedelta(minutes=5)
    other = GeneratedArtifact(transcript_id="t-2", model="llama3.2:1b", content="other")
    for artifact in (older, newer, other):
        await repository.insert(artifact)

    artifacts = await repository.list_for_transcript("t-1")

    assert [artifact.content for artifact in artifacts] == ["second", "first"]


@pytest.mark.asyncio
async def test_save_persists_approval(repository):
    artifact = await repository.insert(
        GeneratedArtifact(transcript_id="t-1", model="llama3.2:1b", content="Stable.")
    )
    artifact.approve("dr-lee")

    await repository.save(artifact)

    fetched = await repository.get(artifact.id)
    assert fetched.status == "approved"
    assert fetched.approved_by == "dr-lee"
    assert fetched.approved_at == artifact.approved_at


@pytest.mark.asyncio
async def test_save_unknown_artifact_raises_not_found(repository):
    artifact = GeneratedArtifact(transcript_id="t-1", model="llama3.2:1b", content="x")

    with pytest.raises(NotFoundError):
        await repository.save(artifact)
