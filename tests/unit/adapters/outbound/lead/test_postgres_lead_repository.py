"""Unit tests for Postgres lead repository using SQLite in-memory."""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest
from sqlalchemy.exc import OperationalError

from transcript_triage.adapters.outbound.lead.postgres_lead_repository import (
    PostgresLeadRepository,
)
from transcript_triage.application.errors import NotFoundError, StorageError
from transcript_triage.domain.entities.lead_opportunity import LeadOpportunity
from transcript_triage.domain.value_objects.lead_status import LeadStatus


@pytest.fixture
def repository(db_session_factory):
    return PostgresLeadRepository()


def _lead(transcript_id="t-1", **overrides) -> LeadOpportunity:
    fields = {
        "transcript_id": transcript_id,
        "model": "qwen2.5:1.5b",
        "title": "Sleep follow-up",
        "reason": "Patient still wakes at 3am",
        "next_action": "Call to check in; share slots only if they confirm.",
        "lead_score": 0.8,
        "due_at": datetime(2026, 10, 20, 9, 0, tzinfo=timezone.utc),
        "metadata": {"origin": "manual", "outreach_channel": "call"},
    }
    fields.update(overrides)
    return LeadOpportunity(**fields)


@pytest.mark.asyncio
async def test_upsert_and_get_round_trip(repository):
    """Test that an inserted lead reads back with UTC datetimes and its metadata."""
    lead = _lead()

    stored = await repository.upsert(lead)
    fetched = await repository.get(stored.id)

    assert fetched.id == lead.id
    assert fetched.title == "Sleep follow-up"
    assert fetched.status is LeadStatus.OPEN
    assert fetched.due_at == lead.due_at
    assert fetched.created_at.tzinfo is not None
    assert fetched.metadata == {"origin": "manual", "outreach_channel": "call"}


@pytest.mark.asyncio
async def test_upsert_overwrites_existing_row_for_transcript(repository):
    """Test that regenerating for the same transcript keeps one row."""
    first = await repository.upsert(_lead())
    await repository.update(
        first.id,
        {
            "status": LeadStatus.CONTACTED,
            "notes": "Left voicemail",
            "last_contacted_at": datetime(2026, 10, 18, tzinfo=timezone.utc),
        },
    )

    second = await repository.upsert(
        _lead(title="Medication check-in", lead_score=0.3, metadata={"origin": "ai_summary"})
    )

    leads = await repository.list()
    assert len(leads) == 1
    assert second.id == first.id
    assert leads[0].title == "Medication check-in"
    assert leads[0].lead_score == 0.3
    assert leads[0].status is LeadStatus.OPEN
    assert leads[0].notes == "Left voicemail"
    assert leads[0].last_contacted_at == datetime(2026, 10, 18, tzinfo=timezone.utc)
    assert leads[0].metadata == {"origin": "ai_summary"}


@pytest.mark.asyncio
async def test_get_by_transcript(repository):
    await repository.upsert(_lead("t-1"))
    await repository.upsert(_lead("t-2", title="Other"))

    lead = await repository.get_by_transcript("t-2")

    assert lead.title == "Other"
    assert await repository.get_by_transcript("t-3") is None


@pytest.mark.asyncio
async def test_update_applies_patch(repository):
    stored = await repository.upsert(_lead())
    new_due = datetime.now(timezone.utc) + timedelta(days=4)

    await repository.update(
        stored.id, {"status": LeadStatus.QUALIFIED, "notes": None, "due_at": new_due}
    )

    lead = await repository.get(stored.id)
    assert lead.status is LeadStatus.QUALIFIED
    assert lead.notes is None
    assert lead.due_at == new_due


@pytest.mark.asyncio
async def test_update_missing_lead_raises_not_found(repository):
    with pytest.raises(NotFoundError):
        await repository.update("missing", {"status": LeadStatus.OPEN})


@pytest.mark.asyncio
async def test_get_missing_returns_none(repository):
    assert await repository.get("missing") is None


@pytest.mark.asyncio
async def test_database_error_raises_storage_error(monkeypatch):
    """Test that SQLAlchemy errors are translated and the session is closed."""
    session = Mock()
    session.get.side_effect = OperationalError("SELECT", {}, Exception("database is down"))
    monkeypatch.setattr("transcript_triage.infrastructure.db.get_db_session", lambda: session)

    with pytest.raises(StorageError) as exc_info:
        await PostgresLeadRepository().get("lead-1")

    assert exc_info.value.code == "storage_error"
    session.rollback.assert_called_once()
    session.close.assert_called_once()
