"""Unit tests for TransitionLeadStatus."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

from transcript_triage.adapters.outbound.audit import InMemoryAuditSink
from transcript_triage.adapters.outbound.lead import InMemoryLeadRepository
from transcript_triage.application.errors import InvalidLeadStatusError, NotFoundError
from transcript_triage.application.use_cases.audit_trail import AuditTrail
from transcript_triage.application.use_cases.transition_lead_status import (
    TransitionLeadStatus,
)
from transcript_triage.domain.entities.lead_opportunity import LeadOpportunity
from transcript_triage.domain.value_objects.lead_status import LeadStatus


@pytest.fixture
def lead_repository():
    return InMemoryLeadRepository()


@pytest.fixture
def audit_sink():
    return InMemoryAuditSink()


@pytest.fixture
def use_case(lead_repository, audit_sink):
    return TransitionLeadStatus(lead_repository, AuditTrail(audit_sink))


@pytest_asyncio.fixture
async def stored_lead(lead_repository):
    lead = LeadOpportunity(
        transcript_id="t-1",
        model="qwen2.5:1.5b",
        title="Sleep follow-up",
        reason="Still waking at night",
        next_action="Call to check in; offer slots only if they confirm.",
        lead_score=0.6,
        notes="initial note",
    )
    return await lead_repository.upsert(lead)


@pytest.mark.asyncio
async def test_invalid_status_leaves_lead_unchanged(
    use_case, lead_repository, stored_lead, audit_sink
):
    """Test that an unknown status is rejected before any write."""
    with pytest.raises(InvalidLeadStatusError) as exc_info:
        await use_case.execute(stored_lead.id, "bogus")

    assert exc_info.value.code == "invalid_status"
    lead = await lead_repository.get(stored_lead.id)
    assert lead.status is LeadStatus.OPEN
    assert lead.notes == "initial note"
    assert audit_sink.records == []


@pytest.mark.asyncio
async def test_contacted_stamps_last_contacted_at(use_case, stored_lead):
    """Test that moving to contacted records the contact time."""
    before = datetime.now(timezone.utc)

    view = await use_case.execute(stored_lead.id, "contacted", notes="Left voicemail")

    assert view.status == "contacted"
    assert view.notes == "Left voicemail"
    assert view.last_contacted_at is not None
    assert view.last_contacted_at >= before


@pytest.mark.asyncio
async def test_other_statuses_do_not_stamp_last_contacted_at(use_case, stored_lead):
    view = await use_case.execute(stored_lead.id, "in_progress")
    assert view.last_contacted_at is None

    view = await use_case.execute(stored_lead.id, "open")
    assert view.status == "open"
    assert view.last_contacted_at is None


@pytest.mark.asyncio
async def test_notes_are_always_overwritten(use_case, stored_lead):
    """Test that omitting notes clears them."""
    view = await use_case.execute(stored_lead.id, "qualified")
    assert view.notes is None


@pytest.mark.asyncio
async def test_due_at_only_written_when_given(use_case, stored_lead):
    due_at = datetime(2026, 11, 1, 9, 0, tzinfo=timezone.utc)

    view = await use_case.execute(stored_lead.id, "in_progress", due_at=due_at)
    assert view.due_at == due_at

    view = await use_case.execute(stored_lead.id, "contacted")
    assert view.due_at == due_at


@pytest.mark.asyncio
async def test_any_status_accepted_as_target(use_case, stored_lead):
    """Test that transitions are not restricted to the nominal flow."""
    view = await use_case.execute(stored_lead.id, "closed_won")
    assert view.status == "closed_won"

    view = await use_case.execute(stored_lead.id, "open")
    assert view.status == "open"


@pytest.mark.asyncio
async def test_transition_is_audited(use_case, stored_lead, audit_sink):
    await use_case.execute(stored_lead.id, "dismissed", notes="Duplicate", actor="nurse-7")

    assert len(audit_sink.records) == 1
    record = audit_sink.records[0]
    assert record.action == "lead.status_updated"
    assert record.entity_type == "lead"
    assert record.entity_id == stored_lead.id
    assert record.actor == "nurse-7"
    assert record.details == {
        "previous_status": "open",
        "next_status": "dismissed",
        "notes": "Duplicate",
    }


@pytest.mark.asyncio
async def test_unknown_lead_raises_not_found(use_case):
    with pytest.raises(NotFoundError):
        await use_case.execute("missing", "open")


@pytest.mark.asyncio
async def test_audit_failure_does_not_fail_transition(lead_repository, stored_lead):
    """Test that a broken audit sink only gets logged."""
    failing_sink = Mock()
    failing_sink.record = AsyncMock(side_effect=RuntimeError("audit down"))
    logger = Mock()
    use_case = TransitionLeadStatus(lead_repository, AuditTrail(failing_sink, logger=logger))

    view = await use_case.execute(stored_lead.id, "contacted")

    assert view.status == "contacted"
    logger.assert_called_once()
    assert logger.call_args.args == ("audit", "record_failed")
