"""Unit tests for the LeadOpportunity entity."""

from datetime import datetime, timedelta, timezone

from transcript_triage.domain.entities.lead_opportunity import LeadOpportunity
from transcript_triage.domain.value_objects.lead_status import LeadStatus


def _lead(**overrides) -> LeadOpportunity:
    fields = {
        "transcript_id": "t-1",
        "model": "qwen2.5:1.5b",
        "title": "Sleep follow-up",
        "reason": "Patient still reports poor sleep",
        "next_action": "Call to check in; offer slots only if they confirm interest.",
        "lead_score": 0.7,
    }
    fields.update(overrides)
    return LeadOpportunity(**fields)


def test_overwrite_keeps_identity_and_staff_fields():
    """Test that regeneration keeps id, created_at, owner, notes and last contact."""
    contacted_at = datetime(2026, 10, 1, tzinfo=timezone.utc)
    existing = _lead(
        status=LeadStatus.CONTACTED,
        owner="frontdesk",
        notes="Left voicemail",
        last_contacted_at=contacted_at,
    )
    regenerated = _lead(
        model="llama3.2:1b",
        title="Medication check-in",
        lead_score=0.9,
        source_artifact_id="a-2",
        metadata={"origin": "manual"},
    )

    existing.overwrite_from(regenerated)

    assert existing.id != regenerated.id
    assert existing.title == "Medication check-in"
    assert existing.model == "llama3.2:1b"
    assert existing.lead_score == 0.9
    assert existing.source_artifact_id == "a-2"
    assert existing.metadata == {"origin": "manual"}
    assert existing.status is LeadStatus.OPEN
    assert existing.owner == "frontdesk"
    assert existing.notes == "Left voicemail"
    assert existing.last_contacted_at == contacted_at


def test_is_overdue_only_for_active_leads_past_due():
    """Test overdue detection."""
    now = datetime(2026, 10, 18, tzinfo=timezone.utc)
    past = now - timedelta(days=1)

    assert _lead(due_at=past).is_overdue(now) is True
    assert _lead(due_at=now + timedelta(days=1)).is_overdue(now) is False
    assert _lead(due_at=None).is_overdue(now) is False
    assert _lead(due_at=past, status=LeadStatus.CLOSED_WON).is_overdue(now) is False
