"""Unit tests for transcript ingestion, listing, detail and audit history."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, Mock

import pytest

from transcript_triage.adapters.outbound.audit import InMemoryAuditSink
from transcript_triage.adapters.outbound.transcript import InMemoryTranscriptRepository
from transcript_triage.application.dtos.transcript import TranscriptInput
from transcript_triage.application.errors import MissingFieldsError, NotFoundError, StorageError
from transcript_triage.application.use_cases.audit_trail import AuditTrail
from transcript_triage.application.use_cases.transcript_intake import (
    GetTranscript,
    IngestTranscript,
    ListTranscriptAudit,
    ListTranscripts,
)
from transcript_triage.domain.entities.transcript import Transcript

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def _input(**overrides):
    fields = {
        "patient_pseudonym": "patient-042",
        "source": "telehealth",
        "source_ref": "visit-17",
        "text": "Provider: How is sleep?\nPatient: Bad.",
        "idempotency_key": "telehealth:visit-17",
        "meta": {"duration_minutes": 25},
    }
    fields.update(overrides)
    return TranscriptInput(**fields)


def _seeded(count, **overrides):
    return [
        Transcript(
            id=f"t-{index}",
            text="...",
            source=overrides.get("source", "telehealth"),
            patient_pseudonym=overrides.get("patient_pseudonym", "patient-042"),
            created_at=NOW - timedelta(minutes=index),
        )
        for index in range(count)
    ]


@pytest.mark.asyncio
async def test_ingest_creates_transcript():
    repository = InMemoryTranscriptRepository()
    logger = Mock()
    use_case = IngestTranscript(repository, logger=logger)

    transcript, created = await use_case.execute(_input())

    assert created is True
    assert transcript.status == "new"
    assert transcript.source_ref == "visit-17"
    assert transcript.meta == {"duration_minutes": 25}
    assert await repository.get(transcript.id) is transcript
    logger.assert_called_once()
    assert logger.call_args.args == ("intake", "transcript_ingested")


@pytest.mark.asyncio
async def test_ingest_same_key_returns_existing_row():
    """Test that replaying an idempotency key never creates a second transcript."""
    repository = InMemoryTranscriptRepository()
    use_case = IngestTranscript(repository)

    first, first_created = await use_case.execute(_input())
    second, second_created = await use_case.execute(_input(text="A different body"))

    assert first_created is True
    assert second_created is False
    assert second.id == first.id
    assert second.text == "Provider: How is sleep?\nPatient: Bad."
    assert len(await repository.list_unprocessed(limit=10)) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["patient_pseudonym", "source", "text", "idempotency_key"])
@pytest.mark.parametrize("value", [None, ""])
async def test_ingest_requires_fields(field, value):
    repository = InMemoryTranscriptRepository()
    use_case = IngestTranscript(repository)

    with pytest.raises(MissingFieldsError) as exc_info:
        await use_case.execute(_input(**{field: value}))

    assert exc_info.value.code == "missing_fields"
    assert field in str(exc_info.value)
    assert await repository.list_unprocessed(limit=10) == []


@pytest.mark.asyncio
async def test_ingest_optional_fields_may_be_absent():
    use_case = IngestTranscript(InMemoryTranscriptRepository())

    transcript, created = await use_case.execute(_input(source_ref=None, meta=None))

    assert created is True
    assert transcript.source_ref is None
    assert transcript.meta is None


@pytest.mark.asyncio
async def test_list_defaults_and_has_more():
    use_case = ListTranscripts(InMemoryTranscriptRepository(_seeded(25)))

    page = await use_case.execute()

    assert page.limit == 20
    assert page.offset == 0
    assert page.has_more is True
    assert page.next_offset == 20
    assert [item.id for item in page.items][:3] == ["t-0", "t-1", "t-2"]
    assert len(page.items) == 20


@pytest.mark.asyncio
async def test_list_last_page_has_no_next_offset():
    use_case = ListTranscripts(InMemoryTranscriptRepository(_seeded(25)))

    page = await use_case.execute(limit=20, offset=20)

    assert [item.id for item in page.items] == ["t-20", "t-21", "t-22", "t-23", "t-24"]
    assert page.has_more is False
    assert page.next_offset is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "limit, offset, expected_limit, expected_offset",
    [
        (None, None, 20, 0),
        (0, 0, 20, 0),
        (-5, -3, 20, 0),
        (500, 2, 100, 2),
        (7, 1, 7, 1),
    ],
)
async def test_list_clamps_paging(limit, offset, expected_limit, expected_offset):
    repository = Mock()
    repository.list_unprocessed = AsyncMock(return_value=[])
    use_case = ListTranscripts(repository)

    page = await use_case.execute(limit=limit, offset=offset)

    assert page.limit == expected_limit
    assert page.offset == expected_offset
    repository.list_unprocessed.assert_awaited_once_with(
        expected_limit + 1, expected_offset, source=None, patient_pseudonym=None
    )


@pytest.mark.asyncio
async def test_list_hides_processed_and_applies_filters():
    transcripts = _seeded(3) + [
        Transcript(id="other", text="...", source="clinic", patient_pseudonym="patient-007"),
        Transcript(id="done", text="...", source="clinic", status="processed"),
    ]
    use_case = ListTranscripts(InMemoryTranscriptRepository(transcripts))

    by_source = await use_case.execute(source="clinic")
    by_patient = await use_case.execute(patient_pseudonym="patient-042")

    assert [item.id for item in by_source.items] == ["other"]
    assert [item.id for item in by_patient.items] == ["t-0", "t-1", "t-2"]


@pytest.mark.asyncio
async def test_get_transcript_audits_view():
    audit_sink = InMemoryAuditSink()
    use_case = GetTranscript(InMemoryTranscriptRepository(_seeded(1)), AuditTrail(audit_sink))

    transcript = await use_case.execute("t-0", actor="nurse-1", from_view="queue")

    assert transcript.id == "t-0"
    record = audit_sink.records[0]
    assert record.action == "transcript.viewed"
    assert record.actor == "nurse-1"
    assert record.details == {"ui": "detail", "from": "queue"}


@pytest.mark.asyncio
async def test_get_missing_transcript_raises_not_found():
    audit_sink = InMemoryAuditSink()
    use_case = GetTranscript(InMemoryTranscriptRepository(), AuditTrail(audit_sink))

    with pytest.raises(NotFoundError):
        await use_case.execute("missing")
    assert audit_sink.records == []


@pytest.mark.asyncio
async def test_audit_history_is_newest_first_and_scoped():
    audit_trail = AuditTrail(InMemoryAuditSink())
    await audit_trail.record("transcript", "t-0", "nurse-1", "transcript.viewed")
    await audit_trail.record("transcript", "t-0", "nurse-1", "ai.summary_generated")
    await audit_trail.record("transcript", "t-9", "nurse-1", "transcript.viewed")
    await audit_trail.record("lead", "t-0", "nurse-1", "lead.status_updated")

    records = await ListTranscriptAudit(audit_trail).execute("t-0")

    assert [record.action for record in records] == ["ai.summary_generated", "transcript.viewed"]


@pytest.mark.asyncio
async def test_audit_history_read_errors_propagate():
    audit_sink = Mock()
    audit_sink.list_for_entity = AsyncMock(side_effect=StorageError("Database error"))

    with pytest.raises(StorageError):
        await ListTranscriptAudit(AuditTrail(audit_sink)).execute("t-0")
