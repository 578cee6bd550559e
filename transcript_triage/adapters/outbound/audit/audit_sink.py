"""In-memory audit sink adapter."""

from transcript_triage.application.dtos.audit import AuditRecord
from transcript_triage.application.ports.audit_sink import AuditSink


class InMemoryAuditSink(AuditSink):
    """In-memory implementation of the audit trail."""

    def __init__(self) -> None:
        """Initialize in-memory sink."""
        self.records: list[AuditRecord] = []

    async def record(self, record: AuditRecord) -> None:
        self.records.append(record)

    async def list_for_entity(self, entity_type: str, entity_id: str) -> list[AuditRecord]:
        matches = [
            record
            for record in self.records
            if record.entity_type == entity_type and record.entity_id == entity_id
        ]
        # Stable sort keeps later appends first among equal timestamps
        return sorted(reversed(matches), key=lambda record: record.created_at, reverse=True)
