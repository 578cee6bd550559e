"""Postgres-backed audit sink adapter."""

from transcript_triage.application.dtos.audit import AuditRecord
from transcript_triage.application.ports.audit_sink import AuditSink
from transcript_triage.infrastructure.db import ensure_utc, session_scope

from .models import AuditEventModel


class PostgresAuditSink(AuditSink):
    """Postgres implementation of the audit trail."""

    async def record(self, record: AuditRecord) -> None:
        """
        Append an audit record.

        Args:
            record: Audit record to store

        Raises:
            StorageError: If the insert fails
        """
        with session_scope(f"record audit {record.action} for {record.entity_id}") as db:
            db.add(
                AuditEventModel(
                    entity_type=record.entity_type,
                    entity_id=record.entity_id,
                    actor=record.actor,
                    action=record.action,
                    details=record.details,
                    created_at=record.created_at,
                )
            )

    async def list_for_entity(self, entity_type: str, entity_id: str) -> list[AuditRecord]:
        """
        List audit records of one entity, newest first.

        Raises:
            StorageError: If the query fails
        """
        with session_scope(f"list audit for {entity_type} {entity_id}") as db:
            models = (
                db.query(AuditEventModel)
                .filter(
                    AuditEventModel.entity_type == entity_type,
                    AuditEventModel.entity_id == entity_id,
                )
                .order_by(AuditEventModel.created_at.desc(), AuditEventModel.id.desc())
                .all()
            )
            return [
                AuditRecord(
                    entity_type=model.entity_type,
                    entity_id=model.entity_id,
                    actor=model.actor,
                    action=model.action,
                    details=model.details,
                    created_at=ensure_utc(model.created_at),
                )
                for model in models
            ]
