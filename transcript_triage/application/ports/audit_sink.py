"""Audit sink port."""

from abc import ABC, abstractmethod

from transcript_triage.application.dtos.audit import AuditRecord


class AuditSink(ABC):
    """Port interface for the audit trail."""

    @abstractmethod
    async def record(self, record: AuditRecord) -> None:
        """
        Append an audit record.

        Args:
            record: Audit record to store
        """
        pass

    @abstractmethod
    async def list_for_entity(self, entity_type: str, entity_id: str) -> list[AuditRecord]:
        """
        List audit records of one entity, newest first.

        Args:
            entity_type: Audited entity type
            entity_id: Audited entity id

        Returns:
            Audit records ordered by created_at descending
        """
        pass
