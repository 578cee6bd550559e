"""Fire-and-forget audit trail."""

import logging
from typing import Any, Callable, Optional

from transcript_triage.application.dtos.audit import AuditRecord
from transcript_triage.application.ports.audit_sink import AuditSink


class AuditTrail:
    """Records audit events without ever failing the calling request."""

    def __init__(
        self,
        audit_sink: AuditSink,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize audit trail.

        Args:
            audit_sink: Sink that stores audit records
            logger: Optional logger function (component, event, **kwargs)
        """
        self._audit_sink = audit_sink
        self._logger = logger

    async def record(
        self,
        entity_type: str,
        entity_id: str,
        actor: str,
        action: str,
        details: Optional[dict[str, Any]] = None,
    ) -> bool:
        """
        Record one audit event.

        Args:
            entity_type: Audited entity type ('transcript', 'lead')
            entity_id: Audited entity id
            actor: Acting user or system identifier
            action: Action name
            details: Optional structured details

        Returns:
            True if the sink accepted the record
        """
        record = AuditRecord(
            entity_type=entity_type,
            entity_id=entity_id,
            actor=actor,
            action=action,
            details=details,
        )
        try:
            await self._audit_sink.record(record)
        except Exception as e:
            if self._logger:
                self._logger(
                    "audit",
                    "record_failed",
                    level=logging.ERROR,
                    action=action,
                    entity_id=entity_id,
                    error=str(e),
                )
            return False
        return True

    async def list_for_entity(self, entity_type: str, entity_id: str) -> list[AuditRecord]:
        """Read an entity's history; unlike record(), storage errors propagate."""
        return await self._audit_sink.list_for_entity(entity_type, entity_id)
