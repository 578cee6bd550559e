"""Audit sink adapters."""

from transcript_triage.adapters.outbound.audit.audit_sink import InMemoryAuditSink
from transcript_triage.adapters.outbound.audit.postgres_audit_sink import PostgresAuditSink

__all__ = [
    "InMemoryAuditSink",
    "PostgresAuditSink",
]
