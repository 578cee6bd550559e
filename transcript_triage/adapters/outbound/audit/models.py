"""SQLAlchemy ORM models for the audit trail."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Integer, String

from transcript_triage.infrastructure.db import Base


class AuditEventModel(Base):
    """SQLAlchemy model for audit_events table."""

    __tablename__ = "audit_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    entity_type = Column(String, nullable=False)
    entity_id = Column(String, nullable=False, index=True)
    actor = Column(String, nullable=False)
    action = Column(String, nullable=False)
    details = Column(JSON, nullable=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
