"""SQLAlchemy ORM models for transcripts."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, String, Text

from transcript_triage.infrastructure.db import Base


class TranscriptModel(Base):
    """SQLAlchemy model for transcripts table."""

    __tablename__ = "transcripts"

    id = Column(String, primary_key=True, index=True)
    patient_pseudonym = Column(String, nullable=True, index=True)
    source = Column(String, nullable=True)
    source_ref = Column(String, nullable=True)
    idempotency_key = Column(String, nullable=True, unique=True)
    redacted_text = Column(Text, nullable=False)
    status = Column(String, nullable=False, default="new")  # new, processed
    meta = Column(JSON, nullable=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
