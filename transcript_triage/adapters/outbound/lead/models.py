"""SQLAlchemy ORM models for lead opportunities."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, String, Text

from transcript_triage.infrastructure.db import Base


class LeadOpportunityModel(Base):
    """SQLAlchemy model for lead_opportunities table."""

    __tablename__ = "lead_opportunities"

    id = Column(String, primary_key=True)
    # One lead per transcript; regeneration overwrites the row
    transcript_id = Column(
        String, ForeignKey("transcripts.id"), nullable=False, unique=True, index=True
    )
    source_artifact_id = Column(String, ForeignKey("transcript_artifacts.id"), nullable=True)
    model = Column(String, nullable=False)
    title = Column(String, nullable=False)
    reason = Column(Text, nullable=False)
    next_action = Column(Text, nullable=False)
    lead_score = Column(Float, nullable=False)
    status = Column(String, nullable=False, default="open", index=True)
    owner = Column(String, nullable=True)
    due_at = Column(DateTime(timezone=True), nullable=True)
    last_contacted_at = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)
    meta = Column(JSON, nullable=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
