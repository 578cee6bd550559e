"""SQLAlchemy ORM models for generated artifacts."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, Text

from transcript_triage.infrastructure.db import Base


class ArtifactModel(Base):
    """SQLAlchemy model for transcript_artifacts table."""

    __tablename__ = "transcript_artifacts"

    id = Column(String, primary_key=True)
    transcript_id = Column(String, ForeignKey("transcripts.id"), nullable=False, index=True)
    artifact_type = Column(String, nullable=False, default="summary")
    model = Column(String, nullable=False)
    status = Column(String, nullable=False, default="generated")  # generated, approved
    content = Column(Text, nullable=False)
    meta = Column(JSON, nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    approved_by = Column(String, nullable=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
