"""Shared fixtures for SQLAlchemy adapter tests using SQLite in-memory."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Register every table on the shared metadata
import transcript_triage.adapters.outbound.artifact.models  # noqa: F401
import transcript_triage.adapters.outbound.audit.models  # noqa: F401
import transcript_triage.adapters.outbound.lead.models  # noqa: F401
import transcript_triage.adapters.outbound.transcript.models  # noqa: F401
from transcript_triage.infrastructure.db import Base


@pytest.fixture
def sqlite_engine():
    """Create SQLite in-memory engine for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def db_session_factory(sqlite_engine, monkeypatch):
    """Patch get_db_session so Postgres adapters run against SQLite."""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=sqlite_engine)

    def get_test_db_session():
        return SessionLocal()

    monkeypatch.setattr("transcript_triage.infrastructure.db.get_db_session", get_test_db_session)
    return SessionLocal
