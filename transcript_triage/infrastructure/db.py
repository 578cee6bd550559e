"""Database infrastructure setup."""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from transcript_triage.application.errors import StorageError
from transcript_triage.infrastructure.config.settings import settings
from transcript_triage.infrastructure.logging.logger import logger

# Shared declarative base for every table the service owns
Base = declarative_base()

# Engine creation is deferred until needed to avoid errors when using in-memory mode
_engine = None
_SessionLocal = None


def _get_engine():
    """Get or create the database engine."""
    global _engine
    if _engine is None:
        if not settings.database_url:
            raise ValueError("DATABASE_URL is required when REPOSITORY_BACKEND=postgres")
        _engine = create_engine(
            settings.database_url,
            pool_pre_ping=True,
            echo=settings.debug_mode,  # Log SQL queries in debug mode
        )
    return _engine


def get_db_session() -> Session:
    """
    Get a database session.

    Returns:
        SQLAlchemy session instance
    """
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_get_engine())
    return _SessionLocal()


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes (SQLite returns naive values)."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@contextmanager
def session_scope(operation: str) -> Iterator[Session]:
    """
    Run one unit of work, committing on success.

    Args:
        operation: Human-readable operation name used in error logs

    Yields:
        Open SQLAlchemy session

    Raises:
        StorageError: If the database rejects the unit of work
    """
    db = get_db_session()
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error during {operation}: {str(e)}")
        raise StorageError(f"Database error during {operation}") from e
    finally:
        db.close()
