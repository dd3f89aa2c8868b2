"""
SQLAlchemy engine and session management for the SQL storage backend.
"""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from tilltrack.core.config import settings

logger = logging.getLogger(__name__)


def make_engine(url: str):
    """Create an engine, allowing SQLite connections to cross threads."""
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


engine = make_engine(settings.database_url)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

Base = declarative_base()


def init_db(bind=None) -> None:
    """Create all tables."""
    # Register the mapped tables on Base.metadata
    from tilltrack.models import records  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def check_db_connection(bind=None) -> bool:
    """Check if the database connection is working."""
    try:
        with (bind or engine).connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection check failed: {e}")
        return False


@contextmanager
def get_db_context(session_factory=SessionLocal) -> Iterator[Session]:
    """Session scope that commits on success and rolls back on error."""
    db = session_factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
