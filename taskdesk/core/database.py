"""
Database configuration and session management
"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlmodel import Session, SQLModel
import structlog

from taskdesk.core.config import get_settings

logger = structlog.get_logger(__name__)
settings = get_settings()

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
    connect_args=({"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}),
)


def init_db(bind=None):
    """Create database tables (development and tests; production uses Alembic)"""
    # Import models so every table is registered on the metadata
    import taskdesk.models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)
    logger.info("Database tables created")


def get_session() -> Generator[Session, None, None]:
    """Dependency to get database session"""
    with Session(engine) as session:
        yield session


@contextmanager
def atomic(session: Session) -> Generator[Session, None, None]:
    """Commit everything written inside the block, or nothing"""
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
