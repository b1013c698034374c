"""Database connection and session management."""

import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from .config import get_settings
from .models import Base

logger = logging.getLogger(__name__)

_engine: Engine | None = None
_session_factory: sessionmaker | None = None


def create_db_engine(database_url: str | None = None) -> Engine:
    """Create SQLAlchemy engine; pooled for server databases."""
    settings = get_settings()
    url = database_url or settings.database_url

    if url.startswith("sqlite"):
        return create_engine(url, echo=settings.sql_echo)

    return create_engine(
        url,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,  # Verify connections before using
        echo=settings.sql_echo,
    )


def get_engine() -> Engine:
    """Return the process-wide engine, creating it on first use."""
    global _engine
    if _engine is None:
        _engine = create_db_engine()
    return _engine


def get_session_factory() -> sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _session_factory


def configure_engine(engine: Engine) -> None:
    """Use an existing engine (tests, embedding applications)."""
    global _engine, _session_factory
    _engine = engine
    _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """Context manager for database sessions.

    Preference stores only stage changes; this is where they get committed.

    Usage:
        with get_db_session() as db:
            user = db.get(User, user_id)
            user.bind_preferences(SQLAlchemyPreferenceRepository(db))
            user.set_preference("theme", "dark")
    """
    db = get_session_factory()()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db() -> None:
    """Create all preference and owner tables that do not exist yet."""
    Base.metadata.create_all(get_engine())
    logger.info("Database tables created")


def check_database_health() -> bool:
    """Verify database connection is working.

    Returns:
        True if database is healthy, False otherwise.
    """
    try:
        with get_db_session() as db:
            db.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.exception(f"Database health check failed: {e}")
        return False


def dispose_engine() -> None:
    """Dispose of the engine and all connections.

    Call this during graceful shutdown.
    """
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None
