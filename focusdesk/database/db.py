"""Database connection and session management."""

import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session as OrmSession
from sqlalchemy.pool import StaticPool

from ..settings import APP_HOME
from .models import Base

logger = logging.getLogger(__name__)

# ── paths ────────────────────────────────────────────────────────────────────

DB_PATH = APP_HOME / "focusdesk.db"
DEFAULT_URL = f"sqlite:///{DB_PATH}"

# ── engine & session factory (created lazily) ─────────────────────────────

_engine = None
_SessionFactory = None


def _build_engine(url: str):
    kwargs: dict = {"echo": False}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection, or every session sees an empty DB.
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


def _get_engine():
    global _engine
    if _engine is None:
        APP_HOME.mkdir(parents=True, exist_ok=True)
        _engine = _build_engine(DEFAULT_URL)
    return _engine


def _get_session_factory():
    global _SessionFactory
    if _SessionFactory is None:
        _SessionFactory = sessionmaker(bind=_get_engine(), expire_on_commit=False)
    return _SessionFactory


# ── public API ────────────────────────────────────────────────────────────


def configure_engine(url: str) -> None:
    """Override the database connection URL.

    Used by ``Settings.database_url`` and by tests to point at an
    in-memory SQLite database instead of the real one on disk.
    """
    global _engine, _SessionFactory
    if _engine is not None:
        _engine.dispose()
    _SessionFactory = None
    _engine = _build_engine(url)
    logger.debug("Database engine configured for %s", _engine.url)


def init_db() -> None:
    """Create all tables (idempotent)."""
    engine = _get_engine()
    Base.metadata.create_all(engine)
    logger.info("Database ready at %s", engine.url)


@contextmanager
def get_session():
    """Yield a SQLAlchemy session; commit on success, rollback on error."""
    factory = _get_session_factory()
    session: OrmSession = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
