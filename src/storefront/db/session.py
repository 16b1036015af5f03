"""Database session management.

Provides a cached engine and session factory per database URL, with
SQLite thread-safety settings for FastAPI's threadpool.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Module-level engine cache for connection pooling
_engine_cache: dict[str, Engine] = {}

# Module-level session factory cache
_session_factory_cache: dict[str, sessionmaker] = {}


def _is_memory_sqlite(url: str) -> bool:
    database = make_url(url).database
    return database in (None, "", ":memory:")


def get_engine(database_url: str) -> Engine:
    """Get SQLAlchemy engine for the database.

    Engines are cached by URL. Subsequent calls with the same URL return
    the cached engine.

    For SQLite, uses check_same_thread=False so sessions can move between
    threadpool workers, and StaticPool for in-memory databases so every
    session sees the same data.

    Args:
        database_url: SQLAlchemy database URL.

    Returns:
        SQLAlchemy engine instance (cached).
    """
    if database_url in _engine_cache:
        return _engine_cache[database_url]

    url = make_url(database_url)
    kwargs: dict = {"echo": False}

    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if _is_memory_sqlite(database_url):
            kwargs["poolclass"] = StaticPool
        else:
            # Create parent directories only when creating a new engine
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    else:
        kwargs["pool_pre_ping"] = True

    engine = create_engine(database_url, **kwargs)
    _engine_cache[database_url] = engine

    return engine


def _get_session_factory(database_url: str) -> sessionmaker:
    """Get cached session factory for the database."""
    if database_url in _session_factory_cache:
        return _session_factory_cache[database_url]

    factory = sessionmaker(bind=get_engine(database_url))
    _session_factory_cache[database_url] = factory

    return factory


def get_session(database_url: str) -> Session:
    """Get a database session.

    Note: Caller is responsible for closing the session. For automatic
    resource management, use get_db_session() instead.

    Args:
        database_url: SQLAlchemy database URL.

    Returns:
        SQLAlchemy Session instance.
    """
    factory = _get_session_factory(database_url)
    return factory()


@contextmanager
def get_db_session(database_url: str) -> Generator[Session, None, None]:
    """Context manager for database sessions with automatic cleanup.

    Commits on successful exit, rolls back on exception, and always
    closes the session.

    Args:
        database_url: SQLAlchemy database URL.

    Yields:
        SQLAlchemy Session instance.
    """
    session = get_session(database_url)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def dispose_engines() -> None:
    """Dispose every cached engine and clear the caches."""
    for engine in _engine_cache.values():
        engine.dispose()
    _engine_cache.clear()
    _session_factory_cache.clear()
