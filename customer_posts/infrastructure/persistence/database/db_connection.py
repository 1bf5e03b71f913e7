"""SQLAlchemy database configuration and connection management.

This module is responsible for:
- Engine creation and configuration
- Connection pooling
- Session management
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from sqlalchemy import event, make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from customer_posts.config import get_logger, settings

logger = get_logger(__name__)


def _is_sqlite(db_url: str) -> bool:
    return db_url.startswith("sqlite")


def _is_memory_sqlite(db_url: str) -> bool:
    return _is_sqlite(db_url) and (":memory:" in db_url or db_url.endswith("://"))


def _ensure_sqlite_directory(db_url: str) -> None:
    """SQLite creates the file but not its parent directories."""
    database = make_url(db_url).database
    if database:
        Path(database).parent.mkdir(parents=True, exist_ok=True)


def create_db_engine(connection_string: str | None = None) -> AsyncEngine:
    """Create async SQLAlchemy engine configured from settings.

    SQLite connections get foreign key enforcement and a busy timeout on every
    new DBAPI connection. In-memory SQLite uses a single shared connection so
    the schema survives across sessions.
    """
    db_url = connection_string or settings.database.url

    engine_kwargs: dict[str, Any] = {"echo": settings.database.echo}

    if _is_memory_sqlite(db_url):
        engine_kwargs |= {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    else:
        engine_kwargs |= {
            "pool_size": settings.database.pool_size,
            "max_overflow": settings.database.max_overflow,
            "pool_timeout": settings.database.pool_timeout,
            "pool_recycle": settings.database.pool_recycle,
            "pool_pre_ping": True,
        }
        if _is_sqlite(db_url):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            _ensure_sqlite_directory(db_url)

    engine = create_async_engine(db_url, **engine_kwargs)

    if _is_sqlite(db_url):
        busy_timeout = settings.database.busy_timeout_ms

        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, _):  # pragma: no cover
            """Set SQLite PRAGMAs on connection creation."""
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys = ON")
            cursor.execute(f"PRAGMA busy_timeout = {busy_timeout}")
            cursor.close()

    logger.info(f"Created database engine for {engine.url.render_as_string()}")
    return engine


# Global engine singleton
_engine: AsyncEngine | None = None


def get_engine() -> AsyncEngine:
    """Get or create the global database engine singleton."""
    global _engine
    if _engine is None:
        _engine = create_db_engine()
    return _engine


async def dispose_engine() -> None:
    """Dispose the global engine and forget it."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


def create_session_factory(
    engine: AsyncEngine | None = None,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory for the given engine.

    Args:
        engine: Optional engine (uses global engine if None)

    Returns:
        Async session factory for creating properly configured sessions
    """
    return async_sessionmaker(
        bind=engine or get_engine(),
        expire_on_commit=False,
        autoflush=False,
    )


# Global session factory singleton
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get or create the global session factory singleton."""
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory()
    return _session_factory


@asynccontextmanager
async def get_session(rollback: bool = True) -> AsyncGenerator[AsyncSession]:
    """Get an asynchronous database session with automatic transaction management.

    Commits when the context manager exits without an exception.

    Args:
        rollback: If True (default), automatically rolls back on exception.

    Yields:
        AsyncSession: Managed database session
    """
    session = get_session_factory()()
    try:
        yield session
        await session.commit()
    except Exception:
        if rollback:
            await session.rollback()
        raise
    finally:
        await session.close()
