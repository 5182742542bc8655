"""Database configuration and session management.

Provides the async SQLAlchemy engine and session factory. The engine is
created on first use, so the application imports and starts even when
the connection string cannot be resolved.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from app.infrastructure.config import settings
from app.infrastructure.connection import resolve_database_url


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on foreign key enforcement for every SQLite connection."""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection: Any, connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: Any, echo: bool = False) -> AsyncEngine:
    """Create the async engine for a resolved database URL.

    SQLite connections are not pooled and enforce foreign keys.
    """
    if make_url(url).get_backend_name() == "sqlite":
        sqlite_engine = create_async_engine(url, echo=echo, poolclass=NullPool)
        enable_sqlite_foreign_keys(sqlite_engine)
        return sqlite_engine

    return create_async_engine(url, echo=echo, pool_pre_ping=True)


# Base class for models
Base = declarative_base()

# Created by get_engine() on first use
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Get the shared engine, creating it on first use.

    Raises:
        ConnectionStringError: If no connection string can be resolved.
    """
    global _engine, _session_factory
    if _engine is None:
        _engine = build_engine(resolve_database_url(settings.database), echo=settings.debug)
        _session_factory = async_sessionmaker(
            _engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the session factory bound to the shared engine."""
    get_engine()
    return _session_factory  # type: ignore[return-value]


async def dispose_engine() -> None:
    """Close pooled connections and forget the shared engine."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session.

    One session per request; committed when the handler succeeds and
    rolled back otherwise.

    Yields:
        AsyncSession for database operations.

    Raises:
        ConnectionStringError: If no connection string can be resolved.
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
