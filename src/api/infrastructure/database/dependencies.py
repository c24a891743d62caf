"""Database dependency injection for FastAPI.

Provides the async session used by provisioning repositories, backed by a
lazily created engine shared across requests.
"""

from __future__ import annotations

import threading
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_engine
from infrastructure.observability import DefaultConnectionProbe
from infrastructure.settings import get_database_settings

_probe = DefaultConnectionProbe()

_engine: AsyncEngine | None = None
_sessionmaker: async_sessionmaker[AsyncSession] | None = None

_engine_lock = threading.Lock()


def get_engine() -> AsyncEngine:
    """Get the database engine (singleton).

    Creates engine on first call and caches for subsequent calls.
    Uses double-check locking for thread-safe initialization.
    Also creates and caches the sessionmaker for efficient session creation.

    Returns:
        Configured async engine
    """
    global _engine, _sessionmaker
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                settings = get_database_settings()
                _engine = create_engine(settings)
                _sessionmaker = async_sessionmaker(
                    _engine,
                    expire_on_commit=False,
                    class_=AsyncSession,
                )
                _probe.engine_created(
                    host=settings.host,
                    database=settings.database,
                    pool_size=settings.pool_max_connections,
                )
    return _engine


async def get_write_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a session for reads and writes (FastAPI dependency).

    The session is configured to NOT auto-commit. Repositories open a short
    transaction per operation with `async with session.begin()`, so a failed
    write for one import row never poisons the next row's transaction.

    Yields:
        AsyncSession for database operations
    """
    get_engine()
    assert _sessionmaker is not None

    async with _sessionmaker() as session:
        yield session


async def close_database_connections() -> None:
    """Dispose the engine on application shutdown.

    Also resets the sessionmaker to allow reinitialization.
    """
    global _engine, _sessionmaker

    if _engine is not None:
        await _engine.dispose()
        _probe.engine_disposed()
        _engine = None
        _sessionmaker = None
