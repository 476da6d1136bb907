"""Database configuration and session management."""

from collections.abc import AsyncGenerator
from typing import Any

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from partnerpool.config.settings import Settings, get_settings

logger = structlog.get_logger()

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _engine_options(settings: Settings) -> dict[str, Any]:
    """Build engine keyword arguments for the configured backend.

    SQLite and the test environment run without a connection pool, so the
    pool sizing options only apply to server databases.
    """
    options: dict[str, Any] = {"echo": settings.DEBUG}
    if settings.is_sqlite or settings.ENVIRONMENT == "test":
        options["poolclass"] = NullPool
    else:
        options["pool_size"] = settings.DATABASE_POOL_SIZE
        options["max_overflow"] = settings.DATABASE_MAX_OVERFLOW
        options["pool_pre_ping"] = True
    return options


def get_engine(settings: Settings | None = None) -> AsyncEngine:
    """Return the process-wide async engine, creating it on first use."""
    global _engine
    if _engine is None:
        settings = settings or get_settings()
        _engine = create_async_engine(settings.DATABASE_URL, **_engine_options(settings))
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the session factory bound to the process-wide engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _session_factory


async def init_db(settings: Settings | None = None) -> None:
    """Initialize the database connection.

    Called during application startup so connectivity problems surface
    before the service accepts search requests.
    """
    engine = get_engine(settings)
    async with engine.begin() as conn:
        await conn.execute(text("SELECT 1"))
    logger.info("database_initialized", dialect=engine.dialect.name)


async def close_db() -> None:
    """Dispose of the engine and release pooled connections."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one read-only session per request.

    Usage:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with get_session_factory()() as session:
        yield session
