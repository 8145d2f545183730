"""Database session management for the async SQLAlchemy engine."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from checkpoint_graph.core.settings import get_app_settings, get_db_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """Create the process-wide async engine on first use.

    Pool arguments are only passed to drivers that pool connections; SQLite
    URLs get SQLAlchemy's defaults.
    """
    db_settings = get_db_settings()
    app_settings = get_app_settings()

    engine_kwargs: dict[str, Any] = {"echo": db_settings.echo or app_settings.debug}
    if not db_settings.is_sqlite:
        engine_kwargs.update(
            pool_size=db_settings.pool_size,
            max_overflow=db_settings.max_overflow,
            pool_timeout=db_settings.pool_timeout,
            pool_recycle=db_settings.pool_recycle,
            pool_pre_ping=db_settings.pool_pre_ping,
        )

    logger.info(
        "Creating database engine",
        extra={"dialect": db_settings.url.split(":", 1)[0]},
    )
    return create_async_engine(db_settings.url, **engine_kwargs)


@lru_cache(maxsize=1)
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the process-wide engine."""
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Get async database session.

    Yields:
        Database session that is automatically closed.

    Example:
        async with get_async_session() as session:
            rows = await SessionQueryExecutor(session).execute("SELECT 1", {})
    """
    async with get_sessionmaker()() as session:
        try:
            yield session
        finally:
            await session.close()


async def check_database() -> bool:
    """Run a trivial query to verify connectivity."""
    async with get_async_session() as session:
        await session.execute(text("SELECT 1"))
    return True


async def close_database() -> None:
    """Dispose the engine (application shutdown).

    Does nothing when no engine was ever created.
    """
    if get_engine.cache_info().currsize == 0:
        return

    logger.info("Closing database connection")
    await get_engine().dispose()
    get_sessionmaker.cache_clear()
    get_engine.cache_clear()
