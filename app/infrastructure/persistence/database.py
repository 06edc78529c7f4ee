"""SQL persistence: lazily built async engine, session factory and ORM Base.

Schema is managed by Alembic migrations (see migrations/).

Engine and session factory are created lazily on first use (get_db) so
import does not trigger Settings validation.
"""

import logging
from typing import Any, AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.core.config import get_settings

logger = logging.getLogger(__name__)

# Set by _ensure_engine() on first use; avoids get_settings() at import time.
engine: Any = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


def _engine_options(database_url: str) -> dict[str, Any]:
    """Pool and driver options; pool sizing applies to server databases only."""
    settings = get_settings()
    options: dict[str, Any] = {
        "echo": settings.database_echo,
        "pool_pre_ping": True,
    }
    if "postgresql" in database_url:
        options["pool_size"] = (
            settings.db_pool_size if settings.db_pool_size is not None else 10
        )
        options["max_overflow"] = (
            settings.db_max_overflow if settings.db_max_overflow is not None else 20
        )
        options["pool_recycle"] = 3600
        command_timeout = (
            settings.db_command_timeout
            if settings.db_command_timeout is not None
            else 30
        )
        options["connect_args"] = {"command_timeout": command_timeout}
    return options


def _ensure_engine() -> async_sessionmaker[AsyncSession]:
    """Create engine and AsyncSessionLocal on first use; return the session factory.

    DATABASE_URL is required by Settings, so an engine can always be built.
    """
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return AsyncSessionLocal
    settings = get_settings()
    engine = create_async_engine(
        settings.database_url, **_engine_options(settings.database_url)
    )
    AsyncSessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    return AsyncSessionLocal


class Base(DeclarativeBase):
    """Declarative base for the directory's ORM models (users)."""


async def get_db() -> AsyncIterator[AsyncSession]:
    """Database session dependency for read operations.

    Does not commit (the directory never writes). Yields a session and
    closes it on exit.
    """
    session_factory = _ensure_engine()
    async with session_factory() as session:
        yield session


async def dispose_engine() -> None:
    """Dispose the engine (app shutdown) and reset the lazy factory."""
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
        logger.info("Database engine disposed")
    engine = None
    AsyncSessionLocal = None
