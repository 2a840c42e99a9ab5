"""Async SQLAlchemy engine and session management."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from freightdesk.core.config import get_settings
from freightdesk.infrastructure.database.base import Base

logger = logging.getLogger(__name__)

SQLITE_BUSY_TIMEOUT_MS = 5000

_engine: AsyncEngine | None = None
AsyncSessionFactory: async_sessionmaker[AsyncSession] | None = None


def _build_engine() -> AsyncEngine:
    settings = get_settings()
    engine_kwargs: dict[str, Any] = {
        "echo": settings.database.echo or settings.debug,
        "future": True,
    }
    if settings.database.pool_size is not None:
        engine_kwargs["pool_size"] = settings.database.pool_size
    if settings.database.max_overflow is not None:
        engine_kwargs["max_overflow"] = settings.database.max_overflow

    engine = create_async_engine(settings.database_url, **engine_kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _configure_sqlite)
    return engine


def _configure_sqlite(dbapi_connection, connection_record) -> None:
    # ledger and top-up rows rely on the declared foreign keys; SQLite leaves them off per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS}")
    cursor.close()


def get_engine() -> AsyncEngine:
    global _engine, AsyncSessionFactory
    if _engine is None:
        _engine = _build_engine()
        AsyncSessionFactory = async_sessionmaker(
            bind=_engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _engine


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    if AsyncSessionFactory is None:
        get_engine()

    assert AsyncSessionFactory is not None  # for mypy
    async with AsyncSessionFactory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create database tables in development mode (migrations preferred)."""
    # imported late so every model registers on Base.metadata
    from freightdesk.db import models  # noqa: F401

    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ensured for %s", engine.url.render_as_string(hide_password=True))


async def dispose_engine() -> None:
    global _engine, AsyncSessionFactory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    AsyncSessionFactory = None
