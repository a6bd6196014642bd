"""
Engine and session handling for the durable families.

Programs, program days and prayer requests live in the database named by
``DATABASE_URL``. Each storage operation opens its own session through
``get_db_session_context`` and commits when it leaves, so no session is ever
shared between two calls. The engine is created on first use and dropped by
``close_db``; the next call after that reads the settings again, which lets
tests point the store at a fresh SQLite file.
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ..config import get_settings
from .models import Base


_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # Day rows rely on ON DELETE CASCADE, which SQLite skips unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_db_engine() -> AsyncEngine:
    """The shared engine for ``DATABASE_URL`` (SQLite in dev, PostgreSQL in production)."""
    global _engine

    if _engine is None:
        settings = get_settings()
        sqlite = _is_sqlite(settings.database_url)
        _engine = create_async_engine(
            settings.database_url,
            echo=settings.debug,
            connect_args={"check_same_thread": False} if sqlite else {},
        )
        if sqlite:
            event.listen(_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    return _engine


def _get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory

    if _session_factory is None:
        # Records are converted to pydantic after commit, so keep loaded attributes
        _session_factory = async_sessionmaker(get_db_engine(), expire_on_commit=False)

    return _session_factory


@asynccontextmanager
async def get_db_session_context() -> AsyncGenerator[AsyncSession, None]:
    """
    One session per storage operation.

    Everything a single operation issues (a day insert and the program's
    ``total_days`` recount, say) commits together; any error rolls the whole
    operation back and propagates to the caller.
    """
    async with _get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create the programs, program_days and prayer_requests tables if missing."""
    async with get_db_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Dispose the engine; safe to call when nothing was opened."""
    global _engine, _session_factory

    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
