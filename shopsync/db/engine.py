"""Async SQLAlchemy engine and session factory for the SQL remote store."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

_SQLITE_PREFIX = "sqlite+aiosqlite:///"


def make_engine(database_url: str) -> AsyncEngine:
    """Create an async engine, making the parent directory for file-backed SQLite."""
    if database_url.startswith(_SQLITE_PREFIX):
        db_path = database_url.replace(_SQLITE_PREFIX, "")
        if db_path and db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    return create_async_engine(database_url, echo=False)


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables(engine: AsyncEngine) -> None:
    """Create repair_orders and master_inventory if missing."""
    from shopsync.models.base import Base
    import shopsync.models  # noqa: F401  registers the tables

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
