"""Async database engine and session management.

A ``Database`` owns one engine and its session factory. The API creates
one in its lifespan and stores it on ``app.state``; the CLI creates one
per command. Nothing is created at import time.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from task_reminders.core.database.base import Base

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from task_reminders.core.settings.database import DatabaseSettings

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_conn: Any, connection_record: Any) -> None:
    """SQLite leaves foreign key enforcement off unless asked per connection."""
    _ = connection_record
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Engine plus session factory for one database URL.

    Example:
        database = Database.from_settings(get_db_settings())
        async with database.session() as session:
            tasks = await repo.find_due(session, now)
        await database.dispose()
    """

    def __init__(self, url: str, **engine_kwargs: Any) -> None:
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        if url.startswith("sqlite"):
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: DatabaseSettings) -> Database:
        return cls(settings.url, **settings.sqlalchemy_engine_kwargs())

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session that is closed on exit.

        Sessions never commit implicitly; services commit at their own
        transaction boundaries.
        """
        async with self.session_factory() as session:
            try:
                yield session
            finally:
                await session.close()

    async def ping(self) -> None:
        """Run a trivial query; raises if the database is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def create_tables(self) -> None:
        """Create all tables registered on ``Base.metadata`` (idempotent)."""
        # Model modules must be imported so their tables are registered
        import task_reminders.features.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured", extra={"tables": len(Base.metadata.tables)})

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()
        logger.info("Database connection closed")
