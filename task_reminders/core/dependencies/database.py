"""Database dependencies for FastAPI route handlers.

The ``Database`` is created in the application lifespan and stored on
``app.state.database``; handlers receive a session per request.

    @router.get("/tasks")
    async def list_tasks(session: Annotated[AsyncSession, Depends(get_db_session)]):
        ...
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from task_reminders.core.exceptions import ConfigurationException
from task_reminders.infra.database import Database


def get_database(request: Request) -> Database:
    database: Database | None = getattr(request.app.state, "database", None)
    if database is None:
        raise ConfigurationException(detail="Database is not initialized")
    return database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession]:
    """Yield a session that is closed when the request completes."""
    async with get_database(request).session() as session:
        yield session
