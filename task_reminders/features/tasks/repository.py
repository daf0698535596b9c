"""Repository for the tasks feature."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select, update

from task_reminders.core.database import BaseRepository
from task_reminders.features.tasks.models import Task

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession


class TaskRepository(BaseRepository[Task]):
    """Repository for Task model, scoped by owner."""

    def __init__(self) -> None:
        super().__init__(Task)

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: UUID,
        *,
        category_id: UUID | None = None,
        include_completed: bool = True,
    ) -> Sequence[Task]:
        """List a user's tasks, soonest reminder first."""
        stmt = select(Task).where(Task.user_id == user_id)
        if category_id is not None:
            stmt = stmt.where(Task.category_id == category_id)
        if not include_completed:
            stmt = stmt.where(Task.completed.is_(False))
        stmt = stmt.order_by(Task.next_reminder.asc(), Task.created_at.asc())

        result = await session.execute(stmt)
        items = result.scalars().all()

        self._lazy.debug(
            lambda: f"db.list_for_user: Task(user={user_id}, category={category_id}) -> {len(items)} items"
        )
        return items

    async def get_for_user(
        self,
        session: AsyncSession,
        task_id: UUID,
        user_id: UUID,
    ) -> Task | None:
        stmt = select(Task).where(Task.id == task_id, Task.user_id == user_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def reschedule(
        self,
        session: AsyncSession,
        task_id: UUID,
        next_reminder: datetime,
    ) -> bool:
        """Move a task's next reminder. Returns False if the task no longer exists.

        The caller owns the commit.
        """
        stmt = update(Task).where(Task.id == task_id).values(next_reminder=next_reminder)
        result = await session.execute(stmt)
        self._lazy.debug(lambda: f"db.reschedule: Task({task_id}) -> {next_reminder.isoformat()}")
        return result.rowcount > 0


_task_repository: TaskRepository | None = None


def get_task_repository() -> TaskRepository:
    """Get the shared TaskRepository instance."""
    global _task_repository
    if _task_repository is None:
        _task_repository = TaskRepository()
    return _task_repository
