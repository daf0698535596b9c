"""Read queries behind the reminder sweep."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Select, select
from sqlalchemy.exc import SQLAlchemyError

from task_reminders.core.database import BaseRepository, RepositoryError
from task_reminders.features.categories.models import Category
from task_reminders.features.reminders.schemas import DueTask
from task_reminders.features.tasks.models import Task
from task_reminders.features.users.models import User

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime
    from uuid import UUID

    from sqlalchemy import Row
    from sqlalchemy.ext.asyncio import AsyncSession


class ReminderRepository(BaseRepository[Task]):
    """Selects tasks whose reminders are due, together with their owners.

    Owners and categories are outer-joined so a task whose owner row is
    gone still surfaces here and can be reported instead of silently
    disappearing from the sweep.
    """

    def __init__(self) -> None:
        super().__init__(Task)

    @staticmethod
    def _due_select() -> Select:
        return (
            select(
                Task.id,
                Task.user_id,
                Task.title,
                Task.description,
                Task.frequency,
                Task.next_reminder,
                Category.name.label("category_name"),
                User.email,
                User.display_name,
            )
            .outerjoin(User, User.id == Task.user_id)
            .outerjoin(Category, Category.id == Task.category_id)
            .where(
                Task.email_notification.is_(True),
                Task.completed.is_(False),
            )
        )

    async def find_due(self, session: AsyncSession, as_of: datetime) -> list[DueTask]:
        """Return every task due at ``as_of`` (inclusive), soonest first.

        Raises:
            RepositoryError: If the query fails.
        """
        stmt = (
            self._due_select()
            .where(Task.next_reminder <= as_of)
            .order_by(Task.next_reminder.asc(), Task.id.asc())
        )
        rows = await self._fetch(session, stmt, operation="find_due")
        due = self._to_due_tasks(rows)

        self._lazy.debug(
            lambda: f"db.find_due(as_of={as_of.isoformat()}) -> {len(due)} of {len(rows)} rows"
        )
        return due

    async def find_upcoming_for_user(
        self,
        session: AsyncSession,
        user_id: UUID,
        *,
        start: datetime,
        end: datetime,
        limit: int,
    ) -> list[DueTask]:
        """Return a user's email-enabled tasks due within ``[start, end]``.

        Raises:
            RepositoryError: If the query fails.
        """
        stmt = (
            self._due_select()
            .where(
                Task.user_id == user_id,
                Task.next_reminder >= start,
                Task.next_reminder <= end,
            )
            .order_by(Task.next_reminder.asc(), Task.id.asc())
            .limit(limit)
        )
        rows = await self._fetch(session, stmt, operation="find_upcoming_for_user")
        return self._to_due_tasks(rows)

    async def _fetch(
        self,
        session: AsyncSession,
        stmt: Select,
        *,
        operation: str,
    ) -> Sequence[Row]:
        try:
            result = await session.execute(stmt)
        except SQLAlchemyError as e:
            self._logger.exception(
                "Due task query failed",
                extra={"operation": f"db.{operation}", "error": str(e)},
            )
            raise RepositoryError("Failed to query due tasks", {"operation": operation}) from e
        return result.all()

    def _to_due_tasks(self, rows: Sequence[Row]) -> list[DueTask]:
        due: list[DueTask] = []
        for row in rows:
            if not row.email:
                self._logger.warning(
                    "Skipping due task without a reachable owner",
                    extra={
                        "task_id": str(row.id),
                        "user_id": str(row.user_id),
                        "owner_found": row.display_name is not None,
                        "operation": "db.find_due",
                    },
                )
                continue
            due.append(
                DueTask(
                    task_id=row.id,
                    user_id=row.user_id,
                    title=row.title,
                    description=row.description,
                    category_name=row.category_name,
                    frequency=row.frequency,
                    next_reminder=row.next_reminder,
                    owner_email=row.email,
                    owner_display_name=row.display_name or "",
                )
            )
        return due


_reminder_repository: ReminderRepository | None = None


def get_reminder_repository() -> ReminderRepository:
    """Get the shared ReminderRepository instance."""
    global _reminder_repository
    if _reminder_repository is None:
        _reminder_repository = ReminderRepository()
    return _reminder_repository
