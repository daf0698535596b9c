"""Service layer for task management."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from task_reminders.core.exceptions import NotFoundException
from task_reminders.core.services.base import BaseService
from task_reminders.features.categories.repository import (
    CategoryRepository,
    get_category_repository,
)
from task_reminders.features.tasks.models import Task
from task_reminders.features.tasks.repository import TaskRepository, get_task_repository

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession

    from task_reminders.features.tasks.schemas import TaskCreate, TaskUpdate

# Columns an update may explicitly clear
_NULLABLE_FIELDS = frozenset({"description", "category_id"})


class TaskService(BaseService):
    """CRUD for one user's tasks."""

    def __init__(
        self,
        session: AsyncSession,
        user_id: UUID,
        repository: TaskRepository | None = None,
        categories: CategoryRepository | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._user_id = user_id
        self._repository = repository or get_task_repository()
        self._categories = categories or get_category_repository()

    async def list_tasks(
        self,
        *,
        category_id: UUID | None = None,
        include_completed: bool = True,
    ) -> Sequence[Task]:
        if category_id is not None:
            await self._ensure_category(category_id)
        return await self._repository.list_for_user(
            self._session,
            self._user_id,
            category_id=category_id,
            include_completed=include_completed,
        )

    async def get_task(self, task_id: UUID) -> Task:
        """Fetch one of the user's tasks.

        Raises:
            NotFoundException: If the task does not exist or belongs to someone else.
        """
        task = await self._repository.get_for_user(self._session, task_id, self._user_id)
        if task is None:
            raise NotFoundException(
                detail="Task not found",
                type="task-not-found",
                extra={"task_id": str(task_id)},
            )
        return task

    async def create_task(self, payload: TaskCreate) -> Task:
        if payload.category_id is not None:
            await self._ensure_category(payload.category_id)

        task = await self._repository.create(
            self._session,
            Task(user_id=self._user_id, **payload.model_dump()),
        )
        await self._session.commit()

        self.logger.info(
            "Task created",
            extra={
                "task_id": str(task.id),
                "user_id": str(self._user_id),
                "frequency": task.frequency,
                "operation": "service.create_task",
            },
        )
        return task

    async def update_task(self, task_id: UUID, payload: TaskUpdate) -> Task:
        task = await self.get_task(task_id)

        values: dict[str, Any] = {
            key: value
            for key, value in payload.model_dump(exclude_unset=True).items()
            if value is not None or key in _NULLABLE_FIELDS
        }
        if values.get("category_id") is not None:
            await self._ensure_category(values["category_id"])

        if values:
            task = await self._repository.update(self._session, task, values)
            await self._session.commit()

        self._lazy.debug(lambda: f"service.update_task({task_id}) fields={sorted(values)}")
        return task

    async def toggle_complete(self, task_id: UUID) -> Task:
        task = await self.get_task(task_id)
        task = await self._repository.update(
            self._session, task, {"completed": not task.completed}
        )
        await self._session.commit()

        self.logger.info(
            "Task completion toggled",
            extra={
                "task_id": str(task_id),
                "completed": task.completed,
                "operation": "service.toggle_complete",
            },
        )
        return task

    async def delete_task(self, task_id: UUID) -> None:
        task = await self.get_task(task_id)
        await self._repository.delete(self._session, task)
        await self._session.commit()

    async def _ensure_category(self, category_id: UUID) -> None:
        category = await self._categories.get_for_user(
            self._session, category_id, self._user_id
        )
        if category is None:
            raise NotFoundException(
                detail="Category not found",
                type="category-not-found",
                extra={"category_id": str(category_id)},
            )
