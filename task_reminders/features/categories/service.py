"""Service layer for category management."""

from __future__ import annotations

from typing import TYPE_CHECKING

from task_reminders.core.exceptions import NotFoundException
from task_reminders.core.services.base import BaseService
from task_reminders.features.categories.models import Category
from task_reminders.features.categories.repository import (
    CategoryRepository,
    get_category_repository,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession

    from task_reminders.features.categories.schemas import CategoryCreate, CategoryUpdate


class CategoryService(BaseService):
    """CRUD for one user's categories.

    Deleting a category deletes every task filed under it.
    """

    def __init__(
        self,
        session: AsyncSession,
        user_id: UUID,
        repository: CategoryRepository | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._user_id = user_id
        self._repository = repository or get_category_repository()

    async def list_categories(self) -> Sequence[Category]:
        return await self._repository.list_for_user(self._session, self._user_id)

    async def get_category(self, category_id: UUID) -> Category:
        category = await self._repository.get_for_user(
            self._session, category_id, self._user_id
        )
        if category is None:
            raise NotFoundException(
                detail="Category not found",
                type="category-not-found",
                extra={"category_id": str(category_id)},
            )
        return category

    async def create_category(self, payload: CategoryCreate) -> Category:
        category = await self._repository.create(
            self._session,
            Category(user_id=self._user_id, **payload.model_dump()),
        )
        await self._session.commit()

        self.logger.info(
            "Category created",
            extra={"category_id": str(category.id), "operation": "service.create_category"},
        )
        return category

    async def update_category(self, category_id: UUID, payload: CategoryUpdate) -> Category:
        category = await self.get_category(category_id)
        values = payload.model_dump(exclude_unset=True, exclude_none=True)
        if values:
            category = await self._repository.update(self._session, category, values)
            await self._session.commit()
        return category

    async def delete_category(self, category_id: UUID) -> int:
        """Delete the category and its tasks; returns the number of tasks removed."""
        category = await self.get_category(category_id)
        deleted_tasks = await self._repository.delete_with_tasks(self._session, category)
        await self._session.commit()
        return deleted_tasks
