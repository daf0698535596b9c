"""Repository for the categories feature."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from task_reminders.core.database import BaseRepository
from task_reminders.features.categories.models import Category
from task_reminders.features.tasks.models import Task
from task_reminders.features.tasks.repository import get_task_repository

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession

# Seeded for every new user: (name, color token, icon glyph)
DEFAULT_CATEGORIES: tuple[tuple[str, str, str], ...] = (
    ("Home", "bg-blue-500", "🏠"),
    ("Work", "bg-purple-500", "💼"),
    ("Personal", "bg-green-500", "👤"),
)


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category model.

    Every lookup is scoped by owner: a category belonging to someone else
    is indistinguishable from a missing one.
    """

    def __init__(self) -> None:
        super().__init__(Category)

    async def list_for_user(self, session: AsyncSession, user_id: UUID) -> Sequence[Category]:
        stmt = (
            select(Category)
            .where(Category.user_id == user_id)
            .order_by(Category.created_at.asc(), Category.name.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_for_user(
        self,
        session: AsyncSession,
        category_id: UUID,
        user_id: UUID,
    ) -> Category | None:
        stmt = select(Category).where(Category.id == category_id, Category.user_id == user_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def seed_defaults(self, session: AsyncSession, user_id: UUID) -> Sequence[Category]:
        """Create the default categories for a new user."""
        return await self.create_many(
            session,
            [
                Category(user_id=user_id, name=name, color=color, icon=icon)
                for name, color, icon in DEFAULT_CATEGORIES
            ],
        )

    async def delete_with_tasks(self, session: AsyncSession, category: Category) -> int:
        """Delete a category and every task filed under it.

        Tasks are deleted explicitly; SQLite only enforces ON DELETE CASCADE
        on connections with foreign keys enabled.

        Returns:
            Number of tasks deleted with the category
        """
        category_id = category.id
        deleted_tasks = await get_task_repository().delete_where(
            session, Task.category_id == category_id
        )
        await self.delete(session, category)

        self._logger.info(
            "Category deleted with its tasks",
            extra={
                "category_id": str(category_id),
                "tasks_deleted": deleted_tasks,
                "operation": "db.delete_with_tasks",
            },
        )
        return deleted_tasks


_category_repository: CategoryRepository | None = None


def get_category_repository() -> CategoryRepository:
    """Get the shared CategoryRepository instance."""
    global _category_repository
    if _category_repository is None:
        _category_repository = CategoryRepository()
    return _category_repository
