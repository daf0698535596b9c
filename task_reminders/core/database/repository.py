"""Minimal generic repository for SQLAlchemy models.

Provides basic CRUD operations with explicit session passing. For queries
not covered here, use the session directly; feature repositories add their
own methods on top.

Example:
    class CategoryRepository(BaseRepository[Category]):
        async def list_for_user(self, session, user_id):
            stmt = select(Category).where(Category.user_id == user_id)
            result = await session.execute(stmt)
            return result.scalars().all()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlalchemy import delete as sql_delete
from sqlalchemy import select

from task_reminders.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.orm import InstrumentedAttribute


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """Generic CRUD over a single model.

    Provides:
        - get(session, id) -> T | None
        - get_by(session, attr, value) -> T | None
        - create(session, instance) -> T
        - create_many(session, instances) -> Sequence[T]
        - update(session, instance, values) -> T
        - delete(session, instance) -> None
        - delete_where(session, *criteria) -> int

    Session is always explicit. Repositories flush but never commit; the
    caller owns the transaction boundary.
    """

    __slots__ = ("model", "_logger", "_lazy")

    def __init__(self, model: type[T]) -> None:
        self.model = model
        # Standard logger for INFO/WARNING/ERROR
        self._logger = logging.getLogger(f"repository.{model.__name__}")
        # Lazy logger for DEBUG (zero overhead when DEBUG disabled)
        self._lazy = get_lazy_logger(f"repository.{model.__name__}")

    async def get(self, session: AsyncSession, id: Any) -> T | None:  # noqa: A002
        """Get entity by primary key, or None."""
        instance = await session.get(self.model, id)
        self._lazy.debug(
            lambda: f"db.get: {self.model.__name__}({id}) -> {'found' if instance else 'not found'}"
        )
        return instance

    async def get_by(
        self,
        session: AsyncSession,
        attr: InstrumentedAttribute[Any],
        value: Any,
    ) -> T | None:
        """Get the first entity whose ``attr`` equals ``value``."""
        stmt = select(self.model).where(attr == value)
        result = await session.execute(stmt)
        instance = result.scalars().first()

        self._lazy.debug(
            lambda: f"db.get_by: {self.model.__name__}.{attr.key}={value!r} -> {'found' if instance else 'not found'}"
        )
        return instance

    async def create(self, session: AsyncSession, instance: T) -> T:
        """Persist a new entity.

        Adds to session, flushes to get generated values (like id),
        and refreshes so server defaults are loaded.
        """
        session.add(instance)
        await session.flush()
        await session.refresh(instance)

        entity_id = getattr(instance, "id", None)
        self._lazy.debug(lambda: f"db.create: {self.model.__name__}(id={entity_id})")
        return instance

    async def create_many(self, session: AsyncSession, instances: Iterable[T]) -> Sequence[T]:
        """Persist multiple entities in one flush."""
        instances_list = list(instances)
        session.add_all(instances_list)
        await session.flush()
        for instance in instances_list:
            await session.refresh(instance)

        self._lazy.debug(
            lambda: f"db.create_many: {self.model.__name__} -> {len(instances_list)} created"
        )
        return instances_list

    async def update(self, session: AsyncSession, instance: T, values: dict[str, Any]) -> T:
        """Apply ``values`` to a tracked instance and flush."""
        for key, value in values.items():
            setattr(instance, key, value)
        await session.flush()
        await session.refresh(instance)

        self._lazy.debug(
            lambda: f"db.update: {self.model.__name__}(id={getattr(instance, 'id', None)}) fields={sorted(values)}"
        )
        return instance

    async def delete(self, session: AsyncSession, instance: T) -> None:
        """Delete an entity."""
        entity_id = getattr(instance, "id", None)
        await session.delete(instance)
        await session.flush()

        self._logger.info(
            "Entity deleted",
            extra={"entity": self.model.__name__, "id": str(entity_id), "operation": "db.delete"},
        )

    async def delete_where(self, session: AsyncSession, *criteria: Any) -> int:
        """Delete every row matching ``criteria`` with a single DELETE.

        Does not load entities into the session.

        Returns:
            Number of rows deleted
        """
        stmt = sql_delete(self.model).where(*criteria)
        result = await session.execute(stmt)
        await session.flush()
        deleted_count: int = getattr(result, "rowcount", 0) or 0

        self._lazy.debug(
            lambda: f"db.delete_where: {self.model.__name__} -> {deleted_count} deleted"
        )
        return deleted_count
