"""Service layer for user sign-up."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError

from task_reminders.core.exceptions import ConflictException
from task_reminders.core.services.base import BaseService
from task_reminders.features.categories.repository import (
    CategoryRepository,
    get_category_repository,
)
from task_reminders.features.users.models import User
from task_reminders.features.users.repository import UserRepository, get_user_repository

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from task_reminders.features.users.schemas import UserCreate


def _email_taken() -> ConflictException:
    return ConflictException(
        detail="A user with this email already exists",
        type="email-taken",
    )


class UserService(BaseService):
    """Creates accounts and seeds their default categories."""

    def __init__(
        self,
        session: AsyncSession,
        repository: UserRepository | None = None,
        categories: CategoryRepository | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._repository = repository or get_user_repository()
        self._categories = categories or get_category_repository()

    async def sign_up(self, payload: UserCreate) -> User:
        """Create a user and their default categories in one transaction.

        Raises:
            ConflictException: If the email is already registered.
        """
        if await self._repository.get_by_email(self._session, payload.email) is not None:
            raise _email_taken()

        try:
            user = await self._repository.create(
                self._session,
                User(email=payload.email, display_name=payload.display_name),
            )
            defaults = await self._categories.seed_defaults(self._session, user.id)
            await self._session.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent sign-up for the same address
            await self._session.rollback()
            raise _email_taken() from e

        self.logger.info(
            "User signed up",
            extra={
                "user_id": str(user.id),
                "default_categories": len(defaults),
                "operation": "service.sign_up",
            },
        )
        return user
