"""Current-user resolution.

Authentication is handled upstream (a gateway or identity provider); it
forwards the authenticated user's id in the ``X-User-Id`` header. This
dependency only turns that id into a ``User`` row.
"""

from __future__ import annotations

import logging
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from task_reminders.core.dependencies.database import get_db_session
from task_reminders.core.exceptions import UnauthorizedException
from task_reminders.features.users.models import User
from task_reminders.features.users.repository import get_user_repository
from task_reminders.infra.logging import set_log_context

logger = logging.getLogger(__name__)


async def get_current_user(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    x_user_id: Annotated[str | None, Header()] = None,
) -> User:
    """Resolve the ``X-User-Id`` header to a user.

    Raises:
        UnauthorizedException: If the header is missing, malformed, or unknown.
    """
    if not x_user_id:
        raise UnauthorizedException(detail="Missing user identity", type="missing-user")

    try:
        user_id = UUID(x_user_id)
    except ValueError:
        raise UnauthorizedException(
            detail="Malformed user identity", type="invalid-user"
        ) from None

    user = await get_user_repository().get(session, user_id)
    if user is None:
        logger.info(
            "Unknown user identity presented",
            extra={"user_id": str(user_id), "operation": "auth.get_current_user"},
        )
        raise UnauthorizedException(detail="Unknown user", type="invalid-user")

    set_log_context(user_id=str(user.id))
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
