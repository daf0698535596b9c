"""API router for the users feature."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from task_reminders.core.dependencies.auth import CurrentUser
from task_reminders.core.dependencies.database import get_db_session
from task_reminders.features.users.schemas import UserCreate, UserRead
from task_reminders.features.users.service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Sign up",
    description="Create a user. Home, Work and Personal categories are created with it.",
    responses={409: {"description": "Email already registered"}},
)
async def sign_up(
    payload: UserCreate,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> UserRead:
    user = await UserService(session).sign_up(payload)
    return UserRead.model_validate(user)


@router.get(
    "/me",
    response_model=UserRead,
    summary="Current user",
    responses={401: {"description": "Missing or unknown user"}},
)
async def read_current_user(user: CurrentUser) -> UserRead:
    return UserRead.model_validate(user)
