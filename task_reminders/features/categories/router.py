"""API router for the categories feature."""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from task_reminders.core.dependencies.auth import CurrentUser
from task_reminders.core.dependencies.database import get_db_session
from task_reminders.features.categories.schemas import (
    CategoryCreate,
    CategoryRead,
    CategoryUpdate,
)
from task_reminders.features.categories.service import CategoryService
from task_reminders.features.tasks.schemas import TaskRead
from task_reminders.features.tasks.service import TaskService

router = APIRouter(prefix="/categories", tags=["categories"])


def get_category_service(
    user: CurrentUser,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> CategoryService:
    return CategoryService(session, user.id)


CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]


@router.get("", response_model=list[CategoryRead], summary="List categories")
async def list_categories(service: CategoryServiceDep) -> list[CategoryRead]:
    return [CategoryRead.model_validate(c) for c in await service.list_categories()]


@router.post(
    "",
    response_model=CategoryRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
)
async def create_category(payload: CategoryCreate, service: CategoryServiceDep) -> CategoryRead:
    return CategoryRead.model_validate(await service.create_category(payload))


@router.get(
    "/{category_id}",
    response_model=CategoryRead,
    summary="Get a category",
    responses={404: {"description": "Category not found"}},
)
async def get_category(category_id: UUID, service: CategoryServiceDep) -> CategoryRead:
    return CategoryRead.model_validate(await service.get_category(category_id))


@router.get(
    "/{category_id}/tasks",
    response_model=list[TaskRead],
    summary="List a category's tasks",
    responses={404: {"description": "Category not found"}},
)
async def list_category_tasks(
    category_id: UUID,
    user: CurrentUser,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> list[TaskRead]:
    tasks = await TaskService(session, user.id).list_tasks(category_id=category_id)
    return [TaskRead.model_validate(task) for task in tasks]


@router.patch(
    "/{category_id}",
    response_model=CategoryRead,
    summary="Update a category",
    responses={404: {"description": "Category not found"}},
)
async def update_category(
    category_id: UUID,
    payload: CategoryUpdate,
    service: CategoryServiceDep,
) -> CategoryRead:
    return CategoryRead.model_validate(await service.update_category(category_id, payload))


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a category",
    description="Permanently delete a category together with all of its tasks.",
    responses={404: {"description": "Category not found"}},
)
async def delete_category(category_id: UUID, service: CategoryServiceDep) -> None:
    await service.delete_category(category_id)
