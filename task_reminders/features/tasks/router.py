"""API router for the tasks feature."""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from task_reminders.core.dependencies.auth import CurrentUser
from task_reminders.core.dependencies.database import get_db_session
from task_reminders.features.tasks.schemas import TaskCreate, TaskRead, TaskUpdate
from task_reminders.features.tasks.service import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])


def get_task_service(
    user: CurrentUser,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> TaskService:
    return TaskService(session, user.id)


TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]


@router.get(
    "",
    response_model=list[TaskRead],
    summary="List tasks",
    description="Return the current user's tasks, soonest reminder first.",
)
async def list_tasks(
    service: TaskServiceDep,
    category_id: UUID | None = None,
    include_completed: bool = True,
) -> list[TaskRead]:
    tasks = await service.list_tasks(
        category_id=category_id,
        include_completed=include_completed,
    )
    return [TaskRead.model_validate(task) for task in tasks]


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
    responses={404: {"description": "Category not found"}},
)
async def create_task(payload: TaskCreate, service: TaskServiceDep) -> TaskRead:
    return TaskRead.model_validate(await service.create_task(payload))


@router.get(
    "/{task_id}",
    response_model=TaskRead,
    summary="Get a task",
    responses={404: {"description": "Task not found"}},
)
async def get_task(task_id: UUID, service: TaskServiceDep) -> TaskRead:
    return TaskRead.model_validate(await service.get_task(task_id))


@router.patch(
    "/{task_id}",
    response_model=TaskRead,
    summary="Update a task",
    description="Update an existing task. Only provided fields are changed.",
    responses={404: {"description": "Task or category not found"}},
)
async def update_task(task_id: UUID, payload: TaskUpdate, service: TaskServiceDep) -> TaskRead:
    return TaskRead.model_validate(await service.update_task(task_id, payload))


@router.post(
    "/{task_id}/toggle-complete",
    response_model=TaskRead,
    summary="Toggle completion",
    description="Flip the task's completed flag. Completed tasks are never reminded.",
    responses={404: {"description": "Task not found"}},
)
async def toggle_complete(task_id: UUID, service: TaskServiceDep) -> TaskRead:
    return TaskRead.model_validate(await service.toggle_complete(task_id))


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a task",
    responses={404: {"description": "Task not found"}},
)
async def delete_task(task_id: UUID, service: TaskServiceDep) -> None:
    await service.delete_task(task_id)
