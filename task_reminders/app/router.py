"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated

from fastapi import APIRouter, Depends

from task_reminders.core.dependencies.database import get_database
from task_reminders.core.settings import get_app_settings
from task_reminders.features.categories.router import router as categories_router
from task_reminders.features.reminders.router import router as reminders_router
from task_reminders.features.tasks.router import router as tasks_router
from task_reminders.features.users.router import router as users_router
from task_reminders.infra.database import Database

if TYPE_CHECKING:
    from fastapi import FastAPI

    from task_reminders.core.settings.app import AppSettings

logger = logging.getLogger(__name__)

health_router = APIRouter(tags=["health"])


@health_router.get("/health", summary="Health check")
async def health(database: Annotated[Database, Depends(get_database)]) -> dict[str, str]:
    """Report whether the database answers a trivial query."""
    try:
        await database.ping()
    except Exception as e:
        logger.warning("Health check failed", extra={"error": str(e)})
        return {"status": "degraded", "database": "unavailable"}
    return {"status": "ok", "database": "ok"}


def setup_routers(app: FastAPI, app_settings: AppSettings | None = None) -> None:
    """Register all feature routers with the application.

    Args:
        app: FastAPI application instance.
        app_settings: Optional application settings override for the API prefix.
    """
    app_settings = app_settings or get_app_settings()
    api_prefix = app_settings.api_prefix

    app.include_router(health_router, prefix=api_prefix)
    app.include_router(users_router, prefix=api_prefix)
    app.include_router(categories_router, prefix=api_prefix)
    app.include_router(tasks_router, prefix=api_prefix)
    app.include_router(reminders_router, prefix=api_prefix)

    logger.info("Routers registered", extra={"api_prefix": api_prefix})
