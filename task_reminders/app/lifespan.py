"""Application lifespan management.

Startup Order:
1. Logging
2. Database (engine, optional table creation)
3. Email (provider and reminder email builder, when configured)

Shutdown Order: reverse of startup.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from task_reminders.core.settings import (
    get_app_settings,
    get_db_settings,
    get_email_settings,
    get_logging_settings,
    get_reminder_settings,
)
from task_reminders.features.reminders.notifications import ReminderEmailBuilder
from task_reminders.infra.database import Database
from task_reminders.infra.email import create_email_provider
from task_reminders.infra.logging import setup_logging, shutdown

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


async def _startup_database(app: FastAPI) -> None:
    settings = get_db_settings()
    database = Database.from_settings(settings)
    if settings.create_tables:
        await database.create_tables()
    app.state.database = database
    logger.info(
        "Database initialized",
        extra={"sqlite": settings.is_sqlite, "create_tables": settings.create_tables},
    )


def _startup_email(app: FastAPI) -> None:
    settings = get_email_settings()
    app.state.email_builder = ReminderEmailBuilder.from_settings(settings, get_reminder_settings())

    if not settings.is_configured:
        # Routes that send email answer 500 until this is fixed
        app.state.email_provider = None
        logger.warning(
            "Email delivery is not configured",
            extra={"backend": settings.backend, "enabled": settings.enabled},
        )
        return
    app.state.email_provider = create_email_provider(settings)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    app_settings = get_app_settings()
    setup_logging(log_settings=get_logging_settings(), force=True)
    logger.info(
        "Application starting",
        extra={"service": app_settings.service_name, "environment": app_settings.environment},
    )

    await _startup_database(app)
    _startup_email(app)

    try:
        yield
    finally:
        logger.info("Application shutting down")
        database: Database | None = getattr(app.state, "database", None)
        if database is not None:
            await database.dispose()
        shutdown()
