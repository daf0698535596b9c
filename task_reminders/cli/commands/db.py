"""Database management commands."""

from __future__ import annotations

import sys

import click

from task_reminders.cli.utils import coro, error, info, success
from task_reminders.core.settings import get_db_settings
from task_reminders.infra.database import Database


@click.group()
def db() -> None:
    """Database management commands."""


@db.command(name="create-tables")
@coro
async def create_tables() -> None:
    """Create all tables (idempotent).

    Example:
        task-reminders db create-tables
    """
    settings = get_db_settings()
    info("Creating database tables...")

    database = Database.from_settings(settings)
    try:
        await database.create_tables()
    except Exception as e:
        error(f"Failed to create tables: {e}")
        sys.exit(1)
    finally:
        await database.dispose()

    success("Database tables created")
