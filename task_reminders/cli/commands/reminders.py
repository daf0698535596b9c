"""Reminder sweep commands.

Lets a system scheduler (cron, systemd timers, Kubernetes CronJobs) run a
sweep without going through the HTTP trigger.
"""

from __future__ import annotations

import sys

import click

from task_reminders.cli.utils import coro, error, info, success, warning
from task_reminders.core.exceptions import AppException
from task_reminders.core.settings import (
    get_db_settings,
    get_email_settings,
    get_reminder_settings,
)
from task_reminders.features.reminders.notifications import ReminderEmailBuilder
from task_reminders.features.reminders.service import ReminderSweepService
from task_reminders.infra.database import Database
from task_reminders.infra.email import create_email_provider


@click.group(name="reminders")
def reminders() -> None:
    """Reminder sweep commands."""


@reminders.command()
@click.option("--json", "as_json", is_flag=True, help="Print the summary as JSON")
@coro
async def sweep(as_json: bool) -> None:
    """Run one reminder sweep and print its summary.

    Exits with status 1 when email is not configured or the due-task
    query fails.

    Example:
        task-reminders reminders sweep --json
    """
    email_settings = get_email_settings()
    if not email_settings.is_configured:
        error(f"Email delivery is not configured (backend: {email_settings.backend})")
        sys.exit(1)

    database = Database.from_settings(get_db_settings())
    try:
        provider = create_email_provider(email_settings)
        builder = ReminderEmailBuilder.from_settings(email_settings, get_reminder_settings())
        async with database.session() as session:
            summary = await ReminderSweepService(session, provider, builder).run()
    except AppException as e:
        error(f"Reminder sweep failed: {e.detail}")
        sys.exit(1)
    finally:
        await database.dispose()

    if as_json:
        click.echo(summary.model_dump_json())
        return

    info(f"Tasks found:   {summary.tasks_found}")
    info(f"Emails sent:   {summary.emails_sent}")
    info(f"Tasks updated: {summary.tasks_updated}")
    if summary.users_failed or summary.tasks_failed:
        warning(f"Users failed: {summary.users_failed}, tasks failed: {summary.tasks_failed}")
    success("Reminder sweep complete")
