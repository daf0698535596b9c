"""Database engine and session management."""

from task_reminders.infra.database.session import Database

__all__ = ["Database"]
