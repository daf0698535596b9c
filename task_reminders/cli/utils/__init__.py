"""CLI utilities for running async operations and formatting output."""

from task_reminders.cli.utils.async_runner import coro
from task_reminders.cli.utils.formatters import error, info, success, warning

__all__ = [
    "coro",
    "error",
    "info",
    "success",
    "warning",
]
