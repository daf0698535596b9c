"""Typed, environment-driven settings."""

from .app import AppSettings
from .database import DatabaseSettings
from .email import EmailSettings
from .loader import (
    clear_all_caches,
    get_app_settings,
    get_db_settings,
    get_email_settings,
    get_logging_settings,
    get_reminder_settings,
)
from .logs import LoggingSettings
from .reminders import ReminderSettings

__all__ = [
    "AppSettings",
    "DatabaseSettings",
    "EmailSettings",
    "LoggingSettings",
    "ReminderSettings",
    "clear_all_caches",
    "get_app_settings",
    "get_db_settings",
    "get_email_settings",
    "get_logging_settings",
    "get_reminder_settings",
]
