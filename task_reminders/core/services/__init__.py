"""Service layer base classes."""

from task_reminders.core.services.base import BaseService

__all__ = ["BaseService"]
