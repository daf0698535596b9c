"""Grouping due tasks by owner and building their reminder emails."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from dateutil import tz

from task_reminders.features.reminders.recurrence import describe_frequency
from task_reminders.features.reminders.schemas import ReminderGroup
from task_reminders.infra.email import EmailMessage, EmailTemplateRenderer

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime
    from uuid import UUID

    from task_reminders.core.settings.email import EmailSettings
    from task_reminders.core.settings.reminders import ReminderSettings
    from task_reminders.features.reminders.schemas import DueTask

logger = logging.getLogger(__name__)

REMINDER_TEMPLATE = "reminder"
UNCATEGORIZED = "Uncategorized"


def group_by_owner(due_tasks: Iterable[DueTask]) -> dict[UUID, ReminderGroup]:
    """Partition due tasks by owner, keeping selection order within each group."""
    groups: dict[UUID, ReminderGroup] = {}
    for task in due_tasks:
        group = groups.get(task.user_id)
        if group is None:
            group = groups[task.user_id] = ReminderGroup(
                user_id=task.user_id,
                email=task.owner_email,
                display_name=task.owner_display_name,
            )
        group.tasks.append(task)
    return groups


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def reminder_subject(count: int, *, is_test: bool = False) -> str:
    if is_test:
        return f"Test Reminder - You have {_plural(count, 'upcoming task')}"
    return f"You have {_plural(count, 'task')} due"


class ReminderEmailBuilder:
    """Render one reminder email per group.

    Example:
        builder = ReminderEmailBuilder(EmailTemplateRenderer(), display_timezone="Europe/Paris")
        message = builder.build(group)
    """

    def __init__(
        self,
        renderer: EmailTemplateRenderer,
        *,
        display_timezone: str = "UTC",
    ) -> None:
        self._renderer = renderer
        self._tz_name = display_timezone
        self._tz = tz.gettz(display_timezone)
        if self._tz is None:
            logger.warning(
                "Unknown display timezone, falling back to UTC",
                extra={"timezone": display_timezone, "operation": "notifications.init"},
            )
            self._tz = tz.UTC
            self._tz_name = "UTC"

    @classmethod
    def from_settings(
        cls,
        email_settings: EmailSettings,
        reminder_settings: ReminderSettings,
    ) -> ReminderEmailBuilder:
        return cls(
            EmailTemplateRenderer.from_settings(email_settings),
            display_timezone=reminder_settings.display_timezone,
        )

    def format_time(self, instant: datetime) -> str:
        local = instant.astimezone(self._tz)
        return f"{local:%b %d, %Y %I:%M %p} {self._tz_name}"

    def build(
        self,
        group: ReminderGroup,
        *,
        is_test: bool = False,
        window_hours: int | None = None,
    ) -> EmailMessage:
        """Build the single notification for ``group``.

        Raises:
            TemplateNotFoundError: If the reminder template is missing.
        """
        subject = reminder_subject(group.count, is_test=is_test)
        html, text = self._renderer.render(
            REMINDER_TEMPLATE,
            subject=subject,
            display_name=group.display_name or "there",
            is_test=is_test,
            window_hours=window_hours,
            tasks=[
                {
                    "title": task.title,
                    "description": task.description,
                    "category": task.category_name or UNCATEGORIZED,
                    "frequency": describe_frequency(task.frequency),
                    "reminder_time": self.format_time(task.next_reminder),
                }
                for task in group.tasks
            ],
        )
        return EmailMessage(
            to=[group.email],
            subject=subject,
            body_html=html,
            body_text=text,
            tags={"category": "test-reminder" if is_test else "task-reminder"},
        )
