"""Business logic for the reminder sweep and per-user reminder views."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy.exc import SQLAlchemyError

from task_reminders.core.database import RepositoryError, utcnow
from task_reminders.core.exceptions import ConfigurationException
from task_reminders.core.services.base import BaseService
from task_reminders.features.reminders.exceptions import (
    ReminderDeliveryException,
    ReminderSweepError,
)
from task_reminders.features.reminders.notifications import group_by_owner
from task_reminders.features.reminders.recurrence import advance
from task_reminders.features.reminders.repository import (
    ReminderRepository,
    get_reminder_repository,
)
from task_reminders.features.reminders.schemas import (
    ReminderGroup,
    SweepSummary,
    TestReminderResult,
    UpcomingReminders,
)
from task_reminders.features.tasks.repository import TaskRepository, get_task_repository
from task_reminders.features.tasks.schemas import TaskRead
from task_reminders.infra.email import SENDER_RESTRICTED
from task_reminders.infra.logging import remove_from_log_context, set_log_context

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from task_reminders.core.settings.reminders import ReminderSettings
    from task_reminders.features.reminders.notifications import ReminderEmailBuilder
    from task_reminders.features.users.models import User
    from task_reminders.infra.email import EmailProvider


class ReminderSweepService(BaseService):
    """One check-and-notify cycle over every user's due tasks.

    For each owner with due tasks a single email is sent; only after the
    provider confirms delivery are that owner's tasks rescheduled. A failed
    delivery leaves the tasks due so the next sweep picks them up again.
    Each reschedule is committed on its own.
    """

    def __init__(
        self,
        session: AsyncSession,
        provider: EmailProvider,
        builder: ReminderEmailBuilder,
        repository: ReminderRepository | None = None,
        tasks: TaskRepository | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._provider = provider
        self._builder = builder
        self._repository = repository or get_reminder_repository()
        self._tasks = tasks or get_task_repository()

    async def run(self, now: datetime | None = None) -> SweepSummary:
        """Run one sweep.

        Args:
            now: Reference instant; defaults to the current UTC time.

        Raises:
            ReminderSweepError: If the due-task query fails.
        """
        now = now or utcnow()
        set_log_context(sweep_id=uuid4().hex[:12])
        try:
            return await self._run(now)
        finally:
            remove_from_log_context("sweep_id")

    async def _run(self, now: datetime) -> SweepSummary:
        try:
            due = await self._repository.find_due(self._session, now)
        except RepositoryError as e:
            raise ReminderSweepError(extra={"as_of": now.isoformat()}) from e

        summary = SweepSummary(tasks_found=len(due), timestamp=now)
        if not due:
            self.logger.info(
                "No due tasks",
                extra={"as_of": now.isoformat(), "operation": "service.reminder_sweep"},
            )
            return summary

        groups = group_by_owner(due)
        self.logger.info(
            "Due tasks selected",
            extra={
                "tasks_found": len(due),
                "users": len(groups),
                "operation": "service.reminder_sweep",
            },
        )

        for group in groups.values():
            if not await self._notify(group):
                summary.users_failed += 1
                continue
            summary.emails_sent += 1

            updated, failed = await self._advance_group(group)
            summary.tasks_updated += updated
            summary.tasks_failed += failed

        self.logger.info(
            "Reminder sweep finished",
            extra={
                **summary.model_dump(by_alias=False, exclude={"timestamp"}),
                "operation": "service.reminder_sweep",
            },
        )
        return summary

    async def _notify(self, group: ReminderGroup) -> bool:
        """Send the group's notification. Failures are logged, never raised."""
        try:
            message = self._builder.build(group)
            result = await self._provider.send(message)
        except Exception:
            self.logger.exception(
                "Reminder email could not be sent",
                extra={
                    "user_id": str(group.user_id),
                    "task_count": group.count,
                    "operation": "service.reminder_notify",
                },
            )
            return False

        if not result.success:
            self.logger.warning(
                "Reminder email rejected by provider",
                extra={
                    "user_id": str(group.user_id),
                    "task_count": group.count,
                    "error": result.error,
                    "error_code": result.error_code,
                    "operation": "service.reminder_notify",
                },
            )
            return False

        self._lazy.debug(
            lambda: f"service.reminder_notify: user={group.user_id} tasks={group.count} id={result.message_id}"
        )
        return True

    async def _advance_group(self, group: ReminderGroup) -> tuple[int, int]:
        """Reschedule every task in a delivered group.

        A task whose next instant cannot be computed, or whose frequency is
        unknown, is counted as failed and left as is.

        Returns:
            Tuple of (updated, failed) counts.
        """
        updated = failed = 0
        for task in group.tasks:
            log_extra = {
                "task_id": str(task.task_id),
                "user_id": str(group.user_id),
                "operation": "service.reminder_advance",
            }
            try:
                next_reminder = advance(task.next_reminder, task.frequency)
            except (OverflowError, ValueError):
                failed += 1
                self.logger.exception(
                    "Next reminder is out of range",
                    extra={**log_extra, "next_reminder": task.next_reminder.isoformat()},
                )
                continue

            if next_reminder == task.next_reminder:
                failed += 1
                self.logger.warning(
                    "Task not rescheduled, frequency unknown",
                    extra={**log_extra, "frequency": str(task.frequency)},
                )
                continue

            try:
                found = await self._tasks.reschedule(self._session, task.task_id, next_reminder)
                await self._session.commit()
            except SQLAlchemyError:
                await self._session.rollback()
                failed += 1
                self.logger.exception("Failed to reschedule task", extra=log_extra)
                continue

            if not found:
                failed += 1
                self.logger.warning("Task disappeared before it could be rescheduled", extra=log_extra)
                continue

            updated += 1
            self._lazy.debug(
                lambda task=task, next_reminder=next_reminder: (
                    f"service.reminder_advance: {task.task_id} {task.frequency} -> {next_reminder.isoformat()}"
                )
            )
        return updated, failed


class UserReminderService(BaseService):
    """Reminder views and the test reminder for a single user."""

    def __init__(
        self,
        session: AsyncSession,
        user: User,
        settings: ReminderSettings,
        *,
        provider: EmailProvider | None = None,
        builder: ReminderEmailBuilder | None = None,
        repository: ReminderRepository | None = None,
        tasks: TaskRepository | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._user = user
        self._settings = settings
        self._provider = provider
        self._builder = builder
        self._repository = repository or get_reminder_repository()
        self._tasks = tasks or get_task_repository()

    async def upcoming(self, now: datetime | None = None) -> UpcomingReminders:
        """Bucket the user's incomplete tasks into overdue, today and upcoming.

        "Today" ends at midnight UTC.
        """
        now = now or utcnow()
        end_of_today = datetime.combine(now.date() + timedelta(days=1), datetime.min.time(), now.tzinfo)

        tasks = await self._tasks.list_for_user(
            self._session, self._user.id, include_completed=False
        )
        view = UpcomingReminders()
        for task in tasks:
            item = TaskRead.model_validate(task)
            if task.next_reminder < now:
                view.overdue.append(item)
            elif task.next_reminder < end_of_today:
                view.today.append(item)
            else:
                view.upcoming.append(item)

        view.overdue_count = len(view.overdue)
        view.today_count = len(view.today)
        view.upcoming_count = len(view.upcoming)
        return view

    async def send_test(self, now: datetime | None = None) -> TestReminderResult:
        """Email the user a preview of reminders due in the configured window.

        Nothing is rescheduled.

        Raises:
            ConfigurationException: If no email provider is configured.
            ReminderDeliveryException: If the provider rejects the message.
        """
        if self._provider is None or self._builder is None:
            raise ConfigurationException(detail="Email delivery is not configured")

        now = now or utcnow()
        window = self._settings.test_window_hours
        due = await self._repository.find_upcoming_for_user(
            self._session,
            self._user.id,
            start=now,
            end=now + timedelta(hours=window),
            limit=self._settings.test_max_tasks,
        )
        group = ReminderGroup(
            user_id=self._user.id,
            email=self._user.email,
            display_name=self._user.display_name,
            tasks=due,
        )

        message = self._builder.build(group, is_test=True, window_hours=window)
        result = await self._provider.send(message)

        if not result.success:
            self.logger.warning(
                "Test reminder failed",
                extra={
                    "user_id": str(self._user.id),
                    "error_code": result.error_code,
                    "operation": "service.send_test_reminder",
                },
            )
            if result.error_code == SENDER_RESTRICTED:
                raise ReminderDeliveryException.sender_restricted(result.error)
            raise ReminderDeliveryException(
                result.error or "Failed to send test email",
                extra={"error_code": result.error_code},
            )

        self.logger.info(
            "Test reminder sent",
            extra={
                "user_id": str(self._user.id),
                "task_count": group.count,
                "operation": "service.send_test_reminder",
            },
        )
        return TestReminderResult(
            message_id=result.message_id,
            recipient=self._user.email,
            tasks_included=group.count,
        )
