"""Pytest configuration and shared fixtures.

Organization:
    - Database Fixtures: a file-backed SQLite database per test and a session on it
    - Factory Fixtures: helpers that persist users, categories and tasks
    - Email Fixtures: a recording provider and the reminder email builder
    - Application Fixtures: FastAPI app wired to the fixtures above and an HTTP client
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

# Keep settings independent of the developer's environment
os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DB_CREATE_TABLES", "false")
os.environ.setdefault("EMAIL_BACKEND", "console")
os.environ.setdefault("LOG_FILE_ENABLED", "false")

from task_reminders.core.settings import ReminderSettings, get_reminder_settings
from task_reminders.features.categories.models import Category
from task_reminders.features.reminders.notifications import ReminderEmailBuilder
from task_reminders.features.tasks.models import Task
from task_reminders.features.users.models import User
from task_reminders.infra.database import Database
from task_reminders.infra.email import EmailDeliveryResult, EmailTemplateRenderer

if TYPE_CHECKING:
    from pathlib import Path

    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncSession

    from task_reminders.infra.email import EmailMessage

# Fixed reference instant for sweep tests
NOW = datetime(2024, 1, 15, 9, 0, tzinfo=UTC)

CRON_SECRET = "test-cron-secret"


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Database]:
    """Fresh SQLite database with all tables created.

    A file is used rather than ``:memory:`` so the app's per-request
    sessions and the test's own session see the same data.
    """
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await database.create_tables()
    try:
        yield database
    finally:
        await database.dispose()


@pytest.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession]:
    async with database.session() as session:
        yield session


# ============================================================================
# Factory Fixtures
# ============================================================================


@pytest.fixture
def user_factory(db_session: AsyncSession) -> Callable[..., Awaitable[User]]:
    """Persist a user.

    Example:
        user = await user_factory(email="ada@example.com")
    """

    async def _create(email: str | None = None, display_name: str = "Ada") -> User:
        user = User(email=email or f"user-{uuid4().hex[:8]}@example.com", display_name=display_name)
        db_session.add(user)
        await db_session.commit()
        return user

    return _create


@pytest.fixture
def category_factory(db_session: AsyncSession) -> Callable[..., Awaitable[Category]]:
    async def _create(user: User, name: str = "Home") -> Category:
        category = Category(user_id=user.id, name=name, color="bg-blue-500", icon="🏠")
        db_session.add(category)
        await db_session.commit()
        return category

    return _create


@pytest.fixture
def task_factory(db_session: AsyncSession) -> Callable[..., Awaitable[Task]]:
    """Persist a task; defaults to a daily, email-enabled, incomplete task due at NOW."""

    async def _create(user: User, **overrides: Any) -> Task:
        values: dict[str, Any] = {
            "title": "Water the plants",
            "frequency": "daily",
            "next_reminder": NOW,
            "email_notification": True,
            "completed": False,
        }
        values.update(overrides)
        category = values.pop("category", None)
        if category is not None:
            values["category_id"] = category.id
        task = Task(user_id=user.id, **values)
        db_session.add(task)
        await db_session.commit()
        return task

    return _create


# ============================================================================
# Email Fixtures
# ============================================================================


class RecordingProvider:
    """Email provider double that records messages instead of sending them.

    Recipients listed in ``fail_for`` get a failure result with ``error_code``.
    """

    provider_name = "recording"

    def __init__(self) -> None:
        self.sent: list[EmailMessage] = []
        self.fail_for: set[str] = set()
        self.error_code: str | None = "SERVER_ERROR"

    async def send(self, message: EmailMessage) -> EmailDeliveryResult:
        self.sent.append(message)
        recipients = [str(r) for r in message.to]
        if self.fail_for.intersection(recipients):
            return EmailDeliveryResult.failure_result(
                provider=self.provider_name,
                error="delivery refused",
                error_code=self.error_code,
                recipients=recipients,
            )
        return EmailDeliveryResult.success_result(
            message_id=f"msg-{len(self.sent)}",
            provider=self.provider_name,
            recipients=recipients,
        )

    def sent_to(self, email: str) -> list[EmailMessage]:
        return [m for m in self.sent if email in [str(r) for r in m.to]]


@pytest.fixture
def provider() -> RecordingProvider:
    return RecordingProvider()


@pytest.fixture
def email_builder() -> ReminderEmailBuilder:
    return ReminderEmailBuilder(EmailTemplateRenderer())


@pytest.fixture
def reminder_settings() -> ReminderSettings:
    return ReminderSettings(cron_secret=CRON_SECRET)


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def app(
    database: Database,
    provider: RecordingProvider,
    email_builder: ReminderEmailBuilder,
    reminder_settings: ReminderSettings,
) -> FastAPI:
    """FastAPI app whose state is populated directly instead of by the lifespan."""
    from task_reminders.app.main import create_app

    app = create_app()
    app.state.database = database
    app.state.email_provider = provider
    app.state.email_builder = email_builder
    app.dependency_overrides[get_reminder_settings] = lambda: reminder_settings
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers() -> Callable[[User], dict[str, str]]:
    def _headers(user: User) -> dict[str, str]:
        return {"X-User-Id": str(user.id)}

    return _headers


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def cron_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {CRON_SECRET}"}
