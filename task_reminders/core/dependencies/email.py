"""Email dependencies for FastAPI route handlers.

The provider and reminder email builder are created in the application
lifespan and stored on ``app.state``. When delivery is not configured the
provider slot holds ``None`` and routes that need it fail with a 500
configuration problem.

Usage:
    @router.post("/reminders/test")
    async def send_test(provider: EmailProviderDep, builder: ReminderEmailBuilderDep):
        ...
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from task_reminders.core.exceptions import ConfigurationException
from task_reminders.core.settings import get_email_settings, get_reminder_settings
from task_reminders.features.reminders.notifications import ReminderEmailBuilder
from task_reminders.infra.email import EmailProvider


def get_email_provider(request: Request) -> EmailProvider:
    """Return the configured provider.

    Raises:
        ConfigurationException: If email delivery is not configured.
    """
    provider: EmailProvider | None = getattr(request.app.state, "email_provider", None)
    if provider is None:
        settings = get_email_settings()
        raise ConfigurationException(
            detail="Email delivery is not configured",
            extra={"backend": settings.backend},
        )
    return provider


def get_reminder_email_builder(request: Request) -> ReminderEmailBuilder:
    builder: ReminderEmailBuilder | None = getattr(request.app.state, "email_builder", None)
    if builder is None:
        builder = ReminderEmailBuilder.from_settings(get_email_settings(), get_reminder_settings())
        request.app.state.email_builder = builder
    return builder


EmailProviderDep = Annotated[EmailProvider, Depends(get_email_provider)]
ReminderEmailBuilderDep = Annotated[ReminderEmailBuilder, Depends(get_reminder_email_builder)]
