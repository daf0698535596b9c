"""Scheduler credential check for the reminder trigger.

The external scheduler presents ``Authorization: Bearer <secret>``. The
comparison is constant-time, and a server without a configured secret
rejects every call.
"""

from __future__ import annotations

import hmac
import logging
from typing import Annotated

from fastapi import Depends, Header

from task_reminders.core.exceptions import UnauthorizedException
from task_reminders.core.settings import ReminderSettings, get_reminder_settings

logger = logging.getLogger(__name__)

_BEARER_PREFIX = "bearer "


async def verify_cron_secret(
    settings: Annotated[ReminderSettings, Depends(get_reminder_settings)],
    authorization: Annotated[str | None, Header()] = None,
) -> None:
    """Reject the request unless it carries the configured scheduler secret.

    Raises:
        UnauthorizedException: If the secret is missing, wrong, or not configured.
    """
    if settings.cron_secret is None or not settings.cron_secret.get_secret_value():
        logger.warning(
            "Reminder trigger called but REMINDER_CRON_SECRET is not set",
            extra={"operation": "auth.verify_cron_secret"},
        )
        raise UnauthorizedException(detail="Unauthorized", type="invalid-cron-secret")

    if not authorization or not authorization.lower().startswith(_BEARER_PREFIX):
        raise UnauthorizedException(detail="Unauthorized", type="invalid-cron-secret")

    presented = authorization[len(_BEARER_PREFIX) :].strip()
    expected = settings.cron_secret.get_secret_value()
    if not hmac.compare_digest(presented.encode(), expected.encode()):
        logger.warning(
            "Reminder trigger called with an invalid secret",
            extra={"operation": "auth.verify_cron_secret"},
        )
        raise UnauthorizedException(detail="Unauthorized", type="invalid-cron-secret")
