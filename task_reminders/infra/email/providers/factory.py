"""Build the configured email provider."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from task_reminders.core.exceptions import ConfigurationException

from .console import ConsoleProvider
from .resend import ResendProvider

if TYPE_CHECKING:
    from task_reminders.core.settings.email import EmailSettings

    from .base import BaseEmailProvider

logger = logging.getLogger(__name__)


def create_email_provider(settings: EmailSettings) -> BaseEmailProvider:
    """Instantiate the provider selected by ``EMAIL_BACKEND``.

    Raises:
        ConfigurationException: If delivery is disabled or the selected
            backend is missing required settings.
    """
    if not settings.is_configured:
        missing = "EMAIL_API_KEY" if settings.enabled else "EMAIL_ENABLED"
        raise ConfigurationException(
            detail="Email delivery is not configured",
            extra={"backend": settings.backend, "setting": missing},
        )

    provider: BaseEmailProvider
    if settings.backend == "resend":
        provider = ResendProvider(settings)
    else:
        provider = ConsoleProvider(settings)

    logger.info(
        f"{provider.provider_name} email provider initialized",
        extra={"provider": provider.provider_name},
    )
    return provider
