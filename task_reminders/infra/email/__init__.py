"""Email delivery: message schema, template rendering and providers."""

from task_reminders.infra.email.providers import (
    SENDER_RESTRICTED,
    BaseEmailProvider,
    EmailDeliveryResult,
    EmailProvider,
    create_email_provider,
)
from task_reminders.infra.email.schemas import EmailMessage
from task_reminders.infra.email.templates import EmailTemplateRenderer, TemplateNotFoundError

__all__ = [
    "SENDER_RESTRICTED",
    "BaseEmailProvider",
    "EmailDeliveryResult",
    "EmailMessage",
    "EmailProvider",
    "EmailTemplateRenderer",
    "TemplateNotFoundError",
    "create_email_provider",
]
