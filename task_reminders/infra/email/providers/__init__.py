"""Email delivery providers."""

from .base import (
    SENDER_RESTRICTED,
    BaseEmailProvider,
    EmailDeliveryResult,
    EmailProvider,
)
from .console import ConsoleProvider
from .factory import create_email_provider
from .resend import ResendProvider

__all__ = [
    "SENDER_RESTRICTED",
    "BaseEmailProvider",
    "ConsoleProvider",
    "EmailDeliveryResult",
    "EmailProvider",
    "ResendProvider",
    "create_email_provider",
]
