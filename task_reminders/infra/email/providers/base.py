"""Base email provider protocol and abstract class.

Defines the contract every provider implements and the result type the
reminder sweep inspects to decide whether a group's tasks may advance.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from task_reminders.core.settings.email import EmailSettings
    from task_reminders.infra.email.schemas import EmailMessage

logger = logging.getLogger(__name__)

# Error code for a sender that may only deliver to its own verified address
SENDER_RESTRICTED = "SENDER_RESTRICTED"


@dataclass(frozen=True)
class EmailDeliveryResult:
    """Result of an email delivery attempt.

    Attributes:
        success: Whether delivery succeeded
        message_id: Provider-assigned message ID (for tracking)
        provider: Provider name (console, resend)
        recipients: Recipients of the attempt
        error: Error message if failed
        error_code: Error category for programmatic handling
        duration_ms: Time taken to send in milliseconds
        metadata: Provider-specific metadata
    """

    success: bool
    message_id: str | None
    provider: str
    recipients: list[str] = field(default_factory=list)
    error: str | None = None
    error_code: str | None = None
    duration_ms: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.success and not self.error:
            object.__setattr__(self, "error", "Unknown error")

    @classmethod
    def success_result(
        cls,
        message_id: str,
        provider: str,
        recipients: list[str] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> EmailDeliveryResult:
        return cls(
            success=True,
            message_id=message_id,
            provider=provider,
            recipients=recipients or [],
            metadata=metadata or {},
        )

    @classmethod
    def failure_result(
        cls,
        provider: str,
        error: str,
        error_code: str | None = None,
        recipients: list[str] | None = None,
        duration_ms: int | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> EmailDeliveryResult:
        return cls(
            success=False,
            message_id=None,
            provider=provider,
            recipients=recipients or [],
            error=error,
            error_code=error_code,
            duration_ms=duration_ms,
            metadata=metadata or {},
        )


@runtime_checkable
class EmailProvider(Protocol):
    """Protocol defining the email provider interface.

    Using a Protocol lets tests pass any object with a matching ``send``.
    """

    async def send(self, message: EmailMessage) -> EmailDeliveryResult: ...

    @property
    def provider_name(self) -> str: ...


class BaseEmailProvider(ABC):
    """Abstract base class for email providers.

    ``send`` wraps ``_do_send`` with timing and logging, and converts
    unexpected exceptions into a failure result so one bad delivery never
    propagates past the provider.

    Example:
        class MyProvider(BaseEmailProvider):
            @property
            def provider_name(self) -> str:
                return "myprovider"

            async def _do_send(self, message: EmailMessage) -> EmailDeliveryResult:
                return EmailDeliveryResult.success_result(...)
    """

    def __init__(self, settings: EmailSettings) -> None:
        self._settings = settings

    @property
    @abstractmethod
    def provider_name(self) -> str: ...

    @abstractmethod
    async def _do_send(self, message: EmailMessage) -> EmailDeliveryResult: ...

    @property
    def from_header(self) -> str:
        return self._settings.from_header

    async def send(self, message: EmailMessage) -> EmailDeliveryResult:
        """Deliver ``message`` and report the outcome; never raises."""
        started = time.perf_counter()
        try:
            result = await self._do_send(message)
        except Exception as e:
            logger.exception(
                "Email provider raised while sending",
                extra={"provider": self.provider_name, "operation": "email.send"},
            )
            result = EmailDeliveryResult.failure_result(
                provider=self.provider_name,
                error=str(e) or type(e).__name__,
                error_code="UNEXPECTED_ERROR",
                recipients=list(message.to),
            )

        if result.duration_ms is None:
            result = replace(result, duration_ms=int((time.perf_counter() - started) * 1000))

        outcome = {
            "provider": self.provider_name,
            "recipients": len(message.to),
            "duration_ms": result.duration_ms,
            "operation": "email.send",
        }
        if result.success:
            logger.info("Email delivered", extra={**outcome, "message_id": result.message_id})
        else:
            logger.warning(
                "Email delivery failed",
                extra={**outcome, "error": result.error, "error_code": result.error_code},
            )
        return result
