"""Resend email provider.

Sends through the Resend HTTP API (``POST /emails``) using httpx.

Usage:
    provider = ResendProvider(settings)
    result = await provider.send(message)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from .base import SENDER_RESTRICTED, BaseEmailProvider, EmailDeliveryResult

if TYPE_CHECKING:
    from task_reminders.core.settings.email import EmailSettings
    from task_reminders.infra.email.schemas import EmailMessage

logger = logging.getLogger(__name__)

# Resend's wording when an unverified account sends to a foreign address
_TESTING_MODE_MARKER = "only send testing emails to your own email"


class ResendProvider(BaseEmailProvider):
    """Resend email provider.

    Args:
        settings: Email settings carrying the API key and sender.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).

    Raises:
        ValueError: If the API key is missing
    """

    SEND_ENDPOINT = "/emails"

    def __init__(
        self,
        settings: EmailSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(settings)

        if settings.api_key is None or not settings.api_key.get_secret_value():
            raise ValueError("Resend provider requires api_key")

        self._api_key = settings.api_key.get_secret_value()
        self._base_url = settings.api_base_url.rstrip("/")
        self._timeout = settings.timeout
        self._transport = transport

    @property
    def provider_name(self) -> str:
        return "resend"

    def _build_payload(self, message: EmailMessage) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "from": self.from_header,
            "to": list(message.to),
            "subject": message.subject,
        }
        if message.body_html:
            payload["html"] = message.body_html
        if message.body_text:
            payload["text"] = message.body_text
        if message.tags:
            payload["tags"] = [{"name": k, "value": v} for k, v in message.tags.items()]
        return payload

    async def _do_send(self, message: EmailMessage) -> EmailDeliveryResult:
        recipients = list(message.to)

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self.SEND_ENDPOINT,
                    json=self._build_payload(message),
                    headers={"Authorization": f"Bearer {self._api_key}"},
                )
        except httpx.TimeoutException:
            return EmailDeliveryResult.failure_result(
                provider=self.provider_name,
                error="Resend API timeout",
                error_code="TIMEOUT",
                recipients=recipients,
            )
        except httpx.HTTPError as e:
            return EmailDeliveryResult.failure_result(
                provider=self.provider_name,
                error=f"Resend HTTP error: {e}",
                error_code="HTTP_ERROR",
                recipients=recipients,
            )

        if response.is_success:
            body = _json_or_empty(response)
            return EmailDeliveryResult.success_result(
                message_id=str(body.get("id", "unknown")),
                provider=self.provider_name,
                recipients=recipients,
            )

        body = _json_or_empty(response)
        error_message = str(body.get("message") or response.text or response.reason_phrase)
        return EmailDeliveryResult.failure_result(
            provider=self.provider_name,
            error=f"Resend API error ({response.status_code}): {error_message}",
            error_code=self._classify_http_error(response.status_code, error_message),
            recipients=recipients,
            metadata={"status_code": response.status_code, "name": body.get("name")},
        )

    @staticmethod
    def _classify_http_error(status_code: int, error_message: str = "") -> str:
        """Map an HTTP failure to an error code."""
        if status_code == 403 and _TESTING_MODE_MARKER in error_message.lower():
            return SENDER_RESTRICTED
        if status_code == 401:
            return "AUTH_FAILED"
        if status_code == 403:
            return "FORBIDDEN"
        if status_code == 429:
            return "RATE_LIMITED"
        if status_code in (400, 422):
            return "BAD_REQUEST"
        if status_code >= 500:
            return "SERVER_ERROR"
        return "API_ERROR"


def _json_or_empty(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}
