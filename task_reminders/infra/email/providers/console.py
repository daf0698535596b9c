"""Console email provider for development.

Logs emails instead of sending them. Always succeeds.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from .base import BaseEmailProvider, EmailDeliveryResult

if TYPE_CHECKING:
    from task_reminders.infra.email.schemas import EmailMessage

logger = logging.getLogger(__name__)


class ConsoleProvider(BaseEmailProvider):
    """Development provider that writes each email to the log."""

    @property
    def provider_name(self) -> str:
        return "console"

    async def _do_send(self, message: EmailMessage) -> EmailDeliveryResult:
        message_id = f"console-{uuid.uuid4()}"

        separator = "=" * 60
        output_lines = [
            "",
            separator,
            "EMAIL (Console Backend - Development Mode)",
            separator,
            f"Message-ID: {message_id}",
            f"From: {self.from_header}",
            f"To: {', '.join(message.to)}",
            f"Subject: {message.subject}",
            separator,
        ]
        if message.body_text:
            output_lines.extend(["TEXT BODY:", message.body_text, separator])

        logger.info("\n".join(output_lines))

        return EmailDeliveryResult.success_result(
            message_id=message_id,
            provider=self.provider_name,
            recipients=list(message.to),
        )
