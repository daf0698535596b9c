"""Email template rendering with Jinja2.

Templates live in ``templates/`` beside this module (overridable with
``EMAIL_TEMPLATE_DIR``). Each email has an HTML template; the plain-text
body is derived from the rendered HTML unless a ``.txt`` template exists.
"""

from __future__ import annotations

import logging
import re
from html import unescape
from pathlib import Path
from typing import TYPE_CHECKING, Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

if TYPE_CHECKING:
    from task_reminders.core.settings.email import EmailSettings

logger = logging.getLogger(__name__)

BUNDLED_TEMPLATE_DIR = Path(__file__).parent / "templates"


class TemplateNotFoundError(Exception):
    """Raised when an email template cannot be found."""


class EmailTemplateRenderer:
    """Jinja2-based email template renderer.

    Example:
        renderer = EmailTemplateRenderer()
        html, text = renderer.render("reminder", display_name="Ada", tasks=[...])
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        self.template_dir = Path(template_dir) if template_dir else BUNDLED_TEMPLATE_DIR
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["html_to_text"] = html_to_text

    @classmethod
    def from_settings(cls, settings: EmailSettings) -> EmailTemplateRenderer:
        return cls(settings.template_dir)

    def render(self, template_name: str, **context: Any) -> tuple[str | None, str]:
        """Render ``<template_name>.html`` and/or ``.txt``.

        Returns:
            Tuple of (html_content, text_content).

        Raises:
            TemplateNotFoundError: If neither template exists.
        """
        html_content: str | None = None
        text_content: str | None = None

        try:
            html_content = self.env.get_template(f"{template_name}.html").render(**context)
        except TemplateNotFound:
            logger.debug("No HTML template found", extra={"template": template_name})

        try:
            text_content = self.env.get_template(f"{template_name}.txt").render(**context)
        except TemplateNotFound:
            pass

        if html_content is None and text_content is None:
            msg = (
                f"No template found for: {template_name} "
                f"(looked for {template_name}.html and {template_name}.txt)"
            )
            raise TemplateNotFoundError(msg)

        if text_content is None:
            text_content = html_to_text(html_content or "")
        return html_content, text_content


def html_to_text(html: str) -> str:
    """Convert rendered HTML to a readable plain-text body."""
    html = re.sub(r"<(style|head)[^>]*>.*?</\1>", "", html, flags=re.IGNORECASE | re.DOTALL)
    html = re.sub(
        r'<a[^>]+href=["\']([^"\']+)["\'][^>]*>([^<]+)</a>',
        r"\2 (\1)",
        html,
        flags=re.IGNORECASE,
    )
    html = re.sub(r"<h[1-6][^>]*>([^<]+)</h[1-6]>", r"\n\n\1\n", html, flags=re.IGNORECASE)
    html = re.sub(r"</?(p|div|ul|table|tr)[^>]*>", "\n", html, flags=re.IGNORECASE)
    html = re.sub(r"<br\s*/?>", "\n", html, flags=re.IGNORECASE)
    html = re.sub(r"<li[^>]*>", "\n  * ", html, flags=re.IGNORECASE)
    html = re.sub(r"<[^>]+>", "", html)

    text = unescape(html)
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r" *\n *", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()
