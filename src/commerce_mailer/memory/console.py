"""Prints emails instead of sending them, for local development."""

from __future__ import annotations

import logging

from commerce_mailer.delivery import Attachment, DeliveryRecord, RenderedNotification
from commerce_mailer.ports.sender import IEmailSender

logger = logging.getLogger(__name__)

RULE = "═" * 60


def _describe(attachment: Attachment) -> str:
    return f"{attachment.name} ({attachment.mime_type}, {len(attachment.decoded())} bytes)"


class ConsoleSender(IEmailSender):
    """Development adapter; every email is reported as sent."""

    def __init__(self, output_to_stdout: bool = True):
        self.output_to_stdout = output_to_stdout

    def format_email(
        self, recipient: str, content: RenderedNotification, from_email: str | None
    ) -> str:
        lines = [
            RULE,
            f"From:    {from_email or '(default)'}",
            f"To:      {recipient}",
            f"Subject: {content.subject or '(no subject)'}",
            RULE,
            content.body_text or "(no text body)",
        ]
        if content.body_html:
            lines.append(f"[html body, {len(content.body_html)} chars]")
        lines.extend(f"[attachment] {_describe(a)}" for a in content.attachments or [])
        lines.append(RULE)
        return "\n".join(lines)

    async def send(
        self,
        recipient: str,
        content: RenderedNotification,
        from_email: str | None = None,
    ) -> DeliveryRecord:
        rendered = self.format_email(recipient, content, from_email)
        logger.debug(rendered)
        if self.output_to_stdout:
            print(rendered)
        return DeliveryRecord.sent(recipient, provider_id="console-debug")
