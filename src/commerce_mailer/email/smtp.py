"""SMTP email implementation."""

from __future__ import annotations

import email.message
import email.policy
import logging

import aiosmtplib

from ..config import SmtpTransportConfig
from ..delivery import DeliveryRecord, RenderedNotification
from ..exceptions import NotificationDeliveryError
from ..ports.sender import IEmailSender

logger = logging.getLogger(__name__)


class SmtpEmailSender(IEmailSender):
    """
    Async SMTP email sender using aiosmtplib.

    Opens one connection per message, so concurrent sends share no state.
    """

    def __init__(
        self,
        transport: SmtpTransportConfig | None = None,
        from_email: str | None = None,
    ):
        self.transport = transport or SmtpTransportConfig()
        self.from_email = from_email

    @classmethod
    def build_message(
        cls, recipient: str, from_addr: str, content: RenderedNotification
    ) -> email.message.EmailMessage:
        message = email.message.EmailMessage(policy=email.policy.default)
        message["To"] = recipient
        message["From"] = from_addr
        if content.subject:
            message["Subject"] = content.subject

        if content.body_html:
            # Multipart with both text and HTML
            message.set_content(content.body_text, subtype="plain", charset="utf-8")
            message.add_alternative(content.body_html, subtype="html", charset="utf-8")
        else:
            message.set_content(content.body_text, charset="utf-8")

        for attachment in content.attachments or []:
            maintype, _, subtype = attachment.mime_type.partition("/")
            message.add_attachment(
                attachment.decoded(),
                maintype=maintype,
                subtype=subtype or "octet-stream",
                filename=attachment.name,
                cid=f"<{attachment.name}>",
            )
        return message

    async def send(
        self,
        recipient: str,
        content: RenderedNotification,
        from_email: str | None = None,
    ) -> DeliveryRecord:
        from_addr = from_email or self.from_email
        if not from_addr:
            raise NotificationDeliveryError(recipient, "sender email (from_email) is required")

        transport = self.transport
        try:
            message = self.build_message(recipient, from_addr, content)

            async with aiosmtplib.SMTP(
                hostname=transport.hostname,
                port=transport.port,
                timeout=transport.timeout,
                use_tls=transport.use_tls,
                start_tls=transport.start_tls,
            ) as smtp:
                if transport.username and transport.password:
                    await smtp.login(transport.username, transport.password)

                await smtp.send_message(message)

            logger.info(f"Email sent to {recipient} via SMTP")
            return DeliveryRecord.sent(recipient, provider_id="smtp")

        except Exception as e:
            logger.error(f"Failed to send email to {recipient}: {str(e)}")
            return DeliveryRecord.failed(recipient, error=str(e))
