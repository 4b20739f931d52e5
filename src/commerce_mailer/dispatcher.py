"""Notification dispatcher: from a domain event to a sent email."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from .assemblers import DomainServices, EventDataAssembler
from .attachments import AttachmentResolver
from .config import MailerConfig
from .delivery import NotificationResult, NotificationStatus
from .email.smtp import SmtpEmailSender
from .events import NotificationEvent, NotificationEventName, StoredNotification
from .mail_client import MailClient
from .ports.attachments import IAttachmentGenerator, IFulfillmentProviderService
from .ports.renderer import ITemplateRenderer
from .ports.sender import IEmailSender
from .template.jinja import JinjaTemplateRenderer
from .templates import TemplateResolver

logger = logging.getLogger(__name__)

_FAN_OUT_EVENT = NotificationEventName.RESTOCK_NOTIFICATION_RESTOCKED


def recipients_of(event_name: str, data: Mapping[str, Any] | None) -> list[str]:
    """
    Addresses a render context is sent to.

    Restock notifications go to every waiting address, one message each;
    every other context goes to its ``email``.
    """
    if not data:
        return []
    if NotificationEventName.parse(event_name) is _FAN_OUT_EVENT:
        return list(dict.fromkeys(str(email) for email in data.get("emails") or [] if email))
    email = data.get("email")
    return [str(email)] if email else []


def _addressed(data: Mapping[str, Any], recipient: str) -> Mapping[str, Any]:
    if data.get("email") == recipient:
        return data
    return {**data, "email": recipient}


class NotificationDispatcher:
    """
    Runs template resolution, data assembly, attachment resolution and
    delivery for one event, returning a uniform ``NotificationResult``.

    Delivery failures are reported through the result status. Failures of the
    domain services while assembling data are not caught and propagate to
    the caller.
    """

    def __init__(
        self,
        templates: TemplateResolver,
        assembler: EventDataAssembler,
        attachments: AttachmentResolver,
        mail_client: MailClient,
    ):
        self.templates = templates
        self.assembler = assembler
        self.attachments = attachments
        self.mail_client = mail_client

    @classmethod
    def from_config(
        cls,
        config: MailerConfig,
        services: DomainServices,
        fulfillment_providers: IFulfillmentProviderService,
        *,
        sender: IEmailSender | None = None,
        renderer: ITemplateRenderer | None = None,
        environment: Mapping[str, str] | None = None,
    ) -> NotificationDispatcher:
        """Wire the default SMTP sender and Jinja2 renderer from *config*."""
        mail_client = MailClient(
            renderer=renderer
            or JinjaTemplateRenderer(config.email_template_path, config.template_extension),
            sender=sender or SmtpEmailSender(config.transport, from_email=config.from_email),
            from_email=config.from_email,
            environment=environment,
        )
        return cls(
            templates=TemplateResolver(config.template_map),
            assembler=EventDataAssembler(services),
            attachments=AttachmentResolver(fulfillment_providers),
            mail_client=mail_client,
        )

    async def dispatch(
        self,
        event_name: str,
        payload: Mapping[str, Any],
        attachment_generator: IAttachmentGenerator | None = None,
    ) -> NotificationResult:
        template_id = self.templates.resolve(event_name)
        if not template_id:
            logger.debug(f"No template configured for {event_name}, skipping")
            return NotificationResult(to="", status=NotificationStatus.NO_TEMPLATE_FOUND)

        data = await self.assembler.assemble(event_name, payload, attachment_generator)
        recipients = recipients_of(event_name, data)
        if not data or not recipients:
            logger.warning(f"No recipient could be assembled for {event_name}")
            return NotificationResult(
                to="", status=NotificationStatus.NO_DATA_FOUND, data=data or {}
            )

        attachments = await self.attachments.resolve(event_name, data, attachment_generator)
        if len(recipients) == 1:
            record = await self.mail_client.render_and_send(
                template_id, recipients[0], _addressed(data, recipients[0]), attachments
            )
            logger.info(f"{event_name} notification to {record.recipient}: {record.status.value}")
            return NotificationResult.from_delivery(record, data)

        # One message per address; recipients never see each other.
        records = await asyncio.gather(
            *(
                self.mail_client.render_and_send(
                    template_id, recipient, _addressed(data, recipient), attachments
                )
                for recipient in recipients
            )
        )
        sent = sum(record.ok for record in records)
        logger.info(f"{event_name} notification sent to {sent} of {len(records)} recipients")
        return NotificationResult.from_deliveries(records, data)

    async def handle(
        self,
        event: NotificationEvent,
        attachment_generator: IAttachmentGenerator | None = None,
    ) -> NotificationResult:
        return await self.dispatch(event.name, event.payload, attachment_generator)

    async def resend(
        self,
        notification: StoredNotification,
        to: str | None = None,
        attachment_generator: IAttachmentGenerator | None = None,
    ) -> NotificationResult:
        """
        Send a stored notification again, optionally to another recipient.

        The stored render context is reused as-is; attachments are resolved
        again from it.
        """
        template_id = self.templates.resolve(notification.event_name)
        if not template_id:
            return NotificationResult(
                to=notification.to,
                status=NotificationStatus.NO_TEMPLATE_FOUND,
                data=notification.data,
            )

        recipient = to or notification.to
        if not recipient:
            logger.warning(f"Refusing to resend {notification.event_name} without a recipient")
            return NotificationResult(
                to="", status=NotificationStatus.FAILED, data=notification.data
            )

        attachments = await self.attachments.resolve(
            notification.event_name, notification.data, attachment_generator
        )
        record = await self.mail_client.render_and_send(
            template_id, recipient, notification.data, attachments
        )
        return NotificationResult.from_delivery(record, notification.data)

    async def send_email(
        self, template_id: str, to: str, data: Mapping[str, Any]
    ) -> NotificationResult:
        """Send *template_id* directly, bypassing event resolution."""
        context = dict(data)
        record = await self.mail_client.render_and_send(template_id, to, context)
        return NotificationResult.from_delivery(record, context)
