"""Event-driven email notifications for commerce events."""

from __future__ import annotations

from .assemblers import DomainServices, EventDataAssembler
from .attachments import AttachmentResolver
from .config import MailerConfig, SmtpTransportConfig
from .delivery import (
    Attachment,
    DeliveryRecord,
    DeliveryStatus,
    NotificationResult,
    NotificationStatus,
    RenderedNotification,
)
from .dispatcher import NotificationDispatcher
from .email.smtp import SmtpEmailSender
from .environment import environment_snapshot
from .events import NotificationEvent, NotificationEventName, StoredNotification
from .exceptions import (
    ConfigurationError,
    MailerError,
    NotificationDeliveryError,
    TemplateNotFoundError,
)
from .locales import LocaleResolver
from .mail_client import MailClient
from .memory.console import ConsoleSender
from .memory.fake import InMemorySender
from .pricing import display_price, format_price
from .subscribers import CustomerPasswordResetSubscriber, subscribe_configured_events
from .template.jinja import JinjaTemplateRenderer
from .templates import TemplateResolver

__all__ = [
    "Attachment",
    "AttachmentResolver",
    "ConfigurationError",
    "ConsoleSender",
    "CustomerPasswordResetSubscriber",
    "DeliveryRecord",
    "DeliveryStatus",
    "DomainServices",
    "EventDataAssembler",
    "InMemorySender",
    "JinjaTemplateRenderer",
    "LocaleResolver",
    "MailClient",
    "MailerConfig",
    "MailerError",
    "NotificationDeliveryError",
    "NotificationDispatcher",
    "NotificationEvent",
    "NotificationEventName",
    "NotificationResult",
    "NotificationStatus",
    "RenderedNotification",
    "SmtpEmailSender",
    "SmtpTransportConfig",
    "StoredNotification",
    "TemplateNotFoundError",
    "TemplateResolver",
    "display_price",
    "environment_snapshot",
    "format_price",
    "subscribe_configured_events",
]
