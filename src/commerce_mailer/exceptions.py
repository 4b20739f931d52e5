"""Exception hierarchy for the commerce mailer."""

from __future__ import annotations


class MailerError(Exception):
    """Root exception for the commerce mailer."""


class ConfigurationError(MailerError):
    """Raised when mailer options cannot be turned into a valid configuration."""


class TemplateNotFoundError(MailerError):
    """Raised by a renderer when a template id has no renderable body."""

    def __init__(self, template_id: str, reason: str | None = None):
        self.template_id = template_id
        message = f"No renderable template for {template_id!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class NotificationDeliveryError(MailerError):
    """Raised when delivery fails (network, provider error, etc.)."""

    def __init__(self, recipient: str, reason: str):
        self.recipient = recipient
        super().__init__(f"Failed to deliver email to {recipient}: {reason}")
