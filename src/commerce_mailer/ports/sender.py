"""Email sender port."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..delivery import DeliveryRecord, RenderedNotification


@runtime_checkable
class IEmailSender(Protocol):
    """
    Transport port for rendered emails.

    Adapters must explicitly declare: class SmtpEmailSender(IEmailSender):
    Implementations must tolerate concurrent ``send`` calls.
    """

    async def send(
        self,
        recipient: str,
        content: RenderedNotification,
        from_email: str | None = None,
    ) -> DeliveryRecord:
        """Send an email and return its delivery record."""
        ...
