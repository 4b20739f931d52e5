"""In-memory sender for test assertions."""

from __future__ import annotations

from dataclasses import dataclass

from commerce_mailer.delivery import DeliveryRecord, RenderedNotification
from commerce_mailer.ports.sender import IEmailSender


@dataclass
class SentMessage:
    """One captured email."""

    recipient: str
    content: RenderedNotification
    from_email: str | None


class InMemorySender(IEmailSender):
    """
    Test double (Fake) that keeps every email instead of delivering it.

    Set ``fail_with`` to make every send raise, as a broken transport would.
    """

    def __init__(self, fail_with: Exception | None = None) -> None:
        self.sent_messages: list[SentMessage] = []
        self.fail_with = fail_with

    async def send(
        self,
        recipient: str,
        content: RenderedNotification,
        from_email: str | None = None,
    ) -> DeliveryRecord:
        if self.fail_with is not None:
            raise self.fail_with
        self.sent_messages.append(SentMessage(recipient, content, from_email))
        return DeliveryRecord.sent(recipient, provider_id="test-id")

    def messages_to(self, recipient: str) -> list[SentMessage]:
        return [m for m in self.sent_messages if m.recipient == recipient]

    def assert_sent(self, recipient: str, count: int = 1) -> None:
        found = len(self.messages_to(recipient))
        if found != count:
            raise AssertionError(f"Expected {count} emails to {recipient}, but found {found}.")

    def clear(self) -> None:
        self.sent_messages.clear()
