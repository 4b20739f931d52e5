"""Inbound notification events."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NotificationEventName(str, Enum):
    """Closed set of events the mailer knows how to assemble."""

    ORDER_PLACED = "order.placed"
    ORDER_CANCELED = "order.canceled"
    ORDER_SHIPMENT_CREATED = "order.shipment_created"
    ORDER_RETURN_REQUESTED = "order.return_requested"
    ORDER_ITEMS_RETURNED = "order.items_returned"
    SWAP_CREATED = "swap.created"
    SWAP_SHIPMENT_CREATED = "swap.shipment_created"
    SWAP_RECEIVED = "swap.received"
    CLAIM_SHIPMENT_CREATED = "claim.shipment_created"
    GIFT_CARD_CREATED = "gift_card.created"
    ORDER_GIFT_CARD_CREATED = "order.gift_card_created"
    USER_PASSWORD_RESET = "user.password_reset"
    CUSTOMER_PASSWORD_RESET = "customer.password_reset"
    INVITE_CREATED = "invite.created"
    RESTOCK_NOTIFICATION_RESTOCKED = "restock-notification.restocked"

    @classmethod
    def parse(cls, name: str) -> NotificationEventName | None:
        """Return the member for *name*, or None for events outside the set."""
        try:
            return cls(name)
        except ValueError:
            return None


class NotificationEvent(BaseModel):
    """An event name and its opaque payload, alive for one dispatch."""

    model_config = ConfigDict(frozen=True)

    name: str
    payload: dict[str, Any] = Field(default_factory=dict)

    @property
    def kind(self) -> NotificationEventName | None:
        return NotificationEventName.parse(self.name)


class StoredNotification(BaseModel):
    """A previously sent notification, as handed back for a resend."""

    model_config = ConfigDict(frozen=True)

    event_name: str
    to: str = ""
    data: dict[str, Any] = Field(default_factory=dict)
