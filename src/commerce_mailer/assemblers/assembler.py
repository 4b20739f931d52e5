"""Routes an event to the assembler that builds its render context."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, assert_never

from ..events import NotificationEventName
from ..ports.attachments import IAttachmentGenerator
from . import accounts, catalog, claims, gift_cards, orders, returns, swaps
from .base import DomainServices, RenderContext

logger = logging.getLogger(__name__)


class EventDataAssembler:
    """
    Builds the render context for an event from the domain services.

    Errors raised by the domain services (unknown ids, etc.) propagate to
    the caller. Returns None when the event has nothing to send.
    """

    def __init__(self, services: DomainServices):
        self.services = services

    async def assemble(
        self,
        event_name: str,
        payload: Mapping[str, Any],
        attachment_generator: IAttachmentGenerator | None = None,
    ) -> RenderContext | None:
        kind = NotificationEventName.parse(event_name)
        if kind is None:
            logger.debug(f"No assembler for {event_name}, passing payload through")
            return dict(payload)
        return await self._assemble(kind, payload)

    async def _assemble(
        self, kind: NotificationEventName, payload: Mapping[str, Any]
    ) -> RenderContext | None:
        services = self.services
        match kind:
            case NotificationEventName.ORDER_PLACED:
                return await orders.order_placed(services, payload)
            case NotificationEventName.ORDER_CANCELED:
                return await orders.order_canceled(services, payload)
            case NotificationEventName.ORDER_SHIPMENT_CREATED:
                return await orders.order_shipment_created(services, payload)
            case NotificationEventName.ORDER_RETURN_REQUESTED:
                return await returns.return_requested(services, payload)
            case NotificationEventName.ORDER_ITEMS_RETURNED:
                return await returns.items_returned(services, payload)
            case NotificationEventName.SWAP_CREATED:
                return await swaps.swap_created(services, payload)
            case NotificationEventName.SWAP_SHIPMENT_CREATED:
                return await swaps.swap_shipment_created(services, payload)
            case NotificationEventName.SWAP_RECEIVED:
                return await swaps.swap_received(services, payload)
            case NotificationEventName.CLAIM_SHIPMENT_CREATED:
                return await claims.claim_shipment_created(services, payload)
            case (
                NotificationEventName.GIFT_CARD_CREATED
                | NotificationEventName.ORDER_GIFT_CARD_CREATED
            ):
                return await gift_cards.gift_card_created(services, payload)
            case (
                NotificationEventName.USER_PASSWORD_RESET
                | NotificationEventName.CUSTOMER_PASSWORD_RESET
            ):
                return accounts.password_reset(payload)
            case NotificationEventName.INVITE_CREATED:
                return accounts.invite_created(payload)
            case NotificationEventName.RESTOCK_NOTIFICATION_RESTOCKED:
                return await catalog.restock_notification(services, payload)
            case _:
                assert_never(kind)
