"""Event bus wiring for the dispatcher."""

from __future__ import annotations

import base64
import json
import logging
from collections.abc import Iterable
from typing import Any

from .delivery import NotificationResult
from .dispatcher import NotificationDispatcher
from .events import NotificationEventName
from .ports.bus import IEventBus

logger = logging.getLogger(__name__)


def subscribe_configured_events(
    event_bus: IEventBus,
    dispatcher: NotificationDispatcher,
    exclude: Iterable[str] = (),
) -> list[str]:
    """
    Subscribe *dispatcher* to every event that has a template.

    Events in *exclude* are left to dedicated subscribers. Returns the
    subscribed event names.
    """
    skipped = set(exclude)
    subscribed = []
    for event_name in dispatcher.templates.events:
        if event_name in skipped:
            continue

        async def handler(payload: dict[str, Any], _name: str = event_name) -> NotificationResult:
            return await dispatcher.dispatch(_name, payload)

        event_bus.subscribe(event_name, handler)
        subscribed.append(event_name)

    logger.info(f"Subscribed to {len(subscribed)} notification events")
    return subscribed


class CustomerPasswordResetSubscriber:
    """
    Sends customer password reset emails with a ready-made reset payload.

    The payload is base64 encoded JSON ``{"email", "token"}`` that templates
    embed in the reset link.
    """

    def __init__(self, dispatcher: NotificationDispatcher, event_bus: IEventBus):
        self.dispatcher = dispatcher
        event_bus.subscribe(NotificationEventName.CUSTOMER_PASSWORD_RESET.value, self.handle)

    @staticmethod
    def encode_reset_payload(data: dict[str, Any]) -> str:
        raw = json.dumps({"email": data.get("email"), "token": data.get("token")})
        return base64.b64encode(raw.encode("utf-8")).decode("ascii")

    async def handle(self, data: dict[str, Any]) -> NotificationResult:
        return await self.dispatcher.dispatch(
            NotificationEventName.CUSTOMER_PASSWORD_RESET.value,
            {**data, "payload": self.encode_reset_payload(data)},
        )
