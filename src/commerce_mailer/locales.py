"""Best-effort locale lookup from an order's cart."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .ports.services import ICartService

logger = logging.getLogger(__name__)


class LocaleResolver:
    """Reads ``context.locale`` from the cart an order was placed with."""

    def __init__(self, cart_service: ICartService):
        self.cart_service = cart_service

    async def resolve(self, aggregate: Mapping[str, Any]) -> str | None:
        cart_id = aggregate.get("cart_id")
        if not cart_id:
            return None

        try:
            cart = await self.cart_service.retrieve(cart_id, select=["id", "context"])
        except Exception as e:
            logger.warning(f"Failed to gather locale context for cart {cart_id}: {e}")
            return None

        context = cart.get("context") or {}
        return context.get("locale") or None
