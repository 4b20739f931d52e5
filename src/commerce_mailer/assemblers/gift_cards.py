"""Gift card emails."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..pricing import apply_tax_rate, display_price
from .base import DomainServices, RenderContext, currency_of


async def gift_card_created(
    services: DomainServices, payload: Mapping[str, Any]
) -> RenderContext | None:
    """Gift cards bought as part of an order; None when there is no order."""
    gift_card = await services.gift_cards.retrieve(payload["id"], relations=["region", "order"])
    order = gift_card.get("order")
    if not order:
        return None

    region = gift_card.get("region") or {}
    currency = currency_of(order) or currency_of(region)
    locale = await services.locales.resolve(order)

    return {
        **gift_card,
        "locale": locale,
        "email": order.get("email"),
        "display_value": display_price(
            apply_tax_rate(gift_card.get("value"), region.get("tax_rate")), currency
        ),
    }
