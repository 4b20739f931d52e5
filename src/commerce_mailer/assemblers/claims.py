"""Claim shipment emails."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..presentation import tracking_number
from .base import DomainServices, RenderContext


async def claim_shipment_created(
    services: DomainServices, payload: Mapping[str, Any]
) -> RenderContext:
    claim = await services.claims.retrieve(
        payload["id"], relations=["order", "order.items", "order.shipping_address"]
    )
    shipment = await services.fulfillments.retrieve(
        payload["fulfillment_id"], relations=["tracking_links"]
    )
    order = claim.get("order") or {}
    locale = await services.locales.resolve(order)

    return {
        "locale": locale,
        "email": order.get("email"),
        "claim": claim,
        "order": order,
        "fulfillment": shipment,
        "tracking_links": shipment.get("tracking_links") or [],
        "tracking_number": tracking_number(shipment),
    }
