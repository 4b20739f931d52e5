"""Return request emails."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..presentation import calendar_date, normalize_thumbnail_url
from ..pricing import display_price, sum_minor, tax_inclusive_shipping
from .base import (
    DomainServices,
    RenderContext,
    currency_of,
    gather_items,
    list_line_items,
)

RETURN_RELATIONS = [
    "items",
    "items.item",
    "items.item.tax_lines",
    "items.item.variant",
    "items.item.variant.product",
    "shipping_method",
    "shipping_method.tax_lines",
    "shipping_method.shipping_option",
]
RETURN_ORDER_RELATIONS = [
    "items",
    "items.tax_lines",
    "discounts",
    "discounts.rule",
    "shipping_address",
    "returns",
]


async def return_requested(services: DomainServices, payload: Mapping[str, Any]) -> RenderContext:
    return_request = await services.returns.retrieve(
        payload["return_id"], relations=RETURN_RELATIONS
    )
    line_items = await list_line_items(services, return_request.get("items") or [])
    order = await services.orders.retrieve(
        payload["id"], select=["total"], relations=RETURN_ORDER_RELATIONS
    )
    currency = currency_of(order)

    async def decorate(ref: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
        item = {**line_items[ref["item_id"]], "quantity": ref["quantity"]}
        totals = await services.totals.get_line_item_totals(
            item, order, include_tax=True, use_tax_lines=True
        )
        return {
            **item,
            "thumbnail": normalize_thumbnail_url(item.get("thumbnail")),
            "price": display_price(totals.get("total"), currency),
            "tax_lines": totals.get("tax_lines") or [],
        }, totals

    decorated = await gather_items(return_request.get("items") or [], decorate)
    item_subtotal = sum_minor(totals.get("total") for _, totals in decorated)

    shipping_method = return_request.get("shipping_method")
    shipping_total = 0
    if shipping_method:
        shipping_total = tax_inclusive_shipping(
            shipping_method.get("price"), shipping_method.get("tax_lines") or []
        )

    locale = await services.locales.resolve(order)
    refund_amount = display_price(return_request.get("refund_amount"), currency)

    return {
        "locale": locale,
        "has_shipping": bool(shipping_method),
        "email": order.get("email"),
        "items": [item for item, _ in decorated],
        "subtotal": display_price(item_subtotal, currency),
        "shipping_total": display_price(shipping_total, currency),
        "refund_amount": refund_amount,
        "return_request": {**return_request, "refund_amount": refund_amount},
        "order": order,
        "date": calendar_date(return_request.get("updated_at")),
    }


async def items_returned(services: DomainServices, payload: Mapping[str, Any]) -> RenderContext:
    return await return_requested(services, payload)
