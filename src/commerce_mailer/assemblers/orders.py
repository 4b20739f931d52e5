"""Order placed, canceled and shipment emails."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..presentation import (
    calendar_date,
    discount_lines,
    normalize_thumbnail_url,
    tracking_number,
)
from ..pricing import apply_tax_rate, display_price, sum_minor
from .base import (
    ORDER_SUMMARY_RELATIONS,
    ORDER_TOTAL_FIELDS,
    DomainServices,
    RenderContext,
    currency_of,
    gather_items,
    priced_item,
)


async def _order_summary(
    services: DomainServices, order_id: str, *extra_fields: str
) -> dict[str, Any]:
    return await services.orders.retrieve(
        order_id,
        select=[*ORDER_TOTAL_FIELDS, *extra_fields],
        relations=ORDER_SUMMARY_RELATIONS,
    )


def _summary_flags(order: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "has_discounts": len(order.get("discounts") or []),
        "has_gift_cards": len(order.get("gift_cards") or []),
        "date": calendar_date(order.get("created_at")),
        "email": order.get("email"),
    }


async def order_placed(services: DomainServices, payload: Mapping[str, Any]) -> RenderContext:
    order = await _order_summary(services, payload["id"])
    currency = currency_of(order)

    async def decorate(item: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
        totals = await services.totals.get_line_item_totals(
            item, order, include_tax=True, use_tax_lines=True
        )
        return priced_item(item, totals, currency), totals

    decorated = await gather_items(order.get("items") or [], decorate)
    line_totals = [totals for _, totals in decorated]

    subtotal = sum_minor(t.get("original_total") for t in line_totals)
    # Discount total includes taxes.
    discount_total = subtotal - sum_minor(t.get("total") for t in line_totals)
    subtotal_ex_tax = sum_minor(t.get("subtotal") for t in line_totals)

    locale = await services.locales.resolve(order)

    return {
        **order,
        **_summary_flags(order),
        "locale": locale,
        "items": [item for item, _ in decorated],
        "discounts": discount_lines(order, currency),
        "subtotal_ex_tax": display_price(subtotal_ex_tax, currency),
        "subtotal": display_price(subtotal, currency),
        "gift_card_total": display_price(order.get("gift_card_total"), currency),
        "tax_total": display_price(order.get("tax_total"), currency),
        "discount_total": display_price(discount_total, currency),
        "shipping_total": display_price(order.get("shipping_total"), currency),
        "refunded_total": display_price(order.get("refunded_total"), currency),
        "total": display_price(order.get("total"), currency),
    }


async def order_canceled(services: DomainServices, payload: Mapping[str, Any]) -> RenderContext:
    order = await _order_summary(services, payload["id"])
    currency = currency_of(order)
    tax_rate = order.get("tax_rate")

    items = [
        {
            **item,
            "thumbnail": normalize_thumbnail_url(item.get("thumbnail")),
            "price": display_price(apply_tax_rate(item.get("unit_price"), tax_rate), currency),
        }
        for item in order.get("items") or []
    ]

    locale = await services.locales.resolve(order)

    def with_tax(field: str) -> str:
        return display_price(apply_tax_rate(order.get(field), tax_rate), currency)

    return {
        **order,
        **_summary_flags(order),
        "locale": locale,
        "items": items,
        "discounts": discount_lines(order, currency),
        "subtotal": with_tax("subtotal"),
        "gift_card_total": with_tax("gift_card_total"),
        "tax_total": display_price(order.get("tax_total"), currency),
        "discount_total": with_tax("discount_total"),
        "shipping_total": with_tax("shipping_total"),
        "refunded_total": display_price(order.get("refunded_total"), currency),
        "total": display_price(order.get("total"), currency),
    }


async def order_shipment_created(
    services: DomainServices, payload: Mapping[str, Any]
) -> RenderContext:
    order = await _order_summary(services, payload["id"], "refundable_amount")
    shipment = await services.fulfillments.retrieve(
        payload["fulfillment_id"], relations=["items", "tracking_links"]
    )
    locale = await services.locales.resolve(order)

    return {
        "locale": locale,
        "order": order,
        "date": calendar_date(shipment.get("shipped_at")),
        "email": order.get("email"),
        "fulfillment": shipment,
        "tracking_links": shipment.get("tracking_links") or [],
        "tracking_number": tracking_number(shipment),
    }
