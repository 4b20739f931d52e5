"""Swap (exchange) emails.

A swap cart mixes the items being sent back (``is_return``) with the
additional items sent out; the two partitions are totalled independently.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..presentation import calendar_date, tracking_number
from ..pricing import display_price, sum_minor
from .base import (
    CART_TOTAL_FIELDS,
    DomainServices,
    RenderContext,
    currency_of,
    gather_items,
    join_return_items,
    list_line_items,
    priced_item,
)

SWAP_RELATIONS = [
    "additional_items",
    "additional_items.tax_lines",
    "return_order",
    "return_order.items",
    "return_order.items.item",
    "return_order.shipping_method",
    "return_order.shipping_method.shipping_option",
]
SWAP_SHIPMENT_RELATIONS = [
    "shipping_address",
    "shipping_methods",
    "shipping_methods.tax_lines",
    "additional_items",
    "additional_items.tax_lines",
    "return_order",
    "return_order.items",
]
SWAP_ORDER_RELATIONS = [
    "items",
    "items.tax_lines",
    "discounts",
    "discounts.rule",
    "shipping_address",
    "swaps",
    "swaps.additional_items",
    "swaps.additional_items.tax_lines",
]


async def _swap_cart(services: DomainServices, swap: Mapping[str, Any]) -> dict[str, Any]:
    return await services.carts.retrieve(
        swap["cart_id"], select=CART_TOTAL_FIELDS, relations=["items", "items.tax_lines"]
    )


async def _swap_basics(
    services: DomainServices, payload: Mapping[str, Any]
) -> tuple[dict[str, Any], dict[str, Any], str]:
    """Swap, its return order joined to line items, and the swap link."""
    store = await services.store.retrieve()
    swap = await services.swaps.retrieve(payload["id"], relations=SWAP_RELATIONS)
    return_order = swap.get("return_order") or {}
    line_items = await list_line_items(services, return_order.get("items") or [])
    link_template = store.get("swap_link_template") or ""
    swap_link = link_template.replace("{cart_id}", str(swap["cart_id"]), 1)
    return swap, join_return_items(return_order, line_items), swap_link


def _partition(
    decorated: list[tuple[dict[str, Any], int]],
) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    items = [item for item, _ in decorated if not item.get("is_return")]
    return_items = [item for item, _ in decorated if item.get("is_return")]
    return items, return_items


async def swap_created(services: DomainServices, payload: Mapping[str, Any]) -> RenderContext:
    swap, return_request, swap_link = await _swap_basics(services, payload)
    order = await services.orders.retrieve(
        swap["order_id"], select=["total"], relations=SWAP_ORDER_RELATIONS
    )
    cart = await _swap_cart(services, swap)
    currency = currency_of(order)

    async def decorate(item: Mapping[str, Any]) -> tuple[dict[str, Any], int]:
        totals = await services.totals.get_line_item_totals(item, cart, include_tax=True)
        return priced_item(item, totals, currency), totals.get("total") or 0

    decorated = await gather_items(cart.get("items") or [], decorate)

    return_total = -sum_minor(
        total for item, total in decorated if item.get("is_return") and item.get("variant_id")
    )
    additional_total = sum_minor(total for item, total in decorated if not item.get("is_return"))
    items, return_items = _partition(decorated)

    locale = await services.locales.resolve(order)

    return {
        "locale": locale,
        "swap": swap,
        "order": order,
        "return_request": return_request,
        "date": calendar_date(swap.get("updated_at")),
        "swap_link": swap_link,
        "email": order.get("email"),
        "items": items,
        "return_items": return_items,
        "return_total": display_price(return_total, currency),
        "refund_amount": display_price(return_request.get("refund_amount"), currency),
        "additional_total": display_price(additional_total, currency),
    }


async def swap_received(services: DomainServices, payload: Mapping[str, Any]) -> RenderContext:
    swap, return_request, swap_link = await _swap_basics(services, payload)
    order = await services.orders.retrieve(
        swap["order_id"], select=["total"], relations=SWAP_ORDER_RELATIONS
    )
    cart = await _swap_cart(services, swap)
    currency = currency_of(order)

    async def decorate(item: Mapping[str, Any]) -> tuple[dict[str, Any], int]:
        totals = await services.totals.get_line_item_totals(item, cart, include_tax=True)
        line_total = (totals.get("subtotal") or 0) + (totals.get("tax_total") or 0)
        return {**item, "price": display_price(line_total, currency)}, line_total

    decorated = await gather_items(cart.get("items") or [], decorate)

    return_total = -sum_minor(total for item, total in decorated if item.get("is_return"))
    additional_total = sum_minor(total for item, total in decorated if not item.get("is_return"))
    items, return_items = _partition(decorated)

    locale = await services.locales.resolve(order)

    return {
        "locale": locale,
        "swap": swap,
        "order": order,
        "return_request": return_request,
        "date": calendar_date(swap.get("updated_at")),
        "swap_link": swap_link,
        "email": order.get("email"),
        "items": items,
        "return_items": return_items,
        "return_total": display_price(return_total, currency),
        "tax_total": display_price(cart.get("tax_total"), currency),
        "refund_amount": display_price(return_request.get("refund_amount"), currency),
        "additional_total": display_price(additional_total, currency),
    }


async def swap_shipment_created(
    services: DomainServices, payload: Mapping[str, Any]
) -> RenderContext:
    swap = await services.swaps.retrieve(payload["id"], relations=SWAP_SHIPMENT_RELATIONS)
    order = await services.orders.retrieve(
        swap["order_id"], relations=["region", *SWAP_ORDER_RELATIONS]
    )
    cart = await _swap_cart(services, swap)
    return_order = swap.get("return_order") or {}
    line_items = await list_line_items(services, return_order.get("items") or [])
    currency = currency_of(order)

    async def decorate_returned(ref: Mapping[str, Any]) -> dict[str, Any]:
        item = {**line_items[ref["item_id"]], "quantity": ref["quantity"]}
        totals = await services.totals.get_line_item_totals(item, cart, include_tax=True)
        return priced_item(item, totals, currency)

    async def decorate_additional(item: Mapping[str, Any]) -> dict[str, Any]:
        totals = await services.totals.get_line_item_totals(item, cart, include_tax=True)
        return priced_item(item, totals, currency)

    return_items = await gather_items(return_order.get("items") or [], decorate_returned)
    return_total = await services.totals.get_refund_total(order, return_items)

    shipped_order = {
        **order,
        "shipping_methods": swap.get("shipping_methods") or [],
        "items": swap.get("additional_items") or [],
    }
    additional_total = await services.totals.get_total(shipped_order)

    shipment = await services.fulfillments.retrieve(
        payload["fulfillment_id"], relations=["tracking_links"]
    )
    items = await gather_items(swap.get("additional_items") or [], decorate_additional)
    locale = await services.locales.resolve(order)

    return {
        "locale": locale,
        "swap": swap,
        "order": order,
        "items": items,
        "return_items": return_items,
        "date": calendar_date(swap.get("updated_at")),
        "email": order.get("email"),
        "tax_amount": display_price(cart.get("tax_total"), currency),
        "paid_total": display_price(swap.get("difference_due"), currency),
        "return_total": display_price(return_total, currency),
        "refund_amount": display_price(return_order.get("refund_amount"), currency),
        "additional_total": display_price(additional_total, currency),
        "fulfillment": shipment,
        "tracking_links": shipment.get("tracking_links") or [],
        "tracking_number": tracking_number(shipment),
    }
