"""Shared plumbing for the event data assemblers."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, TypeVar

from ..locales import LocaleResolver
from ..ports.services import (
    ICartService,
    IClaimService,
    IFulfillmentService,
    IGiftCardService,
    ILineItemService,
    IOrderService,
    IProductVariantService,
    IReturnService,
    IStoreService,
    ISwapService,
    ITotalsService,
)
from ..presentation import normalize_thumbnail_url
from ..pricing import display_price

RenderContext = dict[str, Any]
T = TypeVar("T")

# Fields and relations requested for order-summary style emails.
ORDER_TOTAL_FIELDS = [
    "shipping_total",
    "discount_total",
    "tax_total",
    "refunded_total",
    "gift_card_total",
    "subtotal",
    "total",
]
ORDER_SUMMARY_RELATIONS = [
    "customer",
    "billing_address",
    "shipping_address",
    "discounts",
    "discounts.rule",
    "shipping_methods",
    "shipping_methods.shipping_option",
    "payments",
    "fulfillments",
    "returns",
    "gift_cards",
    "gift_card_transactions",
]
CART_TOTAL_FIELDS = ["total", "tax_total", "discount_total", "shipping_total", "subtotal"]


@dataclass(frozen=True)
class DomainServices:
    """Bundle of the read-side domain services the assemblers query."""

    orders: IOrderService
    returns: IReturnService
    swaps: ISwapService
    claims: IClaimService
    fulfillments: IFulfillmentService
    carts: ICartService
    gift_cards: IGiftCardService
    line_items: ILineItemService
    product_variants: IProductVariantService
    store: IStoreService
    totals: ITotalsService

    @property
    def locales(self) -> LocaleResolver:
        return LocaleResolver(self.carts)


def currency_of(aggregate: Mapping[str, Any]) -> str:
    """Upper-cased currency code of an order, cart or region."""
    return str(aggregate.get("currency_code") or "").upper()


async def gather_items(
    items: Sequence[Mapping[str, Any]],
    decorate: Callable[[Mapping[str, Any]], Awaitable[T]],
) -> list[T]:
    """Decorate every item concurrently; all complete before the result returns."""
    return list(await asyncio.gather(*(decorate(item) for item in items)))


async def list_line_items(
    services: DomainServices, item_refs: Sequence[Mapping[str, Any]]
) -> dict[str, dict[str, Any]]:
    """Fetch the line items referenced by return items, keyed by id."""
    ids = [ref["item_id"] for ref in item_refs]
    if not ids:
        return {}
    items = await services.line_items.list({"id": ids}, relations=["tax_lines"])
    return {item["id"]: item for item in items}


def join_return_items(
    return_order: Mapping[str, Any], line_items: Mapping[str, Mapping[str, Any]]
) -> dict[str, Any]:
    """Copy of *return_order* whose items carry their line item under ``item``."""
    return {
        **return_order,
        "items": [
            {**ref, "item": line_items.get(ref["item_id"])}
            for ref in return_order.get("items") or []
        ],
    }


def per_unit(amount: int | None, quantity: int | None) -> Decimal:
    """Per-unit share of a line amount, in (fractional) minor units."""
    if not amount:
        return Decimal(0)
    return Decimal(amount) / Decimal(quantity or 1)


def priced_item(
    item: Mapping[str, Any], totals: Mapping[str, Any], currency: str
) -> dict[str, Any]:
    """Line item with normalized thumbnail and formatted unit prices."""
    quantity = item.get("quantity")
    return {
        **item,
        "thumbnail": normalize_thumbnail_url(item.get("thumbnail")),
        "tax_lines": totals.get("tax_lines", item.get("tax_lines") or []),
        "price": display_price(per_unit(totals.get("original_total"), quantity), currency),
        "discounted_price": display_price(per_unit(totals.get("total"), quantity), currency),
    }
