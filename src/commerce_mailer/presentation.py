"""Display helpers shared by the event data assemblers."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from .pricing import display_price


def normalize_thumbnail_url(url: str | None) -> str | None:
    """Turn protocol-relative URLs into https URLs; empty values become None."""
    if not url:
        return None
    if url.startswith("//"):
        return f"https:{url}"
    return url


def calendar_date(value: datetime | date | str | None) -> str | None:
    """Render a timestamp as a calendar date, e.g. ``Mon Oct 19 2026``."""
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return value.strftime("%a %b %d %Y")


def discount_descriptor(discount: Mapping[str, Any], currency: str) -> str:
    """``10%`` for percentage rules, ``5.00 USD`` for fixed amounts."""
    rule = discount.get("rule") or {}
    value = rule.get("value") or 0
    if rule.get("type") == "percentage":
        return f"{value}%"
    return display_price(value, currency)


def gift_card_descriptor(gift_card: Mapping[str, Any], currency: str) -> str:
    return display_price(gift_card.get("value"), currency)


def discount_lines(aggregate: Mapping[str, Any], currency: str) -> list[dict[str, Any]]:
    """Discount lines followed by gift card lines for an order-like aggregate."""
    lines = [
        {
            "is_giftcard": False,
            "code": discount.get("code"),
            "descriptor": discount_descriptor(discount, currency),
        }
        for discount in aggregate.get("discounts") or []
    ]
    lines.extend(
        {
            "is_giftcard": True,
            "code": gift_card.get("code"),
            "descriptor": gift_card_descriptor(gift_card, currency),
        }
        for gift_card in aggregate.get("gift_cards") or []
    )
    return lines


def tracking_number(fulfillment: Mapping[str, Any]) -> str:
    return ", ".join(str(number) for number in fulfillment.get("tracking_numbers") or [])
