"""Back-in-stock emails."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..presentation import normalize_thumbnail_url
from .base import DomainServices, RenderContext


async def restock_notification(
    services: DomainServices, payload: Mapping[str, Any]
) -> RenderContext:
    """
    Product and variant details for everyone waiting on a variant.

    The context carries every waiting address in ``emails``; the dispatcher
    sends each address its own message.
    """
    variant_id = payload["variant_id"]
    emails = list(payload.get("emails") or [])
    variant = await services.product_variants.retrieve(variant_id, relations=["product"])
    product = variant.get("product") or {}

    return {
        "product": {**product, "thumbnail": normalize_thumbnail_url(product.get("thumbnail"))},
        "variant": variant,
        "variant_id": variant_id,
        "emails": emails,
    }
