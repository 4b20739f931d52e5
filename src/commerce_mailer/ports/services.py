"""Read-side ports onto the commerce domain services.

Aggregates cross these ports as plain mappings. ``select`` narrows the scalar
fields (including computed totals) and ``relations`` names the relation graph
to join, using dotted paths such as ``"items.tax_lines"``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

Record = dict[str, Any]


@runtime_checkable
class IAggregateService(Protocol):
    """Retrieval by id, shared by every aggregate service."""

    async def retrieve(
        self,
        entity_id: str,
        *,
        select: Sequence[str] | None = None,
        relations: Sequence[str] | None = None,
    ) -> Record:
        """Return the aggregate or raise when it does not exist."""
        ...


class IOrderService(IAggregateService, Protocol):
    """Orders."""


class IReturnService(IAggregateService, Protocol):
    """Return requests."""


class ISwapService(IAggregateService, Protocol):
    """Swaps (exchanges)."""


class IClaimService(IAggregateService, Protocol):
    """Claims."""


class IFulfillmentService(IAggregateService, Protocol):
    """Fulfillments and their tracking links."""


class ICartService(IAggregateService, Protocol):
    """Carts."""


class IGiftCardService(IAggregateService, Protocol):
    """Gift cards."""


class IProductVariantService(IAggregateService, Protocol):
    """Product variants."""


@runtime_checkable
class ILineItemService(Protocol):
    async def list(
        self,
        selector: Mapping[str, Any],
        *,
        relations: Sequence[str] | None = None,
    ) -> list[Record]:
        """List line items matching *selector* (``{"id": [...]}``)."""
        ...


@runtime_checkable
class IStoreService(Protocol):
    async def retrieve(self) -> Record:
        """Return the store settings, including ``swap_link_template``."""
        ...


@runtime_checkable
class ITotalsService(Protocol):
    """Totals computation; every amount returned is in minor units."""

    async def get_line_item_totals(
        self,
        item: Mapping[str, Any],
        order: Mapping[str, Any],
        *,
        include_tax: bool = False,
        use_tax_lines: bool = False,
    ) -> Record:
        """
        Return ``unit_price``, ``quantity``, ``subtotal``, ``tax_total``,
        ``original_total``, ``original_tax_total``, ``total`` and
        ``tax_lines`` for one line item of *order* (an order or cart).
        """
        ...

    async def get_total(self, order: Mapping[str, Any]) -> int:
        ...

    async def get_refund_total(
        self, order: Mapping[str, Any], items: Sequence[Mapping[str, Any]]
    ) -> int:
        ...
