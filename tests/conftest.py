"""Test configuration for commerce-mailer."""

from typing import Any

import pytest
from fakes import (
    FakeAggregateService,
    FakeFulfillmentProviders,
    FakeLineItemService,
    FakeStoreService,
    FakeTotalsService,
    RecordingRenderer,
    make_order,
)

from commerce_mailer.assemblers import DomainServices
from commerce_mailer.memory.fake import InMemorySender

pytest_plugins = ["pytest_asyncio"]


@pytest.fixture
def order() -> dict[str, Any]:
    return make_order()


@pytest.fixture
def totals() -> FakeTotalsService:
    return FakeTotalsService()


@pytest.fixture
def carts() -> FakeAggregateService:
    return FakeAggregateService({"cart_1": {"id": "cart_1", "context": {"locale": "de-DE"}}})


@pytest.fixture
def services(order, totals, carts) -> DomainServices:
    return DomainServices(
        orders=FakeAggregateService({order["id"]: order}),
        returns=FakeAggregateService(),
        swaps=FakeAggregateService(),
        claims=FakeAggregateService(),
        fulfillments=FakeAggregateService(),
        carts=carts,
        gift_cards=FakeAggregateService(),
        line_items=FakeLineItemService(),
        product_variants=FakeAggregateService(),
        store=FakeStoreService(),
        totals=totals,
    )


@pytest.fixture
def sender() -> InMemorySender:
    return InMemorySender()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def providers() -> FakeFulfillmentProviders:
    return FakeFulfillmentProviders(documents=[{"content": "bGFiZWw=", "type": "application/pdf"}])
