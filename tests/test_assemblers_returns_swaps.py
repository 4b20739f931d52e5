"""Tests for the return and swap assemblers."""

from dataclasses import replace

import pytest
from fakes import CREATED_AT, FakeLineItemService

from commerce_mailer.assemblers import DomainServices, EventDataAssembler


def with_line_items(services: DomainServices, order) -> DomainServices:
    return replace(services, line_items=FakeLineItemService(order["items"]))


@pytest.fixture
def return_services(services, order):
    services.returns.records["ret_1"] = {
        "id": "ret_1",
        "refund_amount": 2500,
        "updated_at": CREATED_AT,
        "items": [{"item_id": "item_1", "quantity": 1}],
        "shipping_method": {
            "price": 500,
            "tax_lines": [{"rate": 20}],
            "shipping_option": {"provider_id": "manual"},
        },
        "shipping_data": {"parcel": "P-1"},
    }
    return with_line_items(services, order)


@pytest.fixture
def swap_services(services, order):
    services.swaps.records["swap_1"] = {
        "id": "swap_1",
        "order_id": "order_1",
        "cart_id": "cart_1",
        "updated_at": CREATED_AT,
        "difference_due": 750,
        "return_order": {
            "id": "ret_2",
            "refund_amount": 1000,
            "items": [{"item_id": "item_2", "quantity": 1}],
        },
        "additional_items": [
            {
                "id": "ai_1",
                "unit_price": 2000,
                "quantity": 1,
                "thumbnail": "//cdn.test/jacket.png",
                "tax_lines": [{"rate": 25}],
            }
        ],
        "shipping_methods": [{"price": 300}],
    }
    services.carts.records["cart_1"].update(
        tax_total=250,
        items=[
            {
                "id": "cl_2",
                "is_return": False,
                "variant_id": "var_3",
                "unit_price": 2000,
                "quantity": 1,
                "tax_lines": [{"rate": 25}],
            },
            {
                "id": "cl_1",
                "is_return": True,
                "variant_id": "var_2",
                "unit_price": 1000,
                "quantity": 1,
                "tax_lines": [{"rate": 25}],
            },
            {
                "id": "cl_3",
                "is_return": True,
                "variant_id": None,
                "unit_price": 400,
                "quantity": 1,
                "tax_lines": [],
            },
        ],
    )
    services.fulfillments.records["ful_1"] = {
        "id": "ful_1",
        "tracking_numbers": ["TRK9"],
        "tracking_links": [],
    }
    return with_line_items(services, order)


@pytest.mark.asyncio
async def test_return_requested(return_services):
    data = await EventDataAssembler(return_services).assemble(
        "order.return_requested", {"id": "order_1", "return_id": "ret_1"}
    )

    assert data["email"] == "alice@example.com"
    assert data["locale"] == "de-DE"
    assert data["has_shipping"] is True
    (item,) = data["items"]
    assert item["id"] == "item_1"
    assert item["quantity"] == 1
    assert item["price"] == "12.50 USD"
    assert item["thumbnail"] == "https://cdn.test/shirt.png"
    assert data["subtotal"] == "12.50 USD"
    # 5.00 shipping plus 20% tax
    assert data["shipping_total"] == "6.00 USD"
    assert data["refund_amount"] == "25.00 USD"
    assert data["return_request"]["refund_amount"] == "25.00 USD"
    assert data["return_request"]["shipping_data"] == {"parcel": "P-1"}
    assert data["date"] == "Mon Oct 19 2026"


@pytest.mark.asyncio
async def test_return_without_shipping_method(return_services):
    del return_services.returns.records["ret_1"]["shipping_method"]

    data = await EventDataAssembler(return_services).assemble(
        "order.return_requested", {"id": "order_1", "return_id": "ret_1"}
    )

    assert data["has_shipping"] is False
    assert data["shipping_total"] == "0.00 USD"


@pytest.mark.asyncio
async def test_items_returned_shares_the_return_context(return_services):
    payload = {"id": "order_1", "return_id": "ret_1"}
    assembler = EventDataAssembler(return_services)

    requested = await assembler.assemble("order.return_requested", payload)
    returned = await assembler.assemble("order.items_returned", payload)

    assert returned == requested


@pytest.mark.asyncio
async def test_swap_created_partitions_cart(swap_services):
    data = await EventDataAssembler(swap_services).assemble("swap.created", {"id": "swap_1"})

    assert [item["id"] for item in data["items"]] == ["cl_2"]
    assert [item["id"] for item in data["return_items"]] == ["cl_1", "cl_3"]
    # Return lines without a variant do not count towards the return total
    assert data["return_total"] == "-12.50 USD"
    assert data["additional_total"] == "25.00 USD"
    assert data["refund_amount"] == "10.00 USD"
    assert data["swap_link"] == "https://shop.test/swaps/cart_1"
    assert data["email"] == "alice@example.com"
    assert data["locale"] == "de-DE"
    assert data["return_request"]["items"][0]["item"]["id"] == "item_2"


@pytest.mark.asyncio
async def test_swap_created_totals_do_not_depend_on_cart_order(swap_services):
    cart = swap_services.carts.records["cart_1"]
    assembler = EventDataAssembler(swap_services)

    first = await assembler.assemble("swap.created", {"id": "swap_1"})
    cart["items"].reverse()
    second = await assembler.assemble("swap.created", {"id": "swap_1"})

    assert first["return_total"] == second["return_total"]
    assert first["additional_total"] == second["additional_total"]


@pytest.mark.asyncio
async def test_swap_received(swap_services):
    data = await EventDataAssembler(swap_services).assemble("swap.received", {"id": "swap_1"})

    assert data["items"][0]["price"] == "25.00 USD"
    assert data["return_total"] == "-16.50 USD"
    assert data["additional_total"] == "25.00 USD"
    assert data["tax_total"] == "2.50 USD"
    assert data["refund_amount"] == "10.00 USD"


@pytest.mark.asyncio
async def test_swap_shipment_created(swap_services):
    data = await EventDataAssembler(swap_services).assemble(
        "swap.shipment_created", {"id": "swap_1", "fulfillment_id": "ful_1"}
    )

    (item,) = data["items"]
    assert item["id"] == "ai_1"
    assert item["thumbnail"] == "https://cdn.test/jacket.png"
    assert item["price"] == "25.00 USD"
    (returned,) = data["return_items"]
    assert returned["id"] == "item_2"
    assert data["return_total"] == "10.00 USD"
    # Additional item plus the swap's own shipping
    assert data["additional_total"] == "23.00 USD"
    assert data["tax_amount"] == "2.50 USD"
    assert data["paid_total"] == "7.50 USD"
    assert data["refund_amount"] == "10.00 USD"
    assert data["tracking_number"] == "TRK9"
    assert data["email"] == "alice@example.com"


@pytest.mark.asyncio
async def test_swap_link_without_store_template(swap_services):
    swap_services.store.store = {"swap_link_template": None}

    data = await EventDataAssembler(swap_services).assemble("swap.created", {"id": "swap_1"})

    assert data["swap_link"] == ""
