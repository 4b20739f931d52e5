"""Tests for template lookup, locale lookup and the environment snapshot."""

import pytest

from commerce_mailer.environment import environment_snapshot
from commerce_mailer.locales import LocaleResolver
from commerce_mailer.templates import TemplateResolver

from fakes import FakeAggregateService


def test_resolve_configured_event():
    resolver = TemplateResolver({"order.placed": "orderplaced"})

    assert resolver.resolve("order.placed") == "orderplaced"


def test_resolve_unconfigured_event_returns_none():
    resolver = TemplateResolver({"order.placed": "orderplaced"})

    assert resolver.resolve("order.canceled") is None


def test_empty_template_id_counts_as_missing():
    assert TemplateResolver({"order.placed": ""}).resolve("order.placed") is None


def test_resolver_is_isolated_from_the_source_map():
    source = {"order.placed": "orderplaced"}
    resolver = TemplateResolver(source)

    source["order.canceled"] = "ordercanceled"

    assert resolver.events == ("order.placed",)


@pytest.mark.asyncio
async def test_locale_read_from_cart_context(carts):
    locale = await LocaleResolver(carts).resolve({"cart_id": "cart_1"})

    assert locale == "de-DE"
    assert carts.calls == [("cart_1", ["id", "context"], None)]


@pytest.mark.asyncio
async def test_locale_without_cart_is_none(carts):
    assert await LocaleResolver(carts).resolve({}) is None
    assert carts.calls == []


@pytest.mark.asyncio
async def test_locale_lookup_failure_is_tolerated():
    locale = await LocaleResolver(FakeAggregateService()).resolve({"cart_id": "missing"})

    assert locale is None


@pytest.mark.asyncio
async def test_cart_without_locale():
    carts = FakeAggregateService({"cart_2": {"id": "cart_2", "context": {}}})

    assert await LocaleResolver(carts).resolve({"cart_id": "cart_2"}) is None


def test_environment_snapshot_drops_secret_names():
    snapshot = environment_snapshot(
        {
            "STORE_URL": "https://shop.test",
            "SMTP_PASSWORD": "hunter2",
            "STRIPE_API_KEY": "sk_test",
            "JWT_SECRET": "s3cr3t",
        }
    )

    assert dict(snapshot) == {"STORE_URL": "https://shop.test"}


def test_environment_snapshot_allow_list_and_immutability():
    snapshot = environment_snapshot({"PUBLIC_TOKEN": "pk"}, allow={"PUBLIC_TOKEN"})

    assert snapshot["PUBLIC_TOKEN"] == "pk"
    with pytest.raises(TypeError):
        snapshot["OTHER"] = "x"  # type: ignore[index]
