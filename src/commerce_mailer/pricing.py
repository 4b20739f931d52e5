"""Minor-unit money arithmetic and display formatting.

Amounts are integer counts of minor currency units (cents for USD, yen for
JPY). Arithmetic stays in minor units; ``format_price`` turns an amount into a
display string exactly once, when a render context is built.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

ZERO_DECIMAL_CURRENCIES: frozenset[str] = frozenset(
    {
        "bif",
        "clp",
        "djf",
        "gnf",
        "jpy",
        "kmf",
        "krw",
        "mga",
        "pyg",
        "rwf",
        "ugx",
        "vnd",
        "vuv",
        "xaf",
        "xof",
        "xpf",
    }
)

_ONE = Decimal("1")
_HUNDRED = Decimal("100")


def is_zero_decimal(currency: str) -> bool:
    return currency.lower() in ZERO_DECIMAL_CURRENCIES


def _to_decimal(value: int | float | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_minor(value: int | float | Decimal) -> int:
    """Round to the nearest minor unit, halves away from zero."""
    return int(_to_decimal(value).quantize(_ONE, rounding=ROUND_HALF_UP))


def humanize_amount(amount: int | float | Decimal, currency: str) -> Decimal:
    """Convert minor units into major units for *currency*."""
    value = _to_decimal(amount)
    if is_zero_decimal(currency):
        return value
    return value / _HUNDRED


def format_price(amount: int | float | Decimal | None, currency: str) -> str:
    """
    Format a minor-unit amount as a decimal string without currency code.

    ``format_price(1050, "USD") == "10.50"``, ``format_price(500, "JPY") == "500"``.
    Fractional minor units (per-unit prices of multi-quantity lines) are rounded
    half up at the display precision.
    """
    places = 0 if is_zero_decimal(currency) else 2
    if not amount:
        return "0" if places == 0 else "0.00"

    exponent = _ONE if places == 0 else Decimal("0.01")
    normalized = humanize_amount(amount, currency).quantize(exponent, rounding=ROUND_HALF_UP)
    return f"{normalized:.{places}f}"


def display_price(amount: int | float | Decimal | None, currency: str) -> str:
    """Format *amount* followed by the upper-cased currency code."""
    return f"{format_price(amount, currency)} {currency.upper()}"


def apply_tax_rate(amount: int | None, rate_percent: float | None) -> int:
    """Return *amount* with a flat percentage tax added, in minor units."""
    if not amount:
        return 0
    rate = _to_decimal(rate_percent or 0) / _HUNDRED
    return round_minor(_to_decimal(amount) * (_ONE + rate))


def tax_inclusive_shipping(price: int | None, tax_lines: Iterable[Mapping[str, Any]]) -> int:
    """
    Return a shipping price with every tax line applied.

    Each tax line contributes ``round(price * rate / 100)``; contributions are
    summed as integers and never re-rounded.
    """
    base = price or 0
    total = base
    for line in tax_lines:
        rate = _to_decimal(line.get("rate") or 0)
        total += round_minor(_to_decimal(base) * rate / _HUNDRED)
    return total


def sum_minor(values: Iterable[int | None]) -> int:
    return sum(value or 0 for value in values)
