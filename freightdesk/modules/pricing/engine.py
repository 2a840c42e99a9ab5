"""Customer markup pricing.

A customer's ``price_ratio`` is a percentage markup over the carrier's base
price: 25 means the customer pays 125% of the base rate. Administrators always
see the base price.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable, Union

from .exceptions import PricingError

MIN_RATIO = Decimal("-50")
MAX_RATIO = Decimal("500")
DEFAULT_RATIO = Decimal("0")
PRICE_PRECISION = Decimal("0.01")

PRICE_FIELDS = frozenset(
    {
        "totalCharge",
        "lineCharge",
        "fuelCharge",
        "accessorialCharge",
        "insuranceCharge",
        "rate",
        "cost",
        "price",
        "amount",
        "baseRate",
        "totalRate",
        "netCharge",
    }
)

# the carrier spells this key both ways across endpoints
ACCESSORIAL_LIST_FIELDS = frozenset({"accessorialsList", "accesoriesList"})

Number = Union[int, float, str, Decimal]


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, float) and not math.isfinite(value):
        raise PricingError(f"Invalid amount: {value}")
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise PricingError(f"Invalid amount: {value!r}") from exc
    if not result.is_finite():
        raise PricingError(f"Invalid amount: {value!r}")
    return result


def quantize(value: Decimal) -> Decimal:
    return value.quantize(PRICE_PRECISION, rounding=ROUND_HALF_UP)


def to_cents(value: Number) -> int:
    return int(quantize(to_decimal(value)) * 100)


def from_cents(cents: int) -> Decimal:
    return quantize(Decimal(cents) / 100)


def normalize_ratio(ratio: Number | None) -> Decimal:
    """Clamp a markup percentage into the supported range."""
    if ratio is None:
        return DEFAULT_RATIO
    value = to_decimal(ratio)
    return max(MIN_RATIO, min(MAX_RATIO, value))


def _multiplier(ratio: Number | None) -> Decimal:
    return 1 + normalize_ratio(ratio) / 100


def customer_price(base: Number, ratio: Number | None) -> Decimal:
    amount = to_decimal(base)
    if amount < 0:
        raise PricingError("Price cannot be negative")
    return quantize(amount * _multiplier(ratio))


def base_price(customer: Number, ratio: Number | None) -> Decimal:
    amount = to_decimal(customer)
    if amount < 0:
        raise PricingError("Price cannot be negative")
    multiplier = _multiplier(ratio)
    if multiplier <= 0:
        raise PricingError("Ratio results in a non-positive multiplier")
    return quantize(amount / multiplier)


def customer_price_cents(base_cents: int, ratio: Number | None) -> int:
    return to_cents(customer_price(from_cents(base_cents), ratio))


def display_price(base: Number, ratio: Number | None, *, is_admin: bool) -> Decimal:
    if is_admin:
        return quantize(to_decimal(base))
    return customer_price(base, ratio)


def _adjust_value(value: Any, ratio: Number | None) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float, Decimal)):
        try:
            amount = to_decimal(value)
        except PricingError:
            return value
        if amount <= 0:
            return value
        return float(customer_price(amount, ratio))
    if isinstance(value, str):
        try:
            amount = to_decimal(value.strip())
        except PricingError:
            return value
        if amount <= 0:
            return value
        return f"{customer_price(amount, ratio):.2f}"
    return value


def apply_pricing_to_quote(quote: dict[str, Any], ratio: Number | None) -> dict[str, Any]:
    """Return a copy of a carrier quote with every positive price field marked up.

    Strings stay strings (two decimals) so the response keeps the carrier's shape.
    """
    if normalize_ratio(ratio) == 0:
        return dict(quote)

    priced: dict[str, Any] = {}
    for key, value in quote.items():
        if key in PRICE_FIELDS:
            priced[key] = _adjust_value(value, ratio)
        elif key == "charges" and isinstance(value, dict):
            priced[key] = {k: _adjust_value(v, ratio) for k, v in value.items()}
        elif key in ACCESSORIAL_LIST_FIELDS and isinstance(value, list):
            priced[key] = [
                {**item, "chargeAmount": _adjust_value(item.get("chargeAmount"), ratio)}
                if isinstance(item, dict) and "chargeAmount" in item
                else item
                for item in value
            ]
        elif key == "rates" and isinstance(value, list):
            priced[key] = [
                apply_pricing_to_quote(item, ratio) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            priced[key] = value
    return priced


def apply_pricing_to_quotes(quotes: Iterable[dict[str, Any]], ratio: Number | None) -> list[dict[str, Any]]:
    return [apply_pricing_to_quote(quote, ratio) for quote in quotes]


def pricing_for(is_admin: bool, ratio: Number | None) -> Decimal:
    """Effective ratio for a viewer: admins always see the base rate."""
    return DEFAULT_RATIO if is_admin else normalize_ratio(ratio)


__all__ = [
    "DEFAULT_RATIO",
    "MAX_RATIO",
    "MIN_RATIO",
    "PRICE_FIELDS",
    "apply_pricing_to_quote",
    "apply_pricing_to_quotes",
    "base_price",
    "customer_price",
    "customer_price_cents",
    "display_price",
    "from_cents",
    "normalize_ratio",
    "pricing_for",
    "quantize",
    "to_cents",
    "to_decimal",
]
