"""Markup pricing engine."""

from .engine import (
    DEFAULT_RATIO,
    MAX_RATIO,
    MIN_RATIO,
    PRICE_FIELDS,
    apply_pricing_to_quote,
    apply_pricing_to_quotes,
    base_price,
    customer_price,
    customer_price_cents,
    display_price,
    from_cents,
    normalize_ratio,
    pricing_for,
    quantize,
    to_cents,
    to_decimal,
)
from .exceptions import PricingError

__all__ = [
    "DEFAULT_RATIO",
    "MAX_RATIO",
    "MIN_RATIO",
    "PRICE_FIELDS",
    "PricingError",
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
