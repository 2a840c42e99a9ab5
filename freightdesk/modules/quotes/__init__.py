"""LTL, TL and FBA quoting against the carrier."""

from .builders import (
    ACCESSORIAL_MAP,
    PACKAGE_TYPE_MAP,
    build_fba_body,
    build_ltl_body,
    build_order_body,
    build_tl_body,
    generate_reference_number,
)
from .exceptions import QuoteError, QuoteValidationError
from .models import ItemEstimate, ShipmentEstimate, SubmittedQuote
from .service import QuoteService, price_rates_for

__all__ = [
    "ACCESSORIAL_MAP",
    "PACKAGE_TYPE_MAP",
    "ItemEstimate",
    "QuoteError",
    "QuoteService",
    "QuoteValidationError",
    "ShipmentEstimate",
    "SubmittedQuote",
    "build_fba_body",
    "build_ltl_body",
    "build_order_body",
    "build_tl_body",
    "generate_reference_number",
    "price_rates_for",
]
