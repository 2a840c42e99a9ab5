"""Insurance quote request fields and result."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

REQUIRED_FIELDS = (
    "quoteOrderId",
    "originPickDateYmd",
    "originUserName",
    "originEmail",
    "originPhone",
    "originAddress1",
    "originCity",
    "originProvince",
    "originZipCode",
    "originCountry",
    "destinationUserName",
    "destinationEmail",
    "destinationPhone",
    "destinationAddress1",
    "destinationCity",
    "destinationProvince",
    "destinationZipCode",
    "destinationCountry",
    "shipmentType",
    "declaredValue",
)
OPTIONAL_FIELDS = ("originAddress2", "destinationAddress2")


@dataclass(slots=True)
class InsuranceQuote:
    insurance_amount: Decimal
    base_insurance_amount: Decimal
    price_ratio: Decimal
    compensation_ceiling: Optional[Any] = None
