"""Result types returned by the quote service."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional


@dataclass(slots=True)
class SubmittedQuote:
    quote_number: str
    service_type: str
    initial_rates: list[dict[str, Any]] = field(default_factory=list)


@dataclass(slots=True)
class ItemEstimate:
    index: int
    density: Optional[float]
    freight_class: str


@dataclass(slots=True)
class ShipmentEstimate:
    items: list[ItemEstimate]
    transit_days: int
    estimated_delivery_date: Optional[date] = None
