"""Domain models for top-up payment instructions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

COUNTRY_NAMES = {"US": "United States", "CN": "China"}
REQUIRED_FIELDS = ("country", "payment_method", "account_name", "account_number")


def country_name(code: str) -> str:
    return COUNTRY_NAMES.get(code, code)


@dataclass(slots=True)
class PaymentConfig:
    id: str
    admin_id: str
    country: str
    payment_method: str
    account_name: str
    account_number: str
    is_active: bool
    bank_name: Optional[str] = None
    routing_number: Optional[str] = None
    swift_code: Optional[str] = None
    additional_info: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(slots=True)
class Country:
    code: str
    name: str
