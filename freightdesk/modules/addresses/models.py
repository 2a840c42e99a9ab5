"""Domain models for saved addresses."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

ADDRESS_TYPES = frozenset({"origin", "destination", "both"})
CLASSIFICATIONS = frozenset({"Commercial", "Residential", "Unknown"})
REQUIRED_FIELDS = (
    "address_name",
    "contact_name",
    "contact_phone",
    "contact_email",
    "address_line1",
    "city",
    "postal_code",
    "country",
    "address_type",
)


@dataclass(slots=True)
class Address:
    id: str
    user_id: str
    address_name: str
    contact_name: str
    contact_phone: str
    contact_email: str
    address_line1: str
    city: str
    postal_code: str
    country: str
    address_type: str
    address_classification: str = "Unknown"
    company_name: Optional[str] = None
    address_line2: Optional[str] = None
    state: Optional[str] = None
    is_default: bool = False
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(slots=True)
class AddressValidationResult:
    success: bool
    validated: bool
    classification: str
    matched_address: Optional[dict[str, Any]]
    original_address: dict[str, Any]
    errors: list[str]
