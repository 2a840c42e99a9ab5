"""Domain models for shipment orders."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

STATUS_PENDING_REVIEW = "pending_review"
STATUS_PENDING = "pending"
STATUS_PROCESSING = "processing"
STATUS_CONFIRMED = "confirmed"
STATUS_IN_TRANSIT = "in_transit"
STATUS_DELIVERED = "delivered"
STATUS_CANCELLED = "cancelled"
STATUS_REJECTED = "rejected"
STATUS_EXCEPTION = "exception"

CANCELLABLE_STATUSES = frozenset({STATUS_PENDING_REVIEW})
REJECTABLE_STATUSES = frozenset({STATUS_PENDING_REVIEW, STATUS_PENDING, STATUS_PROCESSING})
REFUNDABLE_STATUSES = frozenset({STATUS_REJECTED, STATUS_CANCELLED, STATUS_EXCEPTION})
# statuses reached through a carrier sync that trigger an automatic refund
AUTO_REFUND_STATUSES = frozenset({STATUS_REJECTED, STATUS_CANCELLED})

CARRIER_STATUS_MAP = {
    "check pending": STATUS_PENDING_REVIEW,
    "Approval rejection": STATUS_REJECTED,
    "To be picked": STATUS_CONFIRMED,
    "In-Transit": STATUS_IN_TRANSIT,
    "Delivered": STATUS_DELIVERED,
    "Cancelled": STATUS_CANCELLED,
    "Reject": STATUS_EXCEPTION,
}

REFUND_STATUS_REFUNDED = "refunded"

_WHITESPACE = re.compile(r"\s+")


def map_carrier_status(carrier_status: Optional[str]) -> str:
    if not carrier_status:
        return STATUS_PENDING_REVIEW
    mapped = CARRIER_STATUS_MAP.get(carrier_status)
    if mapped is not None:
        return mapped
    return _WHITESPACE.sub("_", carrier_status.lower())


@dataclass(slots=True)
class OrderItem:
    id: str
    position: int
    quantity: int
    weight: float
    total_weight: float
    description: Optional[str] = None
    package_type: Optional[str] = None
    length: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    freight_class: Optional[str] = None
    nmfc: Optional[str] = None
    is_stackable: bool = False
    is_hazardous: bool = False


@dataclass(slots=True)
class Order:
    id: str
    user_id: str
    order_number: str
    status: str
    service_type: str
    total_amount_cents: int
    base_amount_cents: int
    currency: str
    created_at: Optional[datetime]
    quote_number: Optional[str] = None
    rate_id: Optional[str] = None
    reference_number: Optional[str] = None
    carrier_name: Optional[str] = None
    carrier_scac: Optional[str] = None
    carrier_guarantee: Optional[str] = None
    status_history: list[dict[str, Any]] = field(default_factory=list)
    origin: Optional[dict[str, Any]] = None
    destination: Optional[dict[str, Any]] = None
    contact: Optional[dict[str, Any]] = None
    pickup_date: Optional[date] = None
    estimated_delivery_date: Optional[date] = None
    tracking_number: Optional[str] = None
    pro_number: Optional[str] = None
    audit_remark: Optional[str] = None
    refund_status: Optional[str] = None
    refunded_at: Optional[datetime] = None
    carrier_response: Optional[dict[str, Any]] = None
    updated_at: Optional[datetime] = None
    items: list[OrderItem] = field(default_factory=list)


@dataclass(slots=True)
class OrderItemInput:
    quantity: int
    weight: float
    total_weight: float
    description: Optional[str] = None
    package_type: Optional[str] = None
    length: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    freight_class: Optional[str] = None
    nmfc: Optional[str] = None
    is_stackable: bool = False
    is_hazardous: bool = False


@dataclass(slots=True)
class SyncResult:
    order: Order
    carrier_status: Optional[str]
    carrier_data: dict[str, Any]
    refunded: bool = False


@dataclass(slots=True)
class RefundResult:
    order: Order
    created: bool
    amount_cents: int = 0
