"""Domain models for balance top-up requests."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"
STATUSES = frozenset({STATUS_PENDING, STATUS_APPROVED, STATUS_REJECTED})

ACTION_APPROVE = "approve"
ACTION_REJECT = "reject"


@dataclass(slots=True)
class TopupRequest:
    id: str
    user_id: str
    payment_config_id: str
    amount_cents: int
    currency: str
    status: str
    created_at: Optional[datetime]
    payment_reference: Optional[str] = None
    customer_notes: Optional[str] = None
    payment_details: Optional[dict[str, Any]] = None
    admin_notes: Optional[str] = None
    approved_amount_cents: Optional[int] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    user_email: Optional[str] = None
    user_name: Optional[str] = None
    company_name: Optional[str] = None
    payment_method: Optional[str] = None
    payment_country: Optional[str] = None
