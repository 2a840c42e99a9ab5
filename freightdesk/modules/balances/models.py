"""Domain models for balances and the transaction ledger."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

TRANSACTION_CREDIT = "credit"
TRANSACTION_DEBIT = "debit"
TRANSACTION_REFUND = "refund"
TRANSACTION_ADJUSTMENT = "adjustment"
TRANSACTION_TYPES = frozenset(
    {TRANSACTION_CREDIT, TRANSACTION_DEBIT, TRANSACTION_REFUND, TRANSACTION_ADJUSTMENT}
)

DATE_RANGES = {"7days": 7, "30days": 30, "90days": 90, "all": None}
DEFAULT_DATE_RANGE = "30days"


@dataclass(slots=True)
class BalanceSnapshot:
    user_id: str
    current_balance_cents: int
    pending_balance_cents: int
    credit_limit_cents: int
    currency: str
    updated_at: Optional[datetime] = None

    @property
    def available_balance_cents(self) -> int:
        return self.current_balance_cents - self.pending_balance_cents

    def can_cover(self, amount_cents: int) -> bool:
        return self.available_balance_cents + self.credit_limit_cents >= amount_cents


@dataclass(slots=True)
class TransactionRecord:
    id: str
    transaction_id: str
    user_id: str
    transaction_type: str
    amount_cents: int
    currency: str
    status: str
    is_supervisor_transaction: bool
    created_at: Optional[datetime]
    base_amount_cents: Optional[int] = None
    order_id: Optional[str] = None
    order_number: Optional[str] = None
    order_account: Optional[str] = None
    company_name: Optional[str] = None
    user_email: Optional[str] = None
    description: Optional[str] = None
    payment_method: Optional[str] = None
    reference_id: Optional[str] = None
    details: Optional[dict[str, Any]] = None


@dataclass(slots=True)
class TransactionFilter:
    search: Optional[str] = None
    transaction_type: Optional[str] = None
    date_range: str = DEFAULT_DATE_RANGE
    limit: int = 100
    offset: int = 0


@dataclass(slots=True)
class TransactionScope:
    """Which ledger rows a viewer may see."""

    user_id: str
    include_supervisor: bool = False
    exclude_supervisor: bool = False
