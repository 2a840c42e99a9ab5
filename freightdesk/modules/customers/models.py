"""Domain models for admin-managed customer accounts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from freightdesk.modules.accounts.models import UNSET, User
from freightdesk.modules.balances.models import BalanceSnapshot

MIN_PRICE_RATIO = 0
MAX_PRICE_RATIO = 500


@dataclass(slots=True)
class Customer:
    user: User
    balance: Optional[BalanceSnapshot] = None
    role_id: Optional[str] = None


@dataclass(slots=True)
class CustomerCreateInput:
    email: str
    password: str
    full_name: str
    company_name: Optional[str] = None
    phone: Optional[str] = None
    price_ratio: float = 0.0
    bonus_credit_cents: int = 0
    role_id: Optional[str] = None


@dataclass(slots=True)
class CustomerUpdateInput:
    email: Optional[str] | object = UNSET
    full_name: Optional[str] | object = UNSET
    company_name: Optional[str] | object = UNSET
    phone: Optional[str] | object = UNSET
    price_ratio: Optional[float] | object = UNSET
    bonus_credit_cents: Optional[int] | object = UNSET
    role_id: Optional[str] | object = UNSET
    is_active: Optional[bool] | object = UNSET
