"""Domain models for user accounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

USER_TYPE_ADMIN = "admin"
USER_TYPE_CUSTOMER = "customer"
USER_TYPES = frozenset({USER_TYPE_ADMIN, USER_TYPE_CUSTOMER})


@dataclass(slots=True)
class User:
    id: str
    email: str
    full_name: str
    user_type: str
    is_active: bool
    password_hash: str = field(repr=False)
    company_name: Optional[str] = None
    phone: Optional[str] = None
    price_ratio: float = 0.0
    bonus_credit_cents: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    def is_admin(self) -> bool:
        return self.user_type == USER_TYPE_ADMIN

    def is_customer(self) -> bool:
        return self.user_type == USER_TYPE_CUSTOMER


@dataclass(slots=True)
class UserCreateInput:
    email: str
    password: str
    full_name: str
    company_name: Optional[str] = None
    phone: Optional[str] = None
    user_type: str = USER_TYPE_CUSTOMER
    price_ratio: float = 0.0
    is_active: bool = True


# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()


@dataclass(slots=True)
class UserUpdateInput:
    email: Optional[str] | object = UNSET
    full_name: Optional[str] | object = UNSET
    company_name: Optional[str] | object = UNSET
    phone: Optional[str] | object = UNSET
    price_ratio: Optional[float] | object = UNSET
    is_active: Optional[bool] | object = UNSET
    password: Optional[str] | object = UNSET
