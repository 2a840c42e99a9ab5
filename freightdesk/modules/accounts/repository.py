"""Repository protocol for user accounts."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol, Sequence

from .models import User


class AccountRepository(Protocol):
    """Abstract repository interface for account persistence."""

    async def get_by_id(self, user_id: str) -> User | None:
        ...

    async def get_by_email(self, email: str) -> User | None:
        ...

    async def list_users(
        self,
        *,
        user_type: str | None = None,
        is_active: bool | None = None,
    ) -> Sequence[User]:
        ...

    async def get_supervisor(self) -> User | None:
        ...

    async def create_user(
        self,
        *,
        email: str,
        password_hash: str,
        full_name: str,
        company_name: str | None,
        phone: str | None,
        user_type: str,
        price_ratio: float,
        is_active: bool,
        currency: str,
    ) -> User:
        ...

    async def update_user(self, user_id: str, **fields: Any) -> User:
        ...

    async def set_last_login(self, user_id: str, timestamp: datetime) -> None:
        ...
