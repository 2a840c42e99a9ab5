"""Repository protocol for balances and transactions."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol, Sequence

from .models import BalanceSnapshot, TransactionFilter, TransactionRecord, TransactionScope


class BalanceRepository(Protocol):
    async def get_balance(self, user_id: str) -> BalanceSnapshot | None:
        ...

    async def create_balance(self, user_id: str, currency: str) -> BalanceSnapshot:
        ...

    async def adjust_balance(
        self,
        user_id: str,
        delta_cents: int,
        *,
        required_available_cents: int | None = None,
    ) -> BalanceSnapshot | None:
        ...

    async def set_balance(self, user_id: str, balance_cents: int) -> None:
        ...

    async def next_transaction_id(self, year: int) -> str:
        ...

    async def add_transaction(self, **fields: Any) -> TransactionRecord:
        ...

    async def list_transactions(
        self,
        scope: TransactionScope,
        filters: TransactionFilter,
        since: datetime | None,
    ) -> tuple[Sequence[TransactionRecord], int]:
        ...

    async def delete_all_transactions(self) -> int:
        ...
