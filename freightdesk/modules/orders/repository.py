"""Repository protocol for orders."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol, Sequence

from .models import Order, OrderItemInput


class OrderRepository(Protocol):
    async def create_order(self, items: Sequence[OrderItemInput], **fields: Any) -> Order:
        ...

    async def get_order(self, order_id: str) -> Optional[Order]:
        ...

    async def list_orders(
        self,
        *,
        user_id: Optional[str],
        status: Optional[str],
        limit: int,
        offset: int,
    ) -> tuple[Sequence[Order], int]:
        ...

    async def update_order(self, order_id: str, **fields: Any) -> Order:
        ...

    async def claim_refund(self, order_id: str, refunded_at: datetime) -> Optional[Order]:
        """Mark the order refunded unless it already is; ``None`` when another caller got there first."""
        ...

    async def delete_all(self) -> tuple[int, int]:
        ...
