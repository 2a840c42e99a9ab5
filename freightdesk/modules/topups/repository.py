"""Repository protocol for top-up requests."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol, Sequence

from freightdesk.db.models import TopUpRequest as TopUpRequestModel


class TopupRequestRepository(Protocol):
    async def create(self, **fields: Any) -> TopUpRequestModel:
        ...

    async def get(self, request_id: str) -> TopUpRequestModel | None:
        ...

    async def list_for_user(self, user_id: str, limit: int, offset: int) -> Sequence[tuple]:
        ...

    async def list_all(self, *, status: str | None, limit: int, offset: int) -> Sequence[tuple]:
        ...

    async def mark_reviewed(
        self,
        request_id: str,
        *,
        from_status: str,
        status: str,
        reviewed_by: str,
        reviewed_at: datetime,
        admin_notes: str | None,
        approved_amount_cents: int | None,
    ) -> TopUpRequestModel | None:
        """Move the request out of ``from_status``; ``None`` when it is no longer there."""
        ...

    async def delete_all(self) -> int:
        ...
