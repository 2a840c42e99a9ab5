"""Repository protocol for saved addresses."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from .models import Address


class AddressRepository(Protocol):
    async def list_for_user(self, user_id: str, address_type: str | None = None) -> Sequence[Address]:
        ...

    async def get(self, address_id: str) -> Address | None:
        ...

    async def create(self, user_id: str, fields: dict[str, Any]) -> Address:
        ...

    async def update(self, address_id: str, fields: dict[str, Any]) -> Address:
        ...

    async def delete(self, address_id: str) -> None:
        ...

    async def clear_default(self, user_id: str, address_type: str) -> None:
        ...
