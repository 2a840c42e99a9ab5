"""Repository protocol for payment configurations."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from .models import PaymentConfig


class PaymentConfigRepository(Protocol):
    async def list_configs(
        self,
        *,
        admin_id: str | None = None,
        country: str | None = None,
        active_only: bool = False,
    ) -> Sequence[PaymentConfig]:
        ...

    async def get(self, config_id: str) -> PaymentConfig | None:
        ...

    async def find(self, country: str, payment_method: str) -> PaymentConfig | None:
        ...

    async def create(self, admin_id: str, fields: dict[str, Any]) -> PaymentConfig:
        ...

    async def update(self, config_id: str, fields: dict[str, Any]) -> PaymentConfig:
        ...

    async def delete(self, config_id: str) -> None:
        ...

    async def usage_count(self, config_id: str) -> int:
        ...

    async def active_countries(self) -> Sequence[str]:
        ...
