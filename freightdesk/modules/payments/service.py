"""Payment configuration management for administrators and the top-up form."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from freightdesk.infrastructure.database.repositories.payment_config_repository import (
    SqlPaymentConfigRepository,
)
from freightdesk.modules.accounts.models import User

from .exceptions import (
    PaymentConfigConflictError,
    PaymentConfigNotFoundError,
    PaymentConfigValidationError,
)
from .models import REQUIRED_FIELDS, Country, PaymentConfig, country_name
from .repository import PaymentConfigRepository

logger = logging.getLogger(__name__)


def _normalize(fields: dict[str, Any]) -> dict[str, Any]:
    normalized = {k: (v.strip() if isinstance(v, str) else v) for k, v in fields.items()}
    if normalized.get("country"):
        normalized["country"] = normalized["country"].upper()
    return normalized


class PaymentConfigService:
    def __init__(self, repository: PaymentConfigRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "PaymentConfigService":
        return cls(SqlPaymentConfigRepository(session))

    async def list_for_admin(self, admin: User, country: Optional[str] = None) -> Sequence[PaymentConfig]:
        return await self._repository.list_configs(admin_id=admin.id, country=country.upper() if country else None)

    async def list_active(self, country: Optional[str] = None) -> Sequence[PaymentConfig]:
        return await self._repository.list_configs(country=country.upper() if country else None, active_only=True)

    async def active_countries(self) -> list[Country]:
        return [Country(code=code, name=country_name(code)) for code in await self._repository.active_countries()]

    async def get(self, config_id: str) -> PaymentConfig:
        config = await self._repository.get(config_id)
        if config is None:
            raise PaymentConfigNotFoundError("Payment configuration not found")
        return config

    async def get_owned(self, admin: User, config_id: str) -> PaymentConfig:
        config = await self.get(config_id)
        if config.admin_id != admin.id:
            raise PaymentConfigNotFoundError("Payment configuration not found")
        return config

    async def create(self, admin: User, fields: dict[str, Any]) -> PaymentConfig:
        fields = _normalize(fields)
        missing = [name for name in REQUIRED_FIELDS if not fields.get(name)]
        if missing:
            raise PaymentConfigValidationError(f"Missing required fields: {', '.join(missing)}")
        if await self._repository.find(fields["country"], fields["payment_method"]) is not None:
            raise PaymentConfigConflictError("Payment configuration for this country and method already exists")
        config = await self._repository.create(admin.id, fields)
        logger.info("Admin %s added payment config %s/%s", admin.id, config.country, config.payment_method)
        return config

    async def update(self, admin: User, config_id: str, fields: dict[str, Any]) -> PaymentConfig:
        current = await self.get_owned(admin, config_id)
        fields = _normalize(fields)
        emptied = [name for name in REQUIRED_FIELDS if name in fields and not fields[name]]
        if emptied:
            raise PaymentConfigValidationError(f"Missing required fields: {', '.join(emptied)}")
        country = fields.get("country", current.country)
        method = fields.get("payment_method", current.payment_method)
        existing = await self._repository.find(country, method)
        if existing is not None and existing.id != config_id:
            raise PaymentConfigConflictError("Payment configuration for this country and method already exists")
        return await self._repository.update(config_id, fields)

    async def delete(self, admin: User, config_id: str) -> None:
        await self.get_owned(admin, config_id)
        if await self._repository.usage_count(config_id) > 0:
            raise PaymentConfigConflictError(
                "Cannot delete: This payment configuration is being used by existing top-up requests"
            )
        await self._repository.delete(config_id)
        logger.info("Admin %s deleted payment config %s", admin.id, config_id)
