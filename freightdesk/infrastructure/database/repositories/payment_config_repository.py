"""SQLAlchemy implementation of the payment configuration repository."""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from freightdesk.db.models import PaymentConfig as PaymentConfigModel, TopUpRequest as TopUpRequestModel
from freightdesk.modules.payments.exceptions import PaymentConfigNotFoundError
from freightdesk.modules.payments.models import PaymentConfig
from freightdesk.modules.payments.repository import PaymentConfigRepository

_WRITABLE = frozenset(
    {
        "country",
        "payment_method",
        "account_name",
        "account_number",
        "bank_name",
        "routing_number",
        "swift_code",
        "additional_info",
        "is_active",
    }
)


class SqlPaymentConfigRepository(PaymentConfigRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_configs(
        self,
        *,
        admin_id: str | None = None,
        country: str | None = None,
        active_only: bool = False,
    ) -> Sequence[PaymentConfig]:
        stmt = select(PaymentConfigModel)
        if admin_id is not None:
            stmt = stmt.where(PaymentConfigModel.admin_id == admin_id)
        if country:
            stmt = stmt.where(PaymentConfigModel.country == country)
        if active_only:
            stmt = stmt.where(PaymentConfigModel.is_active.is_(True))
        stmt = stmt.order_by(PaymentConfigModel.country, PaymentConfigModel.payment_method)
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def get(self, config_id: str) -> PaymentConfig | None:
        model = await self._session.get(PaymentConfigModel, config_id)
        return self._to_domain(model) if model else None

    async def find(self, country: str, payment_method: str) -> PaymentConfig | None:
        stmt = select(PaymentConfigModel).where(
            PaymentConfigModel.country == country,
            PaymentConfigModel.payment_method == payment_method,
        )
        result = await self._session.execute(stmt)
        model = result.scalars().first()
        return self._to_domain(model) if model else None

    async def create(self, admin_id: str, fields: dict[str, Any]) -> PaymentConfig:
        values = {k: v for k, v in fields.items() if k in _WRITABLE and v is not None}
        model = PaymentConfigModel(admin_id=admin_id, **values)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def update(self, config_id: str, fields: dict[str, Any]) -> PaymentConfig:
        model = await self._session.get(PaymentConfigModel, config_id)
        if model is None:
            raise PaymentConfigNotFoundError("Payment configuration not found")
        for key, value in fields.items():
            if key in _WRITABLE:
                setattr(model, key, value)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def delete(self, config_id: str) -> None:
        await self._session.execute(delete(PaymentConfigModel).where(PaymentConfigModel.id == config_id))

    async def usage_count(self, config_id: str) -> int:
        stmt = select(func.count(TopUpRequestModel.id)).where(TopUpRequestModel.payment_config_id == config_id)
        return int((await self._session.execute(stmt)).scalar_one())

    async def active_countries(self) -> Sequence[str]:
        stmt = (
            select(PaymentConfigModel.country)
            .where(PaymentConfigModel.is_active.is_(True))
            .distinct()
            .order_by(PaymentConfigModel.country)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    def _to_domain(model: PaymentConfigModel) -> PaymentConfig:
        return PaymentConfig(
            id=model.id,
            admin_id=model.admin_id,
            country=model.country,
            payment_method=model.payment_method,
            account_name=model.account_name,
            account_number=model.account_number,
            is_active=bool(model.is_active),
            bank_name=model.bank_name,
            routing_number=model.routing_number,
            swift_code=model.swift_code,
            additional_info=model.additional_info,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
