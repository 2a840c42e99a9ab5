"""SQLAlchemy implementation of the address repository."""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from freightdesk.db.models import Address as AddressModel
from freightdesk.modules.addresses.exceptions import AddressNotFoundError
from freightdesk.modules.addresses.models import Address
from freightdesk.modules.addresses.repository import AddressRepository

_WRITABLE = frozenset(
    {
        "address_name",
        "contact_name",
        "contact_phone",
        "contact_email",
        "company_name",
        "address_line1",
        "address_line2",
        "city",
        "state",
        "postal_code",
        "country",
        "address_type",
        "address_classification",
        "is_default",
        "notes",
    }
)


class SqlAddressRepository(AddressRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_for_user(self, user_id: str, address_type: str | None = None) -> Sequence[Address]:
        stmt = select(AddressModel).where(AddressModel.user_id == user_id)
        if address_type in {"origin", "destination"}:
            stmt = stmt.where(AddressModel.address_type.in_([address_type, "both"]))
        elif address_type == "both":
            stmt = stmt.where(AddressModel.address_type == "both")
        stmt = stmt.order_by(AddressModel.is_default.desc(), AddressModel.address_name)
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def get(self, address_id: str) -> Address | None:
        model = await self._session.get(AddressModel, address_id)
        return self._to_domain(model) if model else None

    async def create(self, user_id: str, fields: dict[str, Any]) -> Address:
        model = AddressModel(user_id=user_id, **{k: v for k, v in fields.items() if k in _WRITABLE})
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def update(self, address_id: str, fields: dict[str, Any]) -> Address:
        model = await self._session.get(AddressModel, address_id)
        if model is None:
            raise AddressNotFoundError("Address not found or access denied")
        for key, value in fields.items():
            if key in _WRITABLE:
                setattr(model, key, value)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def delete(self, address_id: str) -> None:
        await self._session.execute(delete(AddressModel).where(AddressModel.id == address_id))

    async def clear_default(self, user_id: str, address_type: str) -> None:
        stmt = (
            update(AddressModel)
            .where(AddressModel.user_id == user_id, AddressModel.address_type == address_type)
            .values(is_default=False)
            .execution_options(synchronize_session="fetch")
        )
        await self._session.execute(stmt)

    @staticmethod
    def _to_domain(model: AddressModel) -> Address:
        return Address(
            id=model.id,
            user_id=model.user_id,
            address_name=model.address_name,
            contact_name=model.contact_name,
            contact_phone=model.contact_phone,
            contact_email=model.contact_email,
            address_line1=model.address_line1,
            city=model.city,
            postal_code=model.postal_code,
            country=model.country,
            address_type=model.address_type,
            address_classification=model.address_classification or "Unknown",
            company_name=model.company_name,
            address_line2=model.address_line2,
            state=model.state,
            is_default=bool(model.is_default),
            notes=model.notes,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
