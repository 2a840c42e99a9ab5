"""Saved address book use cases."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from freightdesk.infrastructure.database.repositories.address_repository import SqlAddressRepository
from freightdesk.modules.accounts.models import User

from .exceptions import AddressNotFoundError, AddressValidationError
from .models import ADDRESS_TYPES, CLASSIFICATIONS, REQUIRED_FIELDS, Address
from .repository import AddressRepository

logger = logging.getLogger(__name__)

_ACCESS_DENIED = "Address not found or access denied"


def _clean(fields: dict[str, Any]) -> dict[str, Any]:
    cleaned = {}
    for key, value in fields.items():
        cleaned[key] = value.strip() if isinstance(value, str) else value
    return cleaned


def _check_enums(fields: dict[str, Any]) -> None:
    address_type = fields.get("address_type")
    if address_type is not None and address_type not in ADDRESS_TYPES:
        raise AddressValidationError("Invalid address type. Must be origin, destination, or both")
    classification = fields.get("address_classification")
    if classification is not None and classification not in CLASSIFICATIONS:
        raise AddressValidationError("Invalid address classification")
    country = fields.get("country")
    if country is not None:
        fields["country"] = country.upper()


class AddressService:
    def __init__(self, repository: AddressRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "AddressService":
        return cls(SqlAddressRepository(session))

    async def list_addresses(self, user: User, address_type: Optional[str] = None) -> Sequence[Address]:
        if address_type is not None and address_type not in ADDRESS_TYPES:
            raise AddressValidationError("Invalid address type. Must be origin, destination, or both")
        return await self._repository.list_for_user(user.id, address_type)

    async def get_address(self, user: User, address_id: str) -> Address:
        address = await self._repository.get(address_id)
        if address is None or (address.user_id != user.id and not user.is_admin()):
            raise AddressNotFoundError(_ACCESS_DENIED)
        return address

    async def create_address(self, user: User, fields: dict[str, Any]) -> Address:
        fields = _clean(fields)
        missing = [name for name in REQUIRED_FIELDS if not fields.get(name)]
        if missing:
            raise AddressValidationError(f"Missing required fields: {', '.join(missing)}")
        fields.setdefault("address_classification", "Unknown")
        if not fields.get("address_classification"):
            fields["address_classification"] = "Unknown"
        _check_enums(fields)
        if fields.get("is_default"):
            await self._repository.clear_default(user.id, fields["address_type"])
        address = await self._repository.create(user.id, fields)
        logger.info("User %s saved address %s", user.id, address.id)
        return address

    async def update_address(self, user: User, address_id: str, fields: dict[str, Any]) -> Address:
        current = await self.get_address(user, address_id)
        fields = _clean(fields)
        emptied = [name for name in REQUIRED_FIELDS if name in fields and not fields[name]]
        if emptied:
            raise AddressValidationError(f"Missing required fields: {', '.join(emptied)}")
        _check_enums(fields)
        if fields.get("is_default"):
            await self._repository.clear_default(current.user_id, fields.get("address_type", current.address_type))
        return await self._repository.update(address_id, fields)

    async def delete_address(self, user: User, address_id: str) -> None:
        await self.get_address(user, address_id)
        await self._repository.delete(address_id)
        logger.info("User %s deleted address %s", user.id, address_id)
