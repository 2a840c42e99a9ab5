"""Role management and menu permission resolution."""

from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from freightdesk.infrastructure.database.repositories.role_repository import SqlRoleRepository
from freightdesk.modules.accounts.models import User

from .defaults import (
    DEFAULT_ROLE_DESCRIPTIONS,
    DEFAULT_ROLE_PERMISSIONS,
    SYSTEM_ROLES,
    menu_keys,
)
from .exceptions import RoleAlreadyExistsError, RoleNotFoundError, RoleValidationError, SystemRoleError
from .models import Permission, Role, RoleInput, UserAccess
from .repository import RoleRepository

logger = logging.getLogger(__name__)


def _check_menu_keys(permissions: list[Permission]) -> None:
    unknown = sorted({p.menu_key for p in permissions} - menu_keys())
    if unknown:
        raise RoleValidationError(f"Unknown menu keys: {', '.join(unknown)}")


class RoleService:
    def __init__(self, repository: RoleRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "RoleService":
        return cls(SqlRoleRepository(session))

    async def list_roles(self) -> Sequence[Role]:
        return await self._repository.list_roles()

    async def get_role(self, role_id: str) -> Role:
        role = await self._repository.get_role(role_id)
        if role is None:
            raise RoleNotFoundError("Role not found")
        return role

    async def create_role(self, payload: RoleInput) -> Role:
        name = payload.name.strip()
        if not name:
            raise RoleValidationError("Role name is required")
        if await self._repository.get_by_name(name) is not None:
            raise RoleAlreadyExistsError("Role with this name already exists")
        _check_menu_keys(payload.permissions)
        role = await self._repository.create_role(
            name=name,
            description=payload.description,
            permissions=payload.permissions,
        )
        logger.info("Created role %s with %d permissions", role.name, len(role.permissions))
        return role

    async def update_role(self, role_id: str, payload: RoleInput, *, replace_permissions: bool = True) -> Role:
        current = await self.get_role(role_id)
        name = payload.name.strip() or current.name
        if name != current.name:
            if current.name in SYSTEM_ROLES:
                raise SystemRoleError("Cannot rename system roles")
            existing = await self._repository.get_by_name(name)
            if existing is not None and existing.id != role_id:
                raise RoleAlreadyExistsError("Role with this name already exists")
        if replace_permissions:
            _check_menu_keys(payload.permissions)
        return await self._repository.update_role(
            role_id,
            name=name,
            description=payload.description if payload.description is not None else current.description,
            permissions=payload.permissions if replace_permissions else None,
        )

    async def delete_role(self, role_id: str) -> None:
        role = await self.get_role(role_id)
        if role.name in SYSTEM_ROLES:
            raise SystemRoleError("Cannot delete system roles")
        await self._repository.delete_role(role_id)
        logger.info("Deleted role %s", role.name)

    async def seed_defaults(self) -> list[Role]:
        """Create missing built-in roles and reset their permissions to the defaults."""
        seeded: list[Role] = []
        for name, permissions in DEFAULT_ROLE_PERMISSIONS.items():
            role = await self._repository.get_by_name(name)
            if role is None:
                role = await self._repository.create_role(
                    name=name,
                    description=DEFAULT_ROLE_DESCRIPTIONS.get(name),
                    permissions=list(permissions),
                )
            else:
                await self._repository.replace_permissions(role.id, list(permissions))
                role = await self.get_role(role.id)
            seeded.append(role)
        logger.info("Seeded default roles: %s", ", ".join(r.name for r in seeded))
        return seeded

    async def assign_role(self, user_id: str, role_id: str | None) -> None:
        if role_id is not None:
            await self.get_role(role_id)
        await self._repository.set_user_role(user_id, role_id)

    async def assign_role_by_name(self, user_id: str, name: str) -> bool:
        role = await self._repository.get_by_name(name)
        if role is None:
            return False
        await self._repository.set_user_role(user_id, role.id)
        return True

    async def role_ids_for_users(self, user_ids: Sequence[str]) -> dict[str, str]:
        return await self._repository.role_ids_for_users(user_ids)

    async def access_for(self, user: User) -> UserAccess:
        roles = await self._repository.roles_for_user(user.id)
        keys: list[str] = []
        for role in roles:
            for permission in role.permissions:
                if permission.can_view and permission.menu_key not in keys:
                    keys.append(permission.menu_key)
        return UserAccess(
            user_type=user.user_type,
            roles=[role.name for role in roles],
            permissions=keys,
        )
