"""SQLAlchemy implementation of the role repository."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from freightdesk.db.models import (
    Role as RoleModel,
    RolePermission as RolePermissionModel,
    UserRole as UserRoleModel,
)
from freightdesk.modules.roles.exceptions import RoleNotFoundError
from freightdesk.modules.roles.models import Permission, Role
from freightdesk.modules.roles.repository import RoleRepository


class SqlRoleRepository(RoleRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _load(self, role_id: str) -> RoleModel | None:
        stmt = (
            select(RoleModel)
            .where(RoleModel.id == role_id)
            .options(selectinload(RoleModel.permissions))
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _user_counts(self) -> dict[str, int]:
        stmt = select(UserRoleModel.role_id, func.count(UserRoleModel.id)).group_by(UserRoleModel.role_id)
        result = await self._session.execute(stmt)
        return {role_id: count for role_id, count in result.all()}

    async def list_roles(self) -> Sequence[Role]:
        stmt = (
            select(RoleModel)
            .options(selectinload(RoleModel.permissions))
            .order_by(RoleModel.name)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        counts = await self._user_counts()
        return [self._to_domain(model, counts.get(model.id, 0)) for model in result.scalars().all()]

    async def get_role(self, role_id: str) -> Role | None:
        model = await self._load(role_id)
        if model is None:
            return None
        counts = await self._user_counts()
        return self._to_domain(model, counts.get(model.id, 0))

    async def get_by_name(self, name: str) -> Role | None:
        stmt = select(RoleModel.id).where(RoleModel.name == name)
        role_id = (await self._session.execute(stmt)).scalar_one_or_none()
        if role_id is None:
            return None
        return await self.get_role(role_id)

    async def create_role(self, *, name: str, description: str | None, permissions: list[Permission]) -> Role:
        model = RoleModel(name=name, description=description)
        self._session.add(model)
        await self._session.flush()
        await self.replace_permissions(model.id, permissions)
        role = await self.get_role(model.id)
        assert role is not None
        return role

    async def update_role(
        self,
        role_id: str,
        *,
        name: str,
        description: str | None,
        permissions: list[Permission] | None,
    ) -> Role:
        model = await self._session.get(RoleModel, role_id)
        if model is None:
            raise RoleNotFoundError("Role not found")
        model.name = name
        model.description = description
        await self._session.flush()
        if permissions is not None:
            await self.replace_permissions(role_id, permissions)
        role = await self.get_role(role_id)
        assert role is not None
        return role

    async def delete_role(self, role_id: str) -> None:
        await self._session.execute(delete(UserRoleModel).where(UserRoleModel.role_id == role_id))
        await self._session.execute(delete(RolePermissionModel).where(RolePermissionModel.role_id == role_id))
        await self._session.execute(delete(RoleModel).where(RoleModel.id == role_id))

    async def replace_permissions(self, role_id: str, permissions: list[Permission]) -> None:
        await self._session.execute(delete(RolePermissionModel).where(RolePermissionModel.role_id == role_id))
        seen: set[str] = set()
        for permission in permissions:
            if permission.menu_key in seen:
                continue
            seen.add(permission.menu_key)
            self._session.add(
                RolePermissionModel(
                    role_id=role_id,
                    menu_key=permission.menu_key,
                    menu_title=permission.menu_title,
                    parent_key=permission.parent_key,
                    can_view=permission.can_view,
                )
            )
        await self._session.flush()

    async def set_user_role(self, user_id: str, role_id: str | None) -> None:
        await self._session.execute(delete(UserRoleModel).where(UserRoleModel.user_id == user_id))
        if role_id is not None:
            self._session.add(UserRoleModel(user_id=user_id, role_id=role_id))
        await self._session.flush()

    async def roles_for_user(self, user_id: str) -> Sequence[Role]:
        stmt = (
            select(RoleModel)
            .join(UserRoleModel, UserRoleModel.role_id == RoleModel.id)
            .where(UserRoleModel.user_id == user_id)
            .options(selectinload(RoleModel.permissions))
            .order_by(RoleModel.name)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def role_ids_for_users(self, user_ids: Sequence[str]) -> dict[str, str]:
        if not user_ids:
            return {}
        stmt = select(UserRoleModel.user_id, UserRoleModel.role_id).where(UserRoleModel.user_id.in_(list(user_ids)))
        result = await self._session.execute(stmt)
        return {user_id: role_id for user_id, role_id in result.all()}

    @staticmethod
    def _to_domain(model: RoleModel, user_count: int = 0) -> Role:
        return Role(
            id=model.id,
            name=model.name,
            description=model.description,
            permissions=[
                Permission(
                    menu_key=p.menu_key,
                    menu_title=p.menu_title,
                    parent_key=p.parent_key,
                    can_view=bool(p.can_view),
                )
                for p in model.permissions
            ],
            user_count=user_count,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
