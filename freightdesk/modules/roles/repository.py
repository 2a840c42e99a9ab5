"""Repository protocol for roles."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import Permission, Role


class RoleRepository(Protocol):
    async def list_roles(self) -> Sequence[Role]:
        ...

    async def get_role(self, role_id: str) -> Role | None:
        ...

    async def get_by_name(self, name: str) -> Role | None:
        ...

    async def create_role(self, *, name: str, description: str | None, permissions: list[Permission]) -> Role:
        ...

    async def update_role(
        self,
        role_id: str,
        *,
        name: str,
        description: str | None,
        permissions: list[Permission] | None,
    ) -> Role:
        ...

    async def delete_role(self, role_id: str) -> None:
        ...

    async def replace_permissions(self, role_id: str, permissions: list[Permission]) -> None:
        ...

    async def set_user_role(self, user_id: str, role_id: str | None) -> None:
        ...

    async def roles_for_user(self, user_id: str) -> Sequence[Role]:
        ...

    async def role_ids_for_users(self, user_ids: Sequence[str]) -> dict[str, str]:
        ...
