"""Role and menu permission management (admin only)."""
from __future__ import annotations

from typing import Any, NoReturn

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from freightdesk.core.security import get_current_admin
from freightdesk.interfaces.http.deps import get_db_session
from freightdesk.modules.accounts import User
from freightdesk.modules.roles import (
    MENU_STRUCTURE,
    Permission,
    Role,
    RoleAlreadyExistsError,
    RoleInput,
    RoleNotFoundError,
    RoleService,
    RoleValidationError,
    SystemRoleError,
)
from freightdesk.schemas import PermissionSchema, RoleCreate, RoleResponse, RoleUpdate, SuccessResponse

router = APIRouter()


def _to_permissions(items: list[PermissionSchema]) -> list[Permission]:
    return [
        Permission(
            menu_key=item.menu_key,
            menu_title=item.menu_title,
            parent_key=item.parent_key,
            can_view=item.can_view,
        )
        for item in items
    ]


def _role_to_response(role: Role) -> RoleResponse:
    return RoleResponse.model_validate(role)


def _raise_for(exc: Exception) -> NoReturn:
    if isinstance(exc, RoleNotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    if isinstance(exc, RoleAlreadyExistsError):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("", response_model=list[RoleResponse], summary="List roles")
async def list_roles(
    _: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> list[RoleResponse]:
    roles = await RoleService.with_session(db).list_roles()
    return [_role_to_response(role) for role in roles]


@router.post("", response_model=RoleResponse, status_code=status.HTTP_201_CREATED, summary="Create a role")
async def create_role(
    payload: RoleCreate,
    _: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> RoleResponse:
    try:
        role = await RoleService.with_session(db).create_role(
            RoleInput(
                name=payload.name,
                description=payload.description,
                permissions=_to_permissions(payload.permissions),
            )
        )
    except (RoleAlreadyExistsError, RoleValidationError) as exc:
        _raise_for(exc)
    return _role_to_response(role)


@router.get("/menu-structure", summary="Menu tree that permissions refer to")
async def menu_structure(_: User = Depends(get_current_admin)) -> list[dict[str, Any]]:
    return MENU_STRUCTURE


@router.post("/seed-defaults", response_model=list[RoleResponse], summary="Create or reset the built-in roles")
async def seed_defaults(
    _: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> list[RoleResponse]:
    roles = await RoleService.with_session(db).seed_defaults()
    return [_role_to_response(role) for role in roles]


@router.get("/{role_id}", response_model=RoleResponse, summary="Role detail")
async def get_role(
    role_id: str = Path(..., description="Role id"),
    _: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> RoleResponse:
    try:
        role = await RoleService.with_session(db).get_role(role_id)
    except RoleNotFoundError as exc:
        _raise_for(exc)
    return _role_to_response(role)


@router.put("/{role_id}", response_model=RoleResponse, summary="Update a role and replace its permissions")
async def update_role(
    payload: RoleUpdate,
    role_id: str = Path(..., description="Role id"),
    _: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> RoleResponse:
    try:
        role = await RoleService.with_session(db).update_role(
            role_id,
            RoleInput(
                name=payload.name or "",
                description=payload.description,
                permissions=_to_permissions(payload.permissions or []),
            ),
            replace_permissions=payload.permissions is not None,
        )
    except (RoleNotFoundError, RoleAlreadyExistsError, RoleValidationError, SystemRoleError) as exc:
        _raise_for(exc)
    return _role_to_response(role)


@router.delete("/{role_id}", response_model=SuccessResponse, summary="Delete a custom role")
async def delete_role(
    role_id: str = Path(..., description="Role id"),
    _: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    try:
        await RoleService.with_session(db).delete_role(role_id)
    except (RoleNotFoundError, SystemRoleError) as exc:
        _raise_for(exc)
    return SuccessResponse(message="Role deleted successfully")
