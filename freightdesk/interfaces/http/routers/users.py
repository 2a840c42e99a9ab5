"""The signed-in user's own profile."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from freightdesk.core.security import get_current_user
from freightdesk.interfaces.http.deps import get_db_session
from freightdesk.modules.accounts import (
    AccountAlreadyExistsError,
    AccountService,
    AccountValidationError,
    InvalidCredentialsError,
    User,
    UserUpdateInput,
)
from freightdesk.modules.roles import RoleService
from freightdesk.schemas import (
    PasswordChangeRequest,
    PermissionsResponse,
    ProfileUpdate,
    SuccessResponse,
    UserResponse,
)

router = APIRouter()


@router.get("/me", response_model=UserResponse, summary="Current user")
async def read_me(user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.model_validate(user)


@router.patch("/me", response_model=UserResponse, summary="Update own profile")
async def update_me(
    payload: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    changes = {name: getattr(payload, name) for name in payload.model_fields_set}
    try:
        updated = await AccountService.with_session(db).update_user(user.id, UserUpdateInput(**changes))
    except AccountValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except AccountAlreadyExistsError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return UserResponse.model_validate(updated)


@router.post("/me/password", response_model=SuccessResponse, summary="Change own password")
async def change_password(
    payload: PasswordChangeRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    try:
        await AccountService.with_session(db).change_password(
            user.id, payload.current_password, payload.new_password
        )
    except (InvalidCredentialsError, AccountValidationError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return SuccessResponse(message="Password updated successfully")


@router.get("/permissions", response_model=PermissionsResponse, summary="Menu keys visible to the current user")
async def read_permissions(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> PermissionsResponse:
    access = await RoleService.with_session(db).access_for(user)
    return PermissionsResponse(permissions=access.permissions, roles=access.roles, user_type=access.user_type)
