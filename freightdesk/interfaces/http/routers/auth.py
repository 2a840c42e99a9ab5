"""Registration, login and password reset."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from freightdesk.core.security import create_access_token, create_reset_token, decode_reset_token
from freightdesk.interfaces.http.deps import get_db_session
from freightdesk.modules.accounts import (
    AccountAlreadyExistsError,
    AccountInactiveError,
    AccountNotFoundError,
    AccountService,
    AccountValidationError,
    InvalidCredentialsError,
    UserCreateInput,
)
from freightdesk.modules.roles import CUSTOMER_ROLE, RoleService
from freightdesk.schemas import (
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    SuccessResponse,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

FORGOT_PASSWORD_MESSAGE = "If an account with that email exists, a password reset link has been sent"


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a customer account",
)
async def register(payload: RegisterRequest, db: AsyncSession = Depends(get_db_session)) -> RegisterResponse:
    service = AccountService.with_session(db)
    try:
        user = await service.create_user(
            UserCreateInput(
                email=payload.email,
                password=payload.password,
                full_name=payload.full_name,
                company_name=payload.company_name,
                phone=payload.phone,
            )
        )
    except AccountAlreadyExistsError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except AccountValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if not await RoleService.with_session(db).assign_role_by_name(user.id, CUSTOMER_ROLE):
        logger.warning("Role %s missing; %s registered without a role", CUSTOMER_ROLE, user.email)
    return RegisterResponse(user=UserResponse.model_validate(user))


@router.post("/login", response_model=LoginResponse, summary="Sign in and obtain a bearer token")
async def login(payload: LoginRequest, db: AsyncSession = Depends(get_db_session)) -> LoginResponse:
    service = AccountService.with_session(db)
    try:
        user = await service.authenticate(payload.email, payload.password)
    except (InvalidCredentialsError, AccountInactiveError) as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc

    access = await RoleService.with_session(db).access_for(user)
    return LoginResponse(
        access_token=create_access_token(user.id, user.user_type),
        user=UserResponse.model_validate(user),
        roles=access.roles,
        permissions=access.permissions,
    )


@router.post("/forgot-password", response_model=SuccessResponse, summary="Request a password reset")
async def forgot_password(
    payload: ForgotPasswordRequest,
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    user = await AccountService.with_session(db).get_by_email(payload.email)
    if user is not None and user.is_active:
        # no mail transport; operators hand the token over out of band
        logger.info("Password reset token for %s: %s", user.email, create_reset_token(user.id))
    return SuccessResponse(message=FORGOT_PASSWORD_MESSAGE)


@router.post("/reset-password", response_model=SuccessResponse, summary="Set a new password with a reset token")
async def reset_password(
    payload: ResetPasswordRequest,
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    user_id = decode_reset_token(payload.token)
    try:
        await AccountService.with_session(db).reset_password(user_id, payload.password)
    except AccountValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except AccountNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid or expired reset token") from exc
    return SuccessResponse(message="Password has been reset successfully")
