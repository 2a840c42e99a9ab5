"""Admin maintenance of top-up payment instructions."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from freightdesk.core.security import get_current_admin
from freightdesk.interfaces.http.deps import get_db_session
from freightdesk.modules.accounts import User
from freightdesk.modules.payments import (
    PaymentConfigConflictError,
    PaymentConfigNotFoundError,
    PaymentConfigService,
    PaymentConfigValidationError,
)
from freightdesk.schemas import PaymentConfigFields, PaymentConfigResponse, SuccessResponse

router = APIRouter()


@router.get("", response_model=list[PaymentConfigResponse], summary="Payment configurations owned by the admin")
async def list_payment_configs(
    country: Optional[str] = Query(None),
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> list[PaymentConfigResponse]:
    configs = await PaymentConfigService.with_session(db).list_for_admin(admin, country)
    return [PaymentConfigResponse.model_validate(config) for config in configs]


@router.post(
    "",
    response_model=PaymentConfigResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a payment configuration",
)
async def create_payment_config(
    payload: PaymentConfigFields,
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> PaymentConfigResponse:
    try:
        config = await PaymentConfigService.with_session(db).create(admin, payload.model_dump(exclude_none=True))
    except PaymentConfigValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except PaymentConfigConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return PaymentConfigResponse.model_validate(config)


@router.put("/{config_id}", response_model=PaymentConfigResponse, summary="Update a payment configuration")
async def update_payment_config(
    payload: PaymentConfigFields,
    config_id: str = Path(..., description="Payment configuration id"),
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> PaymentConfigResponse:
    try:
        config = await PaymentConfigService.with_session(db).update(
            admin, config_id, payload.model_dump(exclude_unset=True)
        )
    except PaymentConfigNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except PaymentConfigValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except PaymentConfigConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return PaymentConfigResponse.model_validate(config)


@router.delete("/{config_id}", response_model=SuccessResponse, summary="Delete an unused payment configuration")
async def delete_payment_config(
    config_id: str = Path(..., description="Payment configuration id"),
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    try:
        await PaymentConfigService.with_session(db).delete(admin, config_id)
    except PaymentConfigNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except PaymentConfigConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return SuccessResponse(message="Payment configuration deleted successfully")
