"""Customer top-up submission and history."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from freightdesk.core.security import get_current_user
from freightdesk.interfaces.http.deps import get_db_session
from freightdesk.modules.accounts import User
from freightdesk.modules.payments import PaymentConfigNotFoundError, PaymentConfigService
from freightdesk.modules.pricing import to_cents
from freightdesk.modules.topups import (
    TopupPermissionError,
    TopupRequest,
    TopupService,
    TopupValidationError,
)
from freightdesk.schemas import (
    CountryResponse,
    PaymentConfigResponse,
    TopUpListResponse,
    TopUpResponse,
    TopUpSubmitRequest,
    money,
)

router = APIRouter()


def topup_to_response(request: TopupRequest) -> TopUpResponse:
    return TopUpResponse(
        id=request.id,
        user_id=request.user_id,
        payment_config_id=request.payment_config_id,
        amount=money(request.amount_cents),
        approved_amount=money(request.approved_amount_cents),
        currency=request.currency,
        status=request.status,
        payment_reference=request.payment_reference,
        customer_notes=request.customer_notes,
        payment_details=request.payment_details,
        admin_notes=request.admin_notes,
        reviewed_by=request.reviewed_by,
        reviewed_at=request.reviewed_at,
        created_at=request.created_at,
        user_email=request.user_email,
        user_name=request.user_name,
        company_name=request.company_name,
        payment_method=request.payment_method,
        payment_country=request.payment_country,
    )


@router.get("/payment-configs", response_model=list[PaymentConfigResponse], summary="Active payment instructions")
async def active_payment_configs(
    country: Optional[str] = Query(None),
    _: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> list[PaymentConfigResponse]:
    configs = await PaymentConfigService.with_session(db).list_active(country)
    return [PaymentConfigResponse.model_validate(config) for config in configs]


@router.get("/countries", response_model=list[CountryResponse], summary="Countries with active payment instructions")
async def active_countries(
    _: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> list[CountryResponse]:
    countries = await PaymentConfigService.with_session(db).active_countries()
    return [CountryResponse.model_validate(country) for country in countries]


@router.post(
    "/submit",
    response_model=TopUpResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a top-up request for review",
)
async def submit_topup(
    payload: TopUpSubmitRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> TopUpResponse:
    try:
        config = await PaymentConfigService.with_session(db).get(payload.payment_config_id)
    except PaymentConfigNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or inactive payment configuration",
        ) from exc

    try:
        request = await TopupService.with_session(db).submit(
            user,
            config,
            amount_cents=to_cents(payload.amount),
            currency=payload.currency,
            payment_reference=payload.payment_reference,
            customer_notes=payload.customer_notes,
            payment_details=payload.payment_details,
        )
    except TopupPermissionError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    except TopupValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return topup_to_response(request)


@router.get("/history", response_model=TopUpListResponse, summary="The caller's top-up requests")
async def topup_history(
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> TopUpListResponse:
    requests = await TopupService.with_session(db).history(user, limit=limit, offset=offset)
    return TopUpListResponse(requests=[topup_to_response(request) for request in requests])
