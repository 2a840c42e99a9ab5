"""Admin review of top-ups and system maintenance."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from freightdesk.core.security import get_current_admin
from freightdesk.infrastructure.carriers import CarrierClient
from freightdesk.interfaces.http.deps import get_carrier, get_db_session
from freightdesk.interfaces.http.routers.topups import topup_to_response
from freightdesk.modules.accounts import AccountNotFoundError, AccountService, User
from freightdesk.modules.admin import SystemService
from freightdesk.modules.balances import BalanceService
from freightdesk.modules.pricing import to_cents
from freightdesk.modules.topups import (
    TopupNotFoundError,
    TopupService,
    TopupStateError,
    TopupValidationError,
)
from freightdesk.schemas import (
    ClearTopUpsResponse,
    ResetSystemResponse,
    TopUpListResponse,
    TopUpResponse,
    TopUpReviewRequest,
)

router = APIRouter()


@router.get("/top-up/review", response_model=TopUpListResponse, summary="Top-up requests awaiting or past review")
async def list_topups_for_review(
    status_filter: Optional[str] = Query(None, alias="status"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    _: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> TopUpListResponse:
    try:
        requests = await TopupService.with_session(db).list_for_review(status_filter, limit=limit, offset=offset)
    except TopupValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return TopUpListResponse(requests=[topup_to_response(request) for request in requests])


@router.post("/top-up/review", response_model=TopUpResponse, summary="Approve or reject a top-up request")
async def review_topup(
    payload: TopUpReviewRequest,
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> TopUpResponse:
    try:
        request = await TopupService.with_session(db).review(
            admin,
            payload.request_id,
            action=payload.action,
            accounts=AccountService.with_session(db),
            balances=BalanceService.with_session(db),
            notes=payload.notes,
            amount_cents=to_cents(payload.amount) if payload.amount is not None else None,
        )
    except (TopupNotFoundError, AccountNotFoundError) as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except (TopupValidationError, TopupStateError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return topup_to_response(request)


@router.delete("/clear-topup-requests", response_model=ClearTopUpsResponse, summary="Delete every top-up request")
async def clear_topup_requests(
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
    carrier: CarrierClient = Depends(get_carrier),
) -> ClearTopUpsResponse:
    deleted = await SystemService.with_session(db, carrier).clear_topup_requests(admin)
    return ClearTopUpsResponse(deleted_count=deleted)


@router.post("/reset-system", response_model=ResetSystemResponse, summary="Wipe activity and reset balances")
async def reset_system(
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
    carrier: CarrierClient = Depends(get_carrier),
) -> ResetSystemResponse:
    report = await SystemService.with_session(db, carrier).reset_system(admin)
    return ResetSystemResponse(operations=report.operations, reset_by=report.reset_by, reset_at=report.reset_at)
