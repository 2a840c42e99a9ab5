"""Balance summary and the transaction ledger."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from freightdesk.core.security import get_current_user
from freightdesk.interfaces.http.deps import get_db_session
from freightdesk.modules.accounts import AccountService, User
from freightdesk.modules.balances import (
    DEFAULT_DATE_RANGE,
    BalanceService,
    BalanceSnapshot,
    TransactionFilter,
    TransactionPermissionError,
    TransactionRecord,
    TransactionValidationError,
)
from freightdesk.modules.pricing import to_cents
from freightdesk.schemas import (
    BalanceSummary,
    TransactionCreate,
    TransactionCreateResponse,
    TransactionListResponse,
    TransactionResponse,
    money,
)

router = APIRouter()


def balance_to_summary(balance: BalanceSnapshot) -> BalanceSummary:
    return BalanceSummary(
        current_balance=money(balance.current_balance_cents),
        pending_balance=money(balance.pending_balance_cents),
        available_balance=money(balance.available_balance_cents),
        credit_limit=money(balance.credit_limit_cents),
        currency=balance.currency,
        updated_at=balance.updated_at,
    )


def _transaction_to_response(record: TransactionRecord) -> TransactionResponse:
    return TransactionResponse(
        id=record.id,
        transaction_id=record.transaction_id,
        user_id=record.user_id,
        order_id=record.order_id,
        order_number=record.order_number,
        order_account=record.order_account,
        company_name=record.company_name,
        user_email=record.user_email,
        transaction_type=record.transaction_type,
        amount=money(record.amount_cents),
        base_amount=money(record.base_amount_cents),
        currency=record.currency,
        description=record.description,
        payment_method=record.payment_method,
        reference_id=record.reference_id,
        status=record.status,
        is_supervisor_transaction=record.is_supervisor_transaction,
        created_at=record.created_at,
    )


@router.get("", response_model=BalanceSummary, summary="Current user's balance")
async def read_balance(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> BalanceSummary:
    balance = await BalanceService.with_session(db).ensure_balance(user.id)
    return balance_to_summary(balance)


@router.get("/transactions", response_model=TransactionListResponse, summary="Ledger entries visible to the caller")
async def list_transactions(
    search: Optional[str] = Query(None),
    transaction_type: Optional[str] = Query(None, alias="type"),
    date_range: str = Query(DEFAULT_DATE_RANGE, alias="range"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    user_id: Optional[str] = Query(None, description="Admin only: show one user's ledger"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> TransactionListResponse:
    if user_id and not user.is_admin():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")

    service = BalanceService.with_session(db)
    filters = TransactionFilter(
        search=search,
        transaction_type=transaction_type,
        date_range=date_range,
        limit=limit,
        offset=offset,
    )
    try:
        records, total = await service.list_transactions(user, filters, user_id=user_id)
    except TransactionValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    balance = await service.ensure_balance(user_id or user.id)
    return TransactionListResponse(
        transactions=[_transaction_to_response(record) for record in records],
        total=total,
        balance=balance_to_summary(balance),
    )


@router.post(
    "/transactions",
    response_model=TransactionCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a manual transaction",
)
async def create_transaction(
    payload: TransactionCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> TransactionCreateResponse:
    supervisor = None
    if payload.create_dual_transaction:
        supervisor = await AccountService.with_session(db).get_supervisor()
    try:
        records = await BalanceService.with_session(db).record_manual(
            user,
            amount_cents=to_cents(payload.amount),
            transaction_type=payload.transaction_type,
            description=payload.description,
            payment_method=payload.payment_method,
            reference_id=payload.reference_id,
            order_id=payload.order_id,
            order_number=payload.order_number,
            create_dual_transaction=payload.create_dual_transaction,
            supervisor=supervisor,
            base_amount_cents=to_cents(payload.base_amount) if payload.base_amount is not None else None,
        )
    except TransactionPermissionError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    except TransactionValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return TransactionCreateResponse(transactions=[_transaction_to_response(record) for record in records])
