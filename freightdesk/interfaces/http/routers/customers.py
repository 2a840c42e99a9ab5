"""Admin management of customer accounts."""
from __future__ import annotations

from typing import NoReturn, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from freightdesk.core.security import get_current_admin
from freightdesk.interfaces.http.deps import get_db_session
from freightdesk.interfaces.http.routers.balance import balance_to_summary
from freightdesk.modules.accounts import (
    UNSET,
    AccountAlreadyExistsError,
    AccountValidationError,
    User,
)
from freightdesk.modules.customers import (
    Customer,
    CustomerCreateInput,
    CustomerNotFoundError,
    CustomerService,
    CustomerUpdateInput,
    CustomerValidationError,
)
from freightdesk.modules.pricing import to_cents
from freightdesk.modules.roles import RoleNotFoundError
from freightdesk.schemas import CustomerCreate, CustomerResponse, CustomerUpdate, SuccessResponse, money

router = APIRouter()


def _customer_to_response(customer: Customer) -> CustomerResponse:
    user = customer.user
    return CustomerResponse(
        id=user.id,
        email=user.email,
        full_name=user.full_name,
        company_name=user.company_name,
        phone=user.phone,
        price_ratio=user.price_ratio,
        bonus_credit=money(user.bonus_credit_cents),
        is_active=user.is_active,
        role_id=customer.role_id,
        balance=balance_to_summary(customer.balance) if customer.balance else None,
        created_at=user.created_at,
        last_login_at=user.last_login_at,
    )


def _raise_for(exc: Exception) -> NoReturn:
    if isinstance(exc, (CustomerNotFoundError, RoleNotFoundError)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    if isinstance(exc, AccountAlreadyExistsError):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("", response_model=list[CustomerResponse], summary="List customers")
async def list_customers(
    is_active: Optional[bool] = Query(None),
    _: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> list[CustomerResponse]:
    customers = await CustomerService.with_session(db).list_customers(is_active=is_active)
    return [_customer_to_response(customer) for customer in customers]


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED, summary="Create a customer")
async def create_customer(
    payload: CustomerCreate,
    _: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> CustomerResponse:
    try:
        customer = await CustomerService.with_session(db).create_customer(
            CustomerCreateInput(
                email=payload.email,
                password=payload.password,
                full_name=payload.full_name,
                company_name=payload.company_name,
                phone=payload.phone,
                price_ratio=payload.price_ratio,
                bonus_credit_cents=to_cents(payload.bonus_credit),
                role_id=payload.role_id,
            )
        )
    except (AccountAlreadyExistsError, AccountValidationError, CustomerValidationError, RoleNotFoundError) as exc:
        _raise_for(exc)
    return _customer_to_response(customer)


@router.get("/{customer_id}", response_model=CustomerResponse, summary="Customer detail")
async def get_customer(
    customer_id: str = Path(..., description="Customer user id"),
    _: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> CustomerResponse:
    try:
        customer = await CustomerService.with_session(db).get_customer(customer_id)
    except CustomerNotFoundError as exc:
        _raise_for(exc)
    return _customer_to_response(customer)


@router.patch("/{customer_id}", response_model=CustomerResponse, summary="Update a customer")
async def update_customer(
    payload: CustomerUpdate,
    customer_id: str = Path(..., description="Customer user id"),
    _: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> CustomerResponse:
    changes = {name: getattr(payload, name) for name in payload.model_fields_set}
    bonus = changes.pop("bonus_credit", UNSET)
    if bonus is not UNSET and bonus is not None:
        changes["bonus_credit_cents"] = to_cents(bonus)
    try:
        customer = await CustomerService.with_session(db).update_customer(
            customer_id, CustomerUpdateInput(**changes)
        )
    except (
        CustomerNotFoundError,
        CustomerValidationError,
        AccountAlreadyExistsError,
        AccountValidationError,
        RoleNotFoundError,
    ) as exc:
        _raise_for(exc)
    return _customer_to_response(customer)


@router.delete("/{customer_id}", response_model=SuccessResponse, summary="Deactivate a customer")
async def delete_customer(
    customer_id: str = Path(..., description="Customer user id"),
    _: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    try:
        await CustomerService.with_session(db).deactivate_customer(customer_id)
    except CustomerNotFoundError as exc:
        _raise_for(exc)
    return SuccessResponse(message="Customer deactivated successfully")
