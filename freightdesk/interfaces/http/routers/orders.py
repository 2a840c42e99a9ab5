"""Order placement, lifecycle actions and carrier sync."""
from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from freightdesk.core.security import get_current_admin, get_current_user
from freightdesk.infrastructure.carriers import CarrierClient, CarrierError
from freightdesk.interfaces.http.deps import get_carrier, get_db_session
from freightdesk.interfaces.http.errors import carrier_http_error
from freightdesk.modules.accounts import User
from freightdesk.modules.balances import InsufficientBalanceError
from freightdesk.modules.orders import (
    Order,
    OrderNotFoundError,
    OrderService,
    OrderStateError,
    OrderValidationError,
)
from freightdesk.modules.pricing import PricingError
from freightdesk.modules.quotes import QuoteValidationError
from freightdesk.schemas import (
    OrderActionRequest,
    OrderActionResponse,
    OrderItemResponse,
    OrderListResponse,
    OrderResponse,
    OrderSyncResponse,
    PlaceOrderRequest,
    PlaceOrderResponse,
    RefundInfo,
    money,
)

router = APIRouter()


def _order_to_response(order: Order, viewer: User) -> OrderResponse:
    return OrderResponse(
        id=order.id,
        user_id=order.user_id,
        order_number=order.order_number,
        quote_number=order.quote_number,
        rate_id=order.rate_id,
        reference_number=order.reference_number,
        carrier_name=order.carrier_name,
        carrier_scac=order.carrier_scac,
        carrier_guarantee=order.carrier_guarantee,
        service_type=order.service_type,
        total_amount=money(order.total_amount_cents),
        base_amount=money(order.base_amount_cents) if viewer.is_admin() else None,
        currency=order.currency,
        status=order.status,
        status_history=order.status_history,
        origin=order.origin,
        destination=order.destination,
        contact=order.contact,
        pickup_date=order.pickup_date,
        estimated_delivery_date=order.estimated_delivery_date,
        tracking_number=order.tracking_number,
        pro_number=order.pro_number,
        audit_remark=order.audit_remark,
        refund_status=order.refund_status,
        refunded_at=order.refunded_at,
        created_at=order.created_at,
        updated_at=order.updated_at,
        items=[OrderItemResponse.model_validate(item) for item in order.items],
    )


def _lifecycle_error(exc: Exception) -> HTTPException:
    if isinstance(exc, OrderNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, CarrierError):
        return carrier_http_error(exc)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.post("/place", response_model=PlaceOrderResponse, status_code=status.HTTP_201_CREATED, summary="Book a rate")
async def place_order(
    payload: PlaceOrderRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    carrier: CarrierClient = Depends(get_carrier),
) -> PlaceOrderResponse:
    try:
        order = await OrderService.with_session(db, carrier).place_order(user, payload.model_dump(by_alias=True))
    except InsufficientBalanceError as exc:
        raise HTTPException(status_code=status.HTTP_402_PAYMENT_REQUIRED, detail=str(exc)) from exc
    except (OrderValidationError, QuoteValidationError, PricingError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except CarrierError as exc:
        raise carrier_http_error(exc) from exc
    return PlaceOrderResponse(
        message="Order placed successfully",
        order_id=order.order_number,
        db_order_id=order.id,
    )


@router.get("", response_model=OrderListResponse, summary="Orders visible to the caller")
async def list_orders(
    status_filter: Optional[str] = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    carrier: CarrierClient = Depends(get_carrier),
) -> OrderListResponse:
    orders, total = await OrderService.with_session(db, carrier).list_orders(
        user, status=status_filter, limit=limit, offset=offset
    )
    return OrderListResponse(orders=[_order_to_response(order, user) for order in orders], total=total)


@router.get("/{order_id}", response_model=OrderResponse, summary="Order detail")
async def get_order(
    order_id: str = Path(..., description="Order id"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    carrier: CarrierClient = Depends(get_carrier),
) -> OrderResponse:
    try:
        order = await OrderService.with_session(db, carrier).get_order(user, order_id)
    except OrderNotFoundError as exc:
        raise _lifecycle_error(exc) from exc
    return _order_to_response(order, user)


@router.post("/{order_id}/cancel", response_model=OrderActionResponse, summary="Cancel an order under review")
async def cancel_order(
    order_id: str = Path(..., description="Order id"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    carrier: CarrierClient = Depends(get_carrier),
) -> OrderActionResponse:
    try:
        order = await OrderService.with_session(db, carrier).cancel_order(user, order_id)
    except (OrderNotFoundError, OrderStateError, CarrierError) as exc:
        raise _lifecycle_error(exc) from exc
    return OrderActionResponse(message="Order cancelled successfully", order=_order_to_response(order, user))


@router.post("/{order_id}/refund", response_model=OrderActionResponse, summary="Refund a failed order")
async def refund_order(
    payload: Optional[OrderActionRequest] = None,
    order_id: str = Path(..., description="Order id"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    carrier: CarrierClient = Depends(get_carrier),
) -> OrderActionResponse:
    reason = payload.reason if payload else None
    try:
        result = await OrderService.with_session(db, carrier).refund_order(user, order_id, reason)
    except (OrderNotFoundError, OrderStateError) as exc:
        raise _lifecycle_error(exc) from exc
    message = "Refund processed successfully" if result.created else "Refund already processed"
    return OrderActionResponse(message=message, order=_order_to_response(result.order, user))


@router.post("/{order_id}/reject", response_model=OrderActionResponse, summary="Reject an order (admin)")
async def reject_order(
    payload: Optional[OrderActionRequest] = None,
    order_id: str = Path(..., description="Order id"),
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
    carrier: CarrierClient = Depends(get_carrier),
) -> OrderActionResponse:
    reason = payload.reason if payload else None
    try:
        order = await OrderService.with_session(db, carrier).reject_order(admin, order_id, reason)
    except (OrderNotFoundError, OrderStateError) as exc:
        raise _lifecycle_error(exc) from exc
    return OrderActionResponse(message="Order rejected and refunded", order=_order_to_response(order, admin))


@router.get("/{order_id}/tracking", summary="Carrier tracking events")
async def order_tracking(
    order_id: str = Path(..., description="Order id"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    carrier: CarrierClient = Depends(get_carrier),
) -> dict[str, Any]:
    try:
        return await OrderService.with_session(db, carrier).tracking(user, order_id)
    except (OrderNotFoundError, CarrierError) as exc:
        raise _lifecycle_error(exc) from exc


@router.post("/{order_id}/sync", response_model=OrderSyncResponse, summary="Pull the latest status from the carrier")
async def sync_order(
    order_id: str = Path(..., description="Order id"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    carrier: CarrierClient = Depends(get_carrier),
) -> OrderSyncResponse:
    try:
        result = await OrderService.with_session(db, carrier).sync_order(user, order_id)
    except (OrderNotFoundError, CarrierError) as exc:
        raise _lifecycle_error(exc) from exc

    refund = None
    if result.refunded:
        refund = RefundInfo(
            created=True,
            amount=money(result.order.total_amount_cents),
            description=f"Automatic refund after carrier status {result.carrier_status}",
        )
    return OrderSyncResponse(
        order=_order_to_response(result.order, user),
        refund=refund,
        api_response=result.carrier_data,
    )
