"""Order placement and lifecycle.

An order is charged when it is placed: the customer is debited the marked-up
price and the supervisor account the carrier's base price. Every way an order
can leave the normal flow (customer cancel, admin reject, carrier rejection
picked up by a sync) refunds both legs, at most once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from freightdesk.infrastructure.carriers import CarrierClient, CarrierError
from freightdesk.infrastructure.database.repositories.order_repository import SqlOrderRepository
from freightdesk.modules.accounts.models import User
from freightdesk.modules.accounts.service import AccountService
from freightdesk.modules.balances.exceptions import InsufficientBalanceError
from freightdesk.modules.balances.service import BalanceService
from freightdesk.modules.freight import estimate_delivery_date, validate_time_range
from freightdesk.modules.pricing import base_price, customer_price, pricing_for, to_cents, to_decimal
from freightdesk.modules.quotes import QuoteService, build_order_body
from freightdesk.modules.quotes.builders import SERVICE_LTL, item_freight_class, order_destination

from .exceptions import OrderNotFoundError, OrderStateError, OrderValidationError
from .models import (
    AUTO_REFUND_STATUSES,
    CANCELLABLE_STATUSES,
    REFUNDABLE_STATUSES,
    REJECTABLE_STATUSES,
    STATUS_CANCELLED,
    STATUS_PENDING_REVIEW,
    STATUS_REJECTED,
    Order,
    OrderItemInput,
    RefundResult,
    SyncResult,
    map_carrier_status,
)
from .repository import OrderRepository

logger = logging.getLogger(__name__)

REQUIRED_PLACE_FIELDS = (
    "orderId",
    "rateId",
    "carrierSCAC",
    "carrierGuarantee",
    "customerDump",
    "quoteSubmissionData",
    "contactInfo",
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _history_entry(status: str, **extra: Any) -> dict[str, Any]:
    entry = {"status": status, "timestamp": _now().isoformat()}
    entry.update({key: value for key, value in extra.items() if value is not None})
    return entry


def _parse_date(value: Any) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def _number(value: Any) -> Optional[float]:
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _rate_transit_days(rate: Optional[Mapping[str, Any]]) -> Optional[int]:
    days = rate.get("carrierTransitDays") if rate is not None else None
    if isinstance(days, int) and days >= 0:
        return days
    if isinstance(days, str) and days.isdigit():
        return int(days)
    return None


def _order_items(submission: Mapping[str, Any]) -> list[OrderItemInput]:
    items = []
    for index, raw in enumerate(submission.get("packageItems") or submission.get("cargo") or [], start=1):
        weight = _number(raw.get("weight")) or 0.0
        pallets = int(_number(raw.get("totalPallet")) or 1)
        items.append(
            OrderItemInput(
                description=raw.get("packageName") or raw.get("description") or f"Item {index}",
                package_type=raw.get("packageType") or "Pallet",
                quantity=int(_number(raw.get("totalPackage")) or 1),
                weight=weight,
                total_weight=weight * pallets,
                length=_number(raw.get("length")),
                width=_number(raw.get("width")),
                height=_number(raw.get("height")),
                freight_class=item_freight_class(raw) or None,
                nmfc=raw.get("nmfc") or None,
                is_stackable=bool(raw.get("isStackable")),
                is_hazardous=bool(raw.get("isHazmat")),
            )
        )
    return items


def _party(address: Optional[Mapping[str, Any]], contact_name: Any, contact_phone: Any, contact_email: Any) -> dict:
    party = dict(address or {})
    party.update({"contact_name": contact_name, "contact_phone": contact_phone, "contact_email": contact_email})
    return party


def validate_place_request(request: Mapping[str, Any]) -> None:
    for name in REQUIRED_PLACE_FIELDS:
        value = request.get(name)
        if value is None or (value == "" or value == {}):
            raise OrderValidationError(f"Missing required field: {name}")
    contact = request["contactInfo"]
    if not contact.get("name") or not contact.get("email") or not contact.get("phone"):
        raise OrderValidationError("Missing required contact information (name, email, or phone)")
    for side in ("origin", "destination"):
        if not validate_time_range(request.get(f"{side}TimeFrom"), request.get(f"{side}TimeTo")):
            raise OrderValidationError(f"Invalid {side} time window: the end time must be after the start time")


@dataclass(slots=True)
class OrderService:
    repository: OrderRepository
    carrier: CarrierClient
    accounts: AccountService
    balances: BalanceService

    @classmethod
    def with_session(cls, session: AsyncSession, carrier: CarrierClient) -> "OrderService":
        return cls(
            repository=SqlOrderRepository(session),
            carrier=carrier,
            accounts=AccountService.with_session(session),
            balances=BalanceService.with_session(session),
        )

    async def _price(self, user: User, request: Mapping[str, Any]) -> tuple[Decimal, Decimal, Optional[dict]]:
        """Customer and base price for the chosen rate, plus the carrier rate if found."""
        ratio = pricing_for(user.is_admin(), user.price_ratio)
        rate: Optional[dict] = None
        try:
            rate = await QuoteService(self.carrier).find_rate(str(request["orderId"]), str(request["rateId"]))
        except CarrierError as exc:
            logger.warning("Could not re-fetch rate %s for %s: %s", request["rateId"], request["orderId"], exc)

        if rate is not None and rate.get("totalCharge") not in (None, ""):
            base = to_decimal(rate["totalCharge"])
            return customer_price(base, ratio), base, rate

        selected = request.get("selectedQuoteData") or {}
        if selected.get("totalCharge") in (None, ""):
            raise OrderValidationError("Unable to determine the price of the selected rate")
        customer = to_decimal(selected["totalCharge"])
        return customer, base_price(customer, ratio), None

    async def place_order(self, user: User, request: Mapping[str, Any]) -> Order:
        validate_place_request(request)
        submission = request["quoteSubmissionData"]
        contact = request["contactInfo"]

        customer_amount, base_amount, rate = await self._price(user, request)
        customer_cents = to_cents(customer_amount)
        base_cents = to_cents(base_amount)
        if not user.is_admin():
            await self.balances.ensure_can_afford(user, customer_cents)

        body = build_order_body(request)
        carrier_response = await self.carrier.place_order(body)
        logger.info("Carrier accepted order %s for user %s", request["orderId"], user.id)

        service_type = submission.get("serviceType") or SERVICE_LTL
        pickup = _parse_date(submission.get("pickupDate"))
        guarantee = str(request["carrierGuarantee"])
        estimated = estimate_delivery_date(pickup, guarantee, _rate_transit_days(rate))
        selected = request.get("selectedQuoteData") or {}

        order = await self.repository.create_order(
            _order_items(submission),
            user_id=user.id,
            order_number=str(request["orderId"]),
            quote_number=str(request["orderId"]),
            rate_id=str(request["rateId"]),
            reference_number=body["referenceNumber"],
            carrier_name=(rate or selected).get("carrierName") or "",
            carrier_scac=request["carrierSCAC"],
            carrier_guarantee=guarantee,
            service_type=service_type,
            total_amount_cents=customer_cents,
            base_amount_cents=base_cents,
            status=STATUS_PENDING_REVIEW,
            status_history=[_history_entry(STATUS_PENDING_REVIEW, notes="Order placed via web portal")],
            origin=_party(
                submission.get("originAddress"),
                body["originContactName"],
                body["originContactPhone"],
                body["originContactEmail"],
            ),
            destination=_party(
                order_destination(submission),
                body["destinationContactName"],
                body["destinationContactPhone"],
                body["destinationContactEmail"],
            ),
            contact=dict(contact),
            pickup_date=pickup,
            estimated_delivery_date=estimated,
            carrier_response=carrier_response,
        )

        supervisor = await self.accounts.get_supervisor()
        try:
            await self.balances.charge_order(
                user,
                supervisor,
                order_id=order.id,
                order_number=order.order_number,
                customer_amount_cents=customer_cents,
                base_amount_cents=base_cents,
                description=f"Order placement - {service_type} shipment",
                require_available=not user.is_admin(),
            )
        except InsufficientBalanceError:
            # another debit drained the balance after the pre-check; release the carrier booking
            logger.warning("Balance of user %s no longer covers order %s", user.id, order.order_number)
            try:
                await self.carrier.cancel_order(order.order_number)
            except CarrierError as exc:
                logger.error("Could not cancel unpaid carrier order %s: %s", order.order_number, exc)
            raise
        return order

    async def list_orders(
        self,
        viewer: User,
        *,
        status: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[Sequence[Order], int]:
        user_id = None if viewer.is_admin() else viewer.id
        return await self.repository.list_orders(user_id=user_id, status=status, limit=limit, offset=offset)

    async def get_order(self, viewer: User, order_id: str) -> Order:
        order = await self.repository.get_order(order_id)
        if order is None or (order.user_id != viewer.id and not viewer.is_admin()):
            raise OrderNotFoundError("Order not found")
        return order

    async def _refund(self, order: Order, description: str) -> Optional[Order]:
        """Claim the order's refund and post both legs; ``None`` if it was already refunded."""
        claimed = await self.repository.claim_refund(order.id, _now())
        if claimed is None:
            logger.info("Order %s already refunded, skipping", order.order_number)
            return None
        customer = await self.accounts.require(order.user_id)
        supervisor = await self.accounts.get_supervisor()
        await self.balances.refund_order(
            customer,
            supervisor,
            order_id=order.id,
            order_number=order.order_number,
            customer_amount_cents=order.total_amount_cents,
            base_amount_cents=order.base_amount_cents,
            description=description,
        )
        return claimed

    async def cancel_order(self, viewer: User, order_id: str) -> Order:
        order = await self.get_order(viewer, order_id)
        if order.status not in CANCELLABLE_STATUSES:
            raise OrderStateError("Only orders with pending review status can be cancelled")

        result = await self.carrier.cancel_order(order.order_number)
        data = result.get("data") if isinstance(result.get("data"), dict) else {}
        remark = data.get("auditRemark") or "Customer cancelled"
        order = await self.repository.update_order(
            order.id,
            status=STATUS_CANCELLED,
            audit_remark=remark,
            status_history=order.status_history + [_history_entry(STATUS_CANCELLED, notes=remark, source="cancel")],
        )
        logger.info("Order %s cancelled by %s", order.order_number, viewer.id)
        return await self._refund(order, f"Order cancellation refund - {order.order_number}") or order

    async def refund_order(self, viewer: User, order_id: str, reason: Optional[str] = None) -> RefundResult:
        order = await self.get_order(viewer, order_id)
        if order.status not in REFUNDABLE_STATUSES:
            raise OrderStateError(f"Order status '{order.status}' is not eligible for refund")

        reason = reason or "Order rejected by carrier"
        refunded = await self._refund(order, f"{reason} - Order {order.order_number}")
        if refunded is None:
            return RefundResult(order=order, created=False)
        return RefundResult(order=refunded, created=True, amount_cents=refunded.total_amount_cents)

    async def reject_order(self, admin: User, order_id: str, reason: Optional[str] = None) -> Order:
        order = await self.repository.get_order(order_id)
        if order is None:
            raise OrderNotFoundError("Order not found")
        if order.status not in REJECTABLE_STATUSES:
            raise OrderStateError(f"Order cannot be rejected. Current status: {order.status}")

        remark = reason or "Order rejected"
        order = await self.repository.update_order(
            order.id,
            status=STATUS_REJECTED,
            audit_remark=remark,
            status_history=order.status_history
            + [_history_entry(STATUS_REJECTED, notes=remark, rejected_by=admin.id, source="admin")],
        )
        logger.info("Order %s rejected by admin %s", order.order_number, admin.id)
        return await self._refund(order, f"Order rejection refund - {order.order_number}") or order

    async def tracking(self, viewer: User, order_id: str) -> dict[str, Any]:
        order = await self.get_order(viewer, order_id)
        return await self.carrier.tracking(order.order_number)

    async def sync_order(self, viewer: User, order_id: str) -> SyncResult:
        order = await self.get_order(viewer, order_id)
        info = await self.carrier.order_info(order.order_number)
        carrier_status = info.get("orderStatus")
        mapped = map_carrier_status(carrier_status)
        # the carrier keeps reporting "check pending" for a while after a cancel
        if order.status == STATUS_CANCELLED and mapped == STATUS_PENDING_REVIEW and info.get("auditRemark"):
            mapped = STATUS_CANCELLED

        history = order.status_history + [
            _history_entry(
                mapped,
                api_status=carrier_status,
                audit_remark=info.get("auditRemark"),
                pickup_number=info.get("pickupNumber"),
                delivery_number=info.get("deliveryNumber"),
                insured_status=info.get("insuredStatus"),
                source="api_sync",
            )
        ]
        order = await self.repository.update_order(
            order.id,
            status=mapped,
            tracking_number=info.get("trackNumber") or None,
            pro_number=info.get("proNumber") or None,
            audit_remark=info.get("auditRemark") or order.audit_remark,
            status_history=history,
        )

        refunded = False
        if mapped in AUTO_REFUND_STATUSES:
            reason = "Order rejected by carrier" if mapped == STATUS_REJECTED else "Order cancelled"
            claimed = await self._refund(order, f"{reason} - Order {order.order_number}")
            if claimed is not None:
                refunded = True
                order = await self.repository.update_order(
                    order.id,
                    status_history=claimed.status_history
                    + [
                        _history_entry(
                            mapped,
                            event="refund_processed",
                            refund_amount_cents=order.total_amount_cents,
                            source="automatic_refund",
                        )
                    ],
                )
                logger.info("Order %s refunded after carrier status %s", order.order_number, carrier_status)

        return SyncResult(order=order, carrier_status=carrier_status, carrier_data=info, refunded=refunded)

    async def delete_all(self) -> tuple[int, int]:
        return await self.repository.delete_all()
