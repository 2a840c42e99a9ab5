"""SQLAlchemy implementation of the order repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from freightdesk.db.models import Order as OrderModel, OrderItem as OrderItemModel
from freightdesk.modules.orders.exceptions import OrderNotFoundError
from freightdesk.modules.orders.models import REFUND_STATUS_REFUNDED, Order, OrderItem, OrderItemInput
from freightdesk.modules.orders.repository import OrderRepository

_UPDATABLE_FIELDS = frozenset(
    {
        "status",
        "status_history",
        "tracking_number",
        "pro_number",
        "audit_remark",
        "refund_status",
        "refunded_at",
        "carrier_response",
        "estimated_delivery_date",
    }
)


class SqlOrderRepository(OrderRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _load(self, order_id: str) -> OrderModel | None:
        stmt = (
            select(OrderModel)
            .where(OrderModel.id == order_id)
            .options(selectinload(OrderModel.items))
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_order(self, items: Sequence[OrderItemInput], **fields: Any) -> Order:
        model = OrderModel(**fields)
        model.items = [
            OrderItemModel(
                position=position,
                description=item.description,
                package_type=item.package_type,
                quantity=item.quantity,
                weight=item.weight,
                total_weight=item.total_weight,
                length=item.length,
                width=item.width,
                height=item.height,
                freight_class=item.freight_class,
                nmfc=item.nmfc,
                is_stackable=item.is_stackable,
                is_hazardous=item.is_hazardous,
            )
            for position, item in enumerate(items, start=1)
        ]
        self._session.add(model)
        await self._session.flush()
        loaded = await self._load(model.id)
        return self._to_domain(loaded)

    async def get_order(self, order_id: str) -> Optional[Order]:
        model = await self._load(order_id)
        return self._to_domain(model) if model is not None else None

    async def list_orders(
        self,
        *,
        user_id: Optional[str],
        status: Optional[str],
        limit: int,
        offset: int,
    ) -> tuple[Sequence[Order], int]:
        stmt = select(OrderModel).options(selectinload(OrderModel.items))
        count_stmt = select(func.count(OrderModel.id))
        if user_id is not None:
            stmt = stmt.where(OrderModel.user_id == user_id)
            count_stmt = count_stmt.where(OrderModel.user_id == user_id)
        if status and status != "all":
            stmt = stmt.where(OrderModel.status == status)
            count_stmt = count_stmt.where(OrderModel.status == status)
        stmt = stmt.order_by(OrderModel.created_at.desc(), OrderModel.id.desc()).offset(offset).limit(limit)

        result = await self._session.execute(stmt)
        total = (await self._session.execute(count_stmt)).scalar_one()
        return [self._to_domain(model) for model in result.scalars().all()], total

    async def update_order(self, order_id: str, **fields: Any) -> Order:
        model = await self._load(order_id)
        if model is None:
            raise OrderNotFoundError("Order not found")
        for key, value in fields.items():
            if key not in _UPDATABLE_FIELDS:
                raise ValueError(f"Unsupported order field: {key}")
            setattr(model, key, value)
        await self._session.flush()
        refreshed = await self._load(order_id)
        return self._to_domain(refreshed)

    async def claim_refund(self, order_id: str, refunded_at: datetime) -> Optional[Order]:
        stmt = (
            update(OrderModel)
            .where(
                OrderModel.id == order_id,
                or_(OrderModel.refund_status.is_(None), OrderModel.refund_status != REFUND_STATUS_REFUNDED),
            )
            .values(refund_status=REFUND_STATUS_REFUNDED, refunded_at=refunded_at)
            .execution_options(synchronize_session="fetch")
            .returning(OrderModel.id)
        )
        result = await self._session.execute(stmt)
        if result.scalar_one_or_none() is None:
            return None
        return self._to_domain(await self._load(order_id))

    async def delete_all(self) -> tuple[int, int]:
        items = await self._session.execute(delete(OrderItemModel))
        orders = await self._session.execute(delete(OrderModel))
        return orders.rowcount or 0, items.rowcount or 0

    @staticmethod
    def _to_domain(model: OrderModel) -> Order:
        return Order(
            id=model.id,
            user_id=model.user_id,
            order_number=model.order_number,
            status=model.status,
            service_type=model.service_type,
            total_amount_cents=model.total_amount_cents,
            base_amount_cents=model.base_amount_cents,
            currency=model.currency,
            created_at=model.created_at,
            quote_number=model.quote_number,
            rate_id=model.rate_id,
            reference_number=model.reference_number,
            carrier_name=model.carrier_name,
            carrier_scac=model.carrier_scac,
            carrier_guarantee=model.carrier_guarantee,
            status_history=list(model.status_history or []),
            origin=model.origin,
            destination=model.destination,
            contact=model.contact,
            pickup_date=model.pickup_date,
            estimated_delivery_date=model.estimated_delivery_date,
            tracking_number=model.tracking_number,
            pro_number=model.pro_number,
            audit_remark=model.audit_remark,
            refund_status=model.refund_status,
            refunded_at=model.refunded_at,
            carrier_response=model.carrier_response,
            updated_at=model.updated_at,
            items=[
                OrderItem(
                    id=item.id,
                    position=item.position,
                    quantity=item.quantity,
                    weight=item.weight,
                    total_weight=item.total_weight,
                    description=item.description,
                    package_type=item.package_type,
                    length=item.length,
                    width=item.width,
                    height=item.height,
                    freight_class=item.freight_class,
                    nmfc=item.nmfc,
                    is_stackable=item.is_stackable,
                    is_hazardous=item.is_hazardous,
                )
                for item in model.items
            ],
        )
