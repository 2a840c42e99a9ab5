"""SQLAlchemy implementation for top-up repository"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Sequence

from sqlalchemy import delete, desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from freightdesk.db.models import PaymentConfig, TopUpRequest, User


class SqlTopupRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, **fields: Any) -> TopUpRequest:
        request = TopUpRequest(**fields)
        self.session.add(request)
        await self.session.flush()
        await self.session.refresh(request)
        return request

    async def get(self, request_id: str) -> TopUpRequest | None:
        stmt = select(TopUpRequest).where(TopUpRequest.id == request_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_for_user(self, user_id: str, limit: int, offset: int) -> Sequence[tuple]:
        stmt = (
            select(TopUpRequest, PaymentConfig)
            .outerjoin(PaymentConfig, PaymentConfig.id == TopUpRequest.payment_config_id)
            .where(TopUpRequest.user_id == user_id)
            .order_by(desc(TopUpRequest.created_at))
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [tuple(row) for row in result.all()]

    async def list_all(self, *, status: str | None, limit: int, offset: int) -> Sequence[tuple]:
        stmt = (
            select(TopUpRequest, PaymentConfig, User)
            .outerjoin(PaymentConfig, PaymentConfig.id == TopUpRequest.payment_config_id)
            .outerjoin(User, User.id == TopUpRequest.user_id)
        )
        if status and status != "all":
            stmt = stmt.where(TopUpRequest.status == status)
        stmt = stmt.order_by(desc(TopUpRequest.created_at)).offset(offset).limit(limit)
        result = await self.session.execute(stmt)
        return [tuple(row) for row in result.all()]

    async def mark_reviewed(
        self,
        request_id: str,
        *,
        from_status: str,
        status: str,
        reviewed_by: str,
        reviewed_at: datetime,
        admin_notes: str | None,
        approved_amount_cents: int | None,
    ) -> TopUpRequest | None:
        stmt = (
            update(TopUpRequest)
            .where(TopUpRequest.id == request_id, TopUpRequest.status == from_status)
            .values(
                status=status,
                reviewed_by=reviewed_by,
                reviewed_at=reviewed_at,
                admin_notes=admin_notes,
                approved_amount_cents=approved_amount_cents,
            )
            .execution_options(synchronize_session="fetch")
            .returning(TopUpRequest.id)
        )
        result = await self.session.execute(stmt)
        if result.scalar_one_or_none() is None:
            return None
        request = await self.get(request_id)
        await self.session.refresh(request)
        return request

    async def delete_all(self) -> int:
        result = await self.session.execute(delete(TopUpRequest))
        return result.rowcount or 0
