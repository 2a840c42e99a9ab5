"""SQLAlchemy implementation of the balance repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Sequence

from sqlalchemy import delete, desc, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from freightdesk.db.models import (
    BalanceTransaction as BalanceTransactionModel,
    UserBalance as UserBalanceModel,
)
from freightdesk.modules.balances.models import (
    BalanceSnapshot,
    TransactionFilter,
    TransactionRecord,
    TransactionScope,
)
from freightdesk.modules.balances.repository import BalanceRepository


class SqlBalanceRepository(BalanceRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _get_model(self, user_id: str) -> UserBalanceModel | None:
        stmt = select(UserBalanceModel).where(UserBalanceModel.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_balance(self, user_id: str) -> BalanceSnapshot | None:
        model = await self._get_model(user_id)
        return self._to_snapshot(model) if model else None

    async def create_balance(self, user_id: str, currency: str) -> BalanceSnapshot:
        model = UserBalanceModel(user_id=user_id, currency=currency)
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return self._to_snapshot(model)

    async def adjust_balance(
        self,
        user_id: str,
        delta_cents: int,
        *,
        required_available_cents: int | None = None,
    ) -> BalanceSnapshot | None:
        """Apply ``delta_cents`` in a single UPDATE.

        With ``required_available_cents`` the row only changes while available
        balance plus credit limit still covers that amount; ``None`` means it did not.
        """
        stmt = (
            update(UserBalanceModel)
            .where(UserBalanceModel.user_id == user_id)
            .values(current_balance_cents=UserBalanceModel.current_balance_cents + delta_cents)
        )
        if required_available_cents is not None:
            stmt = stmt.where(
                UserBalanceModel.current_balance_cents
                - UserBalanceModel.pending_balance_cents
                + UserBalanceModel.credit_limit_cents
                >= required_available_cents
            )
        stmt = stmt.execution_options(synchronize_session="fetch").returning(*self._snapshot_columns())
        row = (await self.session.execute(stmt)).first()
        return self._row_to_snapshot(row) if row is not None else None

    async def set_balance(self, user_id: str, balance_cents: int) -> None:
        stmt = (
            update(UserBalanceModel)
            .where(UserBalanceModel.user_id == user_id)
            .values(current_balance_cents=balance_cents, pending_balance_cents=0)
            .execution_options(synchronize_session="fetch")
            .returning(UserBalanceModel.user_id)
        )
        result = await self.session.execute(stmt)
        if result.scalar_one_or_none() is None:
            raise LookupError(f"No balance for user {user_id}")

    async def next_transaction_id(self, year: int) -> str:
        prefix = f"TXN-{year}-"
        stmt = select(func.max(BalanceTransactionModel.transaction_id)).where(
            BalanceTransactionModel.transaction_id.like(f"{prefix}%")
        )
        latest = (await self.session.execute(stmt)).scalar_one_or_none()
        sequence = int(latest[len(prefix):]) + 1 if latest else 1
        return f"{prefix}{sequence:06d}"

    async def add_transaction(self, **fields: Any) -> TransactionRecord:
        model = BalanceTransactionModel(**fields)
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return self._to_record(model)

    async def list_transactions(
        self,
        scope: TransactionScope,
        filters: TransactionFilter,
        since: datetime | None,
    ) -> tuple[Sequence[TransactionRecord], int]:
        conditions = []
        if scope.include_supervisor:
            conditions.append(
                or_(
                    BalanceTransactionModel.user_id == scope.user_id,
                    BalanceTransactionModel.is_supervisor_transaction.is_(True),
                )
            )
        else:
            conditions.append(BalanceTransactionModel.user_id == scope.user_id)
        if scope.exclude_supervisor:
            conditions.append(BalanceTransactionModel.is_supervisor_transaction.is_(False))
        if filters.transaction_type and filters.transaction_type != "all":
            conditions.append(BalanceTransactionModel.transaction_type == filters.transaction_type)
        if since is not None:
            conditions.append(BalanceTransactionModel.created_at >= since)
        if filters.search:
            pattern = f"%{filters.search.strip()}%"
            conditions.append(
                or_(
                    BalanceTransactionModel.transaction_id.ilike(pattern),
                    BalanceTransactionModel.description.ilike(pattern),
                    BalanceTransactionModel.order_number.ilike(pattern),
                    BalanceTransactionModel.reference_id.ilike(pattern),
                    BalanceTransactionModel.user_email.ilike(pattern),
                )
            )

        total_stmt = select(func.count(BalanceTransactionModel.id)).where(*conditions)
        total = (await self.session.execute(total_stmt)).scalar_one()

        stmt = (
            select(BalanceTransactionModel)
            .where(*conditions)
            .order_by(desc(BalanceTransactionModel.created_at), desc(BalanceTransactionModel.transaction_id))
            .offset(filters.offset)
            .limit(filters.limit)
        )
        result = await self.session.execute(stmt)
        return [self._to_record(row) for row in result.scalars().all()], int(total)

    async def delete_all_transactions(self) -> int:
        result = await self.session.execute(delete(BalanceTransactionModel))
        return result.rowcount or 0

    @staticmethod
    def _snapshot_columns() -> tuple:
        return (
            UserBalanceModel.user_id,
            UserBalanceModel.current_balance_cents,
            UserBalanceModel.pending_balance_cents,
            UserBalanceModel.credit_limit_cents,
            UserBalanceModel.currency,
            UserBalanceModel.updated_at,
        )

    @staticmethod
    def _row_to_snapshot(row) -> BalanceSnapshot:
        return BalanceSnapshot(
            user_id=row.user_id,
            current_balance_cents=row.current_balance_cents or 0,
            pending_balance_cents=row.pending_balance_cents or 0,
            credit_limit_cents=row.credit_limit_cents or 0,
            currency=row.currency,
            updated_at=row.updated_at,
        )

    @staticmethod
    def _to_snapshot(model: UserBalanceModel) -> BalanceSnapshot:
        return BalanceSnapshot(
            user_id=model.user_id,
            current_balance_cents=model.current_balance_cents or 0,
            pending_balance_cents=model.pending_balance_cents or 0,
            credit_limit_cents=model.credit_limit_cents or 0,
            currency=model.currency,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _to_record(model: BalanceTransactionModel) -> TransactionRecord:
        return TransactionRecord(
            id=model.id,
            transaction_id=model.transaction_id,
            user_id=model.user_id,
            transaction_type=model.transaction_type,
            amount_cents=model.amount_cents,
            currency=model.currency,
            status=model.status,
            is_supervisor_transaction=bool(model.is_supervisor_transaction),
            created_at=model.created_at,
            base_amount_cents=model.base_amount_cents,
            order_id=model.order_id,
            order_number=model.order_number,
            order_account=model.order_account,
            company_name=model.company_name,
            user_email=model.user_email,
            description=model.description,
            payment_method=model.payment_method,
            reference_id=model.reference_id,
            details=model.details,
        )
