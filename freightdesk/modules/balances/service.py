"""Balance and ledger service.

Every posting goes through :meth:`BalanceService.post` so the ledger row and
the balance change land in the same unit of work. Order charges are posted
twice: once against the customer at their marked-up price and once against
the supervisor account at the carrier's base price.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from freightdesk.core.config import get_settings
from freightdesk.infrastructure.database.repositories.balance_repository import SqlBalanceRepository
from freightdesk.modules.accounts.models import User

from .exceptions import (
    InsufficientBalanceError,
    TransactionPermissionError,
    TransactionValidationError,
)
from .models import (
    DATE_RANGES,
    TRANSACTION_ADJUSTMENT,
    TRANSACTION_CREDIT,
    TRANSACTION_DEBIT,
    TRANSACTION_REFUND,
    TRANSACTION_TYPES,
    BalanceSnapshot,
    TransactionFilter,
    TransactionRecord,
    TransactionScope,
)
from .repository import BalanceRepository

logger = logging.getLogger(__name__)


def order_account_for(user_id: str) -> str:
    return f"ACC-{user_id[:8].upper()}"


@dataclass(slots=True)
class BalanceService:
    repository: BalanceRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "BalanceService":
        return cls(SqlBalanceRepository(session))

    async def ensure_balance(self, user_id: str) -> BalanceSnapshot:
        balance = await self.repository.get_balance(user_id)
        if balance is None:
            balance = await self.repository.create_balance(user_id, get_settings().balances.currency)
        return balance

    async def ensure_can_afford(self, user: User, amount_cents: int) -> BalanceSnapshot:
        balance = await self.ensure_balance(user.id)
        if not balance.can_cover(amount_cents):
            raise InsufficientBalanceError(
                f"Insufficient balance: available {balance.available_balance_cents / 100:.2f}, "
                f"required {amount_cents / 100:.2f}"
            )
        return balance

    async def post(
        self,
        user: User,
        *,
        amount_cents: int,
        transaction_type: str,
        description: Optional[str] = None,
        base_amount_cents: Optional[int] = None,
        order_id: Optional[str] = None,
        order_number: Optional[str] = None,
        payment_method: Optional[str] = None,
        reference_id: Optional[str] = None,
        is_supervisor_transaction: bool = False,
        details: Optional[dict[str, Any]] = None,
        require_available: bool = False,
    ) -> TransactionRecord:
        """Apply a signed amount to the owner's balance and write its ledger row.

        With ``require_available`` a debit only lands while the available balance
        still covers it, checked in the same UPDATE that moves the money.
        """
        if transaction_type not in TRANSACTION_TYPES:
            raise TransactionValidationError(f"Unknown transaction type: {transaction_type}")

        balance = await self.ensure_balance(user.id)
        required = -amount_cents if require_available and amount_cents < 0 else None
        if await self.repository.adjust_balance(user.id, amount_cents, required_available_cents=required) is None:
            raise InsufficientBalanceError(f"Insufficient balance: required {-amount_cents / 100:.2f}")
        transaction_id = await self.repository.next_transaction_id(datetime.now(timezone.utc).year)
        record = await self.repository.add_transaction(
            transaction_id=transaction_id,
            user_id=user.id,
            order_id=order_id,
            order_number=order_number,
            order_account=order_account_for(user.id),
            company_name=user.company_name,
            user_email=user.email,
            transaction_type=transaction_type,
            amount_cents=amount_cents,
            base_amount_cents=base_amount_cents,
            currency=balance.currency,
            description=description,
            payment_method=payment_method,
            reference_id=reference_id,
            is_supervisor_transaction=is_supervisor_transaction,
            details=details,
        )
        logger.info(
            "Posted %s %s of %d cents for user %s (order=%s)",
            transaction_type,
            transaction_id,
            amount_cents,
            user.id,
            order_number,
        )
        return record

    async def record_manual(
        self,
        actor: User,
        *,
        amount_cents: int,
        transaction_type: str,
        description: Optional[str] = None,
        payment_method: Optional[str] = None,
        reference_id: Optional[str] = None,
        order_id: Optional[str] = None,
        order_number: Optional[str] = None,
        create_dual_transaction: bool = False,
        supervisor: Optional[User] = None,
        base_amount_cents: Optional[int] = None,
    ) -> list[TransactionRecord]:
        if transaction_type not in TRANSACTION_TYPES:
            raise TransactionValidationError("Invalid transaction type")
        if amount_cents <= 0:
            raise TransactionValidationError("Amount must be greater than 0")
        if create_dual_transaction and not actor.is_admin():
            raise TransactionPermissionError("Only administrators can create dual transactions")

        signed = -amount_cents if transaction_type == TRANSACTION_DEBIT else amount_cents
        if not create_dual_transaction:
            record = await self.post(
                actor,
                amount_cents=signed,
                transaction_type=transaction_type,
                description=description,
                payment_method=payment_method,
                reference_id=reference_id,
                order_id=order_id,
                order_number=order_number,
            )
            return [record]

        base = base_amount_cents if base_amount_cents is not None else amount_cents
        signed_base = -base if transaction_type == TRANSACTION_DEBIT else base
        return await self._post_pair(
            actor,
            supervisor,
            customer_cents=signed,
            base_cents=signed_base,
            transaction_type=transaction_type,
            description=description,
            order_id=order_id,
            order_number=order_number,
            payment_method=payment_method,
            reference_id=reference_id,
        )

    async def _post_pair(
        self,
        customer: User,
        supervisor: Optional[User],
        *,
        customer_cents: int,
        base_cents: int,
        transaction_type: str,
        description: Optional[str],
        order_id: Optional[str],
        order_number: Optional[str],
        payment_method: Optional[str] = None,
        reference_id: Optional[str] = None,
        require_available: bool = False,
    ) -> list[TransactionRecord]:
        records = [
            await self.post(
                customer,
                amount_cents=customer_cents,
                require_available=require_available,
                base_amount_cents=base_cents,
                transaction_type=transaction_type,
                description=description,
                order_id=order_id,
                order_number=order_number,
                payment_method=payment_method,
                reference_id=reference_id,
            )
        ]
        # the supervisor pays the carrier, so it never receives a second leg for its own orders
        if supervisor is not None and supervisor.id != customer.id:
            records.append(
                await self.post(
                    supervisor,
                    amount_cents=base_cents,
                    base_amount_cents=base_cents,
                    transaction_type=transaction_type,
                    description=f"{description} (customer {customer.email})" if description else None,
                    order_id=order_id,
                    order_number=order_number,
                    payment_method=payment_method,
                    reference_id=reference_id,
                    is_supervisor_transaction=True,
                    details={"customer_id": customer.id},
                )
            )
        return records

    async def charge_order(
        self,
        customer: User,
        supervisor: Optional[User],
        *,
        order_id: str,
        order_number: str,
        customer_amount_cents: int,
        base_amount_cents: int,
        description: str,
        require_available: bool = False,
    ) -> list[TransactionRecord]:
        return await self._post_pair(
            customer,
            supervisor,
            customer_cents=-customer_amount_cents,
            base_cents=-base_amount_cents,
            transaction_type=TRANSACTION_DEBIT,
            description=description,
            order_id=order_id,
            order_number=order_number,
            require_available=require_available,
        )

    async def refund_order(
        self,
        customer: User,
        supervisor: Optional[User],
        *,
        order_id: str,
        order_number: str,
        customer_amount_cents: int,
        base_amount_cents: int,
        description: str,
    ) -> list[TransactionRecord]:
        """Mirror an order charge with positive refund legs.

        Callers claim the order's refund first so the legs are posted at most once.
        """
        return await self._post_pair(
            customer,
            supervisor,
            customer_cents=abs(customer_amount_cents),
            base_cents=abs(base_amount_cents),
            transaction_type=TRANSACTION_REFUND,
            description=description,
            order_id=order_id,
            order_number=order_number,
        )

    async def adjust_bonus(self, user: User, previous_cents: int, new_cents: int) -> Optional[TransactionRecord]:
        difference = new_cents - previous_cents
        if difference == 0:
            return None
        return await self.post(
            user,
            amount_cents=difference,
            transaction_type=TRANSACTION_CREDIT if difference > 0 else TRANSACTION_ADJUSTMENT,
            description="Bonus credit adjustment",
        )

    async def list_transactions(
        self,
        viewer: User,
        filters: TransactionFilter,
        user_id: Optional[str] = None,
    ) -> tuple[Sequence[TransactionRecord], int]:
        if filters.date_range not in DATE_RANGES:
            raise TransactionValidationError(f"Invalid range: {filters.date_range}")
        if filters.transaction_type and filters.transaction_type not in TRANSACTION_TYPES | {"all"}:
            raise TransactionValidationError(f"Invalid transaction type: {filters.transaction_type}")

        if viewer.is_admin():
            if user_id:
                scope = TransactionScope(user_id=user_id)
            else:
                scope = TransactionScope(user_id=viewer.id, include_supervisor=True)
        else:
            scope = TransactionScope(user_id=viewer.id, exclude_supervisor=True)

        days = DATE_RANGES[filters.date_range]
        since = datetime.now(timezone.utc) - timedelta(days=days) if days else None
        return await self.repository.list_transactions(scope, filters, since)

    async def reset_balance(self, user_id: str, balance_cents: int) -> None:
        await self.ensure_balance(user_id)
        await self.repository.set_balance(user_id, balance_cents)

    async def delete_all_transactions(self) -> int:
        return await self.repository.delete_all_transactions()
