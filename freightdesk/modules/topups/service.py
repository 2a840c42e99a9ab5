"""Top-up domain service."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from freightdesk.db.models import (
    PaymentConfig as PaymentConfigModel,
    TopUpRequest as TopUpRequestModel,
    User as UserModel,
)
from freightdesk.infrastructure.database.repositories.topup_repository import SqlTopupRepository
from freightdesk.modules.accounts.models import User
from freightdesk.modules.accounts.service import AccountService
from freightdesk.modules.balances.models import TRANSACTION_CREDIT
from freightdesk.modules.balances.service import BalanceService
from freightdesk.modules.payments.models import PaymentConfig

from .exceptions import (
    TopupNotFoundError,
    TopupPermissionError,
    TopupStateError,
    TopupValidationError,
)
from .models import (
    ACTION_APPROVE,
    ACTION_REJECT,
    STATUS_APPROVED,
    STATUS_PENDING,
    STATUS_REJECTED,
    STATUSES,
    TopupRequest,
)
from .repository import TopupRequestRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TopupService:
    repository: TopupRequestRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "TopupService":
        return cls(SqlTopupRepository(session))

    async def submit(
        self,
        user: User,
        config: PaymentConfig,
        *,
        amount_cents: int,
        currency: str = "USD",
        payment_reference: Optional[str] = None,
        customer_notes: Optional[str] = None,
        payment_details: Optional[dict[str, Any]] = None,
    ) -> TopupRequest:
        if not user.is_customer():
            raise TopupPermissionError("Only customers can submit top-up requests")
        if amount_cents <= 0:
            raise TopupValidationError("Amount must be greater than 0")
        if not config.is_active:
            raise TopupValidationError("Invalid or inactive payment configuration")

        row = await self.repository.create(
            user_id=user.id,
            payment_config_id=config.id,
            amount_cents=amount_cents,
            currency=currency or "USD",
            status=STATUS_PENDING,
            payment_reference=payment_reference,
            customer_notes=customer_notes,
            payment_details=payment_details,
        )
        logger.info("User %s submitted top-up %s for %d cents", user.id, row.id, amount_cents)
        return self._to_domain(row, config=config)

    async def get_request(self, request_id: str) -> TopupRequest:
        row = await self.repository.get(request_id)
        if row is None:
            raise TopupNotFoundError("Top-up request not found")
        return self._to_domain(row)

    async def history(self, user: User, limit: int = 50, offset: int = 0) -> list[TopupRequest]:
        rows = await self.repository.list_for_user(user.id, limit, offset)
        return [self._to_domain(row, config=config) for row, config in rows]

    async def list_for_review(self, status: Optional[str] = None, limit: int = 100, offset: int = 0) -> list[TopupRequest]:
        if status and status != "all" and status not in STATUSES:
            raise TopupValidationError(f"Invalid status: {status}")
        rows = await self.repository.list_all(status=status, limit=limit, offset=offset)
        return [self._to_domain(row, config=config, owner=owner) for row, config, owner in rows]

    async def review(
        self,
        admin: User,
        request_id: str,
        *,
        action: str,
        accounts: AccountService,
        balances: BalanceService,
        notes: Optional[str] = None,
        amount_cents: Optional[int] = None,
    ) -> TopupRequest:
        """Approve (crediting the customer) or reject a pending request.

        The status change is a conditional update out of ``pending``, so of two
        concurrent reviews only one gets the row and only that one credits.
        """
        if action not in {ACTION_APPROVE, ACTION_REJECT}:
            raise TopupValidationError("Invalid action. Must be approve or reject")
        request = await self.get_request(request_id)
        if request.status != STATUS_PENDING:
            raise TopupStateError("Request has already been processed")

        if action == ACTION_APPROVE:
            if amount_cents is None or amount_cents <= 0:
                raise TopupValidationError("Valid amount required for approval")
            status, admin_notes, approved = STATUS_APPROVED, notes, amount_cents
        else:
            if not notes or not notes.strip():
                raise TopupValidationError("Rejection reason required")
            status, admin_notes, approved = STATUS_REJECTED, notes.strip(), None

        row = await self.repository.mark_reviewed(
            request_id,
            from_status=STATUS_PENDING,
            status=status,
            reviewed_by=admin.id,
            reviewed_at=datetime.now(timezone.utc),
            admin_notes=admin_notes,
            approved_amount_cents=approved,
        )
        if row is None:
            raise TopupStateError("Request has already been processed")

        if action == ACTION_APPROVE:
            customer = await accounts.require(request.user_id)
            await balances.post(
                customer,
                amount_cents=amount_cents,
                transaction_type=TRANSACTION_CREDIT,
                description=f"Top-up approved - {request.payment_reference or request_id}",
                payment_method="top_up",
                reference_id=request_id,
            )
            logger.info("Admin %s approved top-up %s for %d cents", admin.id, request_id, amount_cents)
        else:
            logger.info("Admin %s rejected top-up %s", admin.id, request_id)
        return self._to_domain(row)

    async def clear_all(self) -> int:
        deleted = await self.repository.delete_all()
        logger.warning("Cleared %d top-up requests", deleted)
        return deleted

    @staticmethod
    def _to_domain(
        model: TopUpRequestModel,
        *,
        config: PaymentConfig | PaymentConfigModel | None = None,
        owner: UserModel | None = None,
    ) -> TopupRequest:
        return TopupRequest(
            id=model.id,
            user_id=model.user_id,
            payment_config_id=model.payment_config_id,
            amount_cents=model.amount_cents,
            currency=model.currency,
            status=model.status,
            created_at=model.created_at,
            payment_reference=model.payment_reference,
            customer_notes=model.customer_notes,
            payment_details=model.payment_details,
            admin_notes=model.admin_notes,
            approved_amount_cents=model.approved_amount_cents,
            reviewed_by=model.reviewed_by,
            reviewed_at=model.reviewed_at,
            user_email=owner.email if owner else None,
            user_name=owner.full_name if owner else None,
            company_name=owner.company_name if owner else None,
            payment_method=config.payment_method if config else None,
            payment_country=config.country if config else None,
        )
