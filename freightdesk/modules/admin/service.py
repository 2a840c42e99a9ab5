"""Maintenance operations that span every module."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from freightdesk.core.config import get_settings
from freightdesk.infrastructure.carriers import CarrierClient
from freightdesk.modules.accounts.models import User
from freightdesk.modules.accounts.service import AccountService
from freightdesk.modules.balances.service import BalanceService
from freightdesk.modules.orders.service import OrderService
from freightdesk.modules.topups.service import TopupService

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ResetReport:
    reset_by: str
    reset_at: datetime
    operations: list[str] = field(default_factory=list)


@dataclass(slots=True)
class SystemService:
    accounts: AccountService
    balances: BalanceService
    orders: OrderService
    topups: TopupService

    @classmethod
    def with_session(cls, session: AsyncSession, carrier: CarrierClient) -> "SystemService":
        return cls(
            accounts=AccountService.with_session(session),
            balances=BalanceService.with_session(session),
            orders=OrderService.with_session(session, carrier),
            topups=TopupService.with_session(session),
        )

    async def reset_system(self, admin: User) -> ResetReport:
        """Wipe ledger, orders and top-ups, then restore every balance to its default."""
        settings = get_settings().balances
        report = ResetReport(reset_by=admin.email, reset_at=datetime.now(timezone.utc))

        transactions = await self.balances.delete_all_transactions()
        report.operations.append(f"Cleared {transactions} balance transactions")

        orders, items = await self.orders.delete_all()
        report.operations.append(f"Cleared {orders} orders and {items} order items")

        topups = await self.topups.clear_all()
        report.operations.append(f"Cleared {topups} top-up requests")

        for user in await self.accounts.list_users():
            amount = settings.admin_reset_cents if user.is_admin() else settings.customer_reset_cents
            await self.balances.reset_balance(user.id, amount)
            report.operations.append(f"Reset balance for {user.email}: ${amount / 100:.2f}")

        logger.warning("System reset by %s (%d operations)", admin.email, len(report.operations))
        return report

    async def clear_topup_requests(self, admin: User) -> int:
        deleted = await self.topups.clear_all()
        logger.info("Admin %s cleared %d top-up requests", admin.id, deleted)
        return deleted
