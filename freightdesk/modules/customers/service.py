"""Admin use cases over customer accounts.

Customers are ordinary accounts with ``user_type == "customer"``. This service
ties the account, role and balance modules together so that creating or
editing a customer keeps its role link and bonus-credit ledger in step.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from freightdesk.modules.accounts.models import (
    UNSET,
    USER_TYPE_CUSTOMER,
    User,
    UserCreateInput,
    UserUpdateInput,
)
from freightdesk.modules.accounts.service import AccountService
from freightdesk.modules.balances.models import TRANSACTION_CREDIT
from freightdesk.modules.balances.service import BalanceService
from freightdesk.modules.roles.defaults import CUSTOMER_ROLE
from freightdesk.modules.roles.service import RoleService

from .exceptions import CustomerNotFoundError, CustomerValidationError
from .models import (
    MAX_PRICE_RATIO,
    MIN_PRICE_RATIO,
    Customer,
    CustomerCreateInput,
    CustomerUpdateInput,
)

logger = logging.getLogger(__name__)


def _check_price_ratio(value: float) -> float:
    ratio = float(value)
    if ratio < MIN_PRICE_RATIO or ratio > MAX_PRICE_RATIO:
        raise CustomerValidationError(
            f"Price ratio must be between {MIN_PRICE_RATIO} and {MAX_PRICE_RATIO}"
        )
    return ratio


@dataclass(slots=True)
class CustomerService:
    accounts: AccountService
    roles: RoleService
    balances: BalanceService

    @classmethod
    def with_session(cls, session: AsyncSession) -> "CustomerService":
        return cls(
            accounts=AccountService.with_session(session),
            roles=RoleService.with_session(session),
            balances=BalanceService.with_session(session),
        )

    async def list_customers(self, is_active: Optional[bool] = None) -> list[Customer]:
        users = await self.accounts.list_users(user_type=USER_TYPE_CUSTOMER, is_active=is_active)
        role_ids = await self.roles.role_ids_for_users([user.id for user in users])
        customers = []
        for user in users:
            balance = await self.balances.ensure_balance(user.id)
            customers.append(Customer(user=user, balance=balance, role_id=role_ids.get(user.id)))
        return customers

    async def get_customer(self, customer_id: str) -> Customer:
        user = await self._require_customer(customer_id)
        role_ids = await self.roles.role_ids_for_users([user.id])
        balance = await self.balances.ensure_balance(user.id)
        return Customer(user=user, balance=balance, role_id=role_ids.get(user.id))

    async def create_customer(self, payload: CustomerCreateInput) -> Customer:
        ratio = _check_price_ratio(payload.price_ratio or 0)
        if payload.bonus_credit_cents < 0:
            raise CustomerValidationError("Bonus credit cannot be negative")

        user = await self.accounts.create_user(
            UserCreateInput(
                email=payload.email,
                password=payload.password,
                full_name=payload.full_name,
                company_name=payload.company_name,
                phone=payload.phone,
                user_type=USER_TYPE_CUSTOMER,
                price_ratio=ratio,
            )
        )

        if payload.role_id:
            await self.roles.assign_role(user.id, payload.role_id)
        else:
            await self.roles.assign_role_by_name(user.id, CUSTOMER_ROLE)

        if payload.bonus_credit_cents > 0:
            user = await self.accounts.set_bonus_credit(user.id, payload.bonus_credit_cents)
            await self.balances.post(
                user,
                amount_cents=payload.bonus_credit_cents,
                transaction_type=TRANSACTION_CREDIT,
                description="Initial bonus credit",
            )

        logger.info("Created customer %s", user.email)
        return await self.get_customer(user.id)

    async def update_customer(self, customer_id: str, payload: CustomerUpdateInput) -> Customer:
        current = await self._require_customer(customer_id)

        price_ratio = payload.price_ratio
        if price_ratio is not UNSET and price_ratio is not None:
            price_ratio = _check_price_ratio(price_ratio)

        user = await self.accounts.update_user(
            customer_id,
            UserUpdateInput(
                email=payload.email,
                full_name=payload.full_name,
                company_name=payload.company_name,
                phone=payload.phone,
                price_ratio=price_ratio,
                is_active=payload.is_active,
            ),
        )

        bonus = payload.bonus_credit_cents
        if bonus is not UNSET and bonus is not None:
            if bonus < 0:
                raise CustomerValidationError("Bonus credit cannot be negative")
            if bonus != current.bonus_credit_cents:
                user = await self.accounts.set_bonus_credit(customer_id, bonus)
                await self.balances.adjust_bonus(user, current.bonus_credit_cents, bonus)

        if payload.role_id is not UNSET:
            await self.roles.assign_role(customer_id, payload.role_id or None)

        return await self.get_customer(user.id)

    async def deactivate_customer(self, customer_id: str) -> None:
        await self._require_customer(customer_id)
        await self.accounts.update_user(customer_id, UserUpdateInput(is_active=False))
        logger.info("Deactivated customer %s", customer_id)

    async def _require_customer(self, customer_id: str) -> User:
        user = await self.accounts.get_by_id(customer_id)
        if user is None or not user.is_customer():
            raise CustomerNotFoundError("Customer not found")
        return user
