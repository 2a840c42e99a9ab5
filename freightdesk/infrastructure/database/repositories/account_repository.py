"""SQLAlchemy implementation of the account repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from freightdesk.db.models import User as UserModel, UserBalance as UserBalanceModel
from freightdesk.modules.accounts.exceptions import AccountNotFoundError
from freightdesk.modules.accounts.models import USER_TYPE_ADMIN, User
from freightdesk.modules.accounts.repository import AccountRepository

_UPDATABLE_FIELDS = frozenset(
    {
        "email",
        "full_name",
        "company_name",
        "phone",
        "price_ratio",
        "bonus_credit_cents",
        "is_active",
        "password_hash",
        "user_type",
    }
)


class SqlAccountRepository(AccountRepository):
    """Account repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, user_id: str) -> User | None:
        model = await self._session.get(UserModel, user_id)
        return self._to_domain(model)

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(UserModel).where(UserModel.email == email)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def list_users(
        self,
        *,
        user_type: str | None = None,
        is_active: bool | None = None,
    ) -> Sequence[User]:
        stmt = select(UserModel)
        if user_type is not None:
            stmt = stmt.where(UserModel.user_type == user_type)
        if is_active is not None:
            stmt = stmt.where(UserModel.is_active.is_(is_active))
        stmt = stmt.order_by(UserModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def get_supervisor(self) -> User | None:
        stmt = (
            select(UserModel)
            .where(UserModel.user_type == USER_TYPE_ADMIN, UserModel.is_active.is_(True))
            .order_by(UserModel.created_at.asc(), UserModel.id.asc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def create_user(
        self,
        *,
        email: str,
        password_hash: str,
        full_name: str,
        company_name: str | None,
        phone: str | None,
        user_type: str,
        price_ratio: float,
        is_active: bool,
        currency: str,
    ) -> User:
        model = UserModel(
            email=email,
            password_hash=password_hash,
            full_name=full_name,
            company_name=company_name,
            phone=phone,
            user_type=user_type,
            price_ratio=price_ratio,
            bonus_credit_cents=0,
            is_active=is_active,
        )
        self._session.add(model)
        await self._session.flush()
        self._session.add(UserBalanceModel(user_id=model.id, currency=currency))
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def update_user(self, user_id: str, **fields: Any) -> User:
        model = await self._session.get(UserModel, user_id)
        if model is None:
            raise AccountNotFoundError(user_id)
        for name, value in fields.items():
            if name not in _UPDATABLE_FIELDS:
                raise ValueError(f"Field {name} cannot be updated")
            setattr(model, name, value)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def set_last_login(self, user_id: str, timestamp: datetime) -> None:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(last_login_at=timestamp)
        )
        await self._session.execute(stmt)

    @staticmethod
    def _to_domain(model: UserModel | None) -> User | None:
        if model is None:
            return None
        return User(
            id=str(model.id),
            email=model.email,
            full_name=model.full_name,
            user_type=model.user_type or "customer",
            is_active=bool(model.is_active),
            password_hash=model.password_hash,
            company_name=model.company_name,
            phone=model.phone,
            price_ratio=float(model.price_ratio or 0.0),
            bonus_credit_cents=int(model.bonus_credit_cents or 0),
            created_at=model.created_at,
            updated_at=model.updated_at,
            last_login_at=model.last_login_at,
        )
