"""Domain services for account management."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from freightdesk.core.config import get_settings
from freightdesk.core.crypto import hash_password, verify_password
from freightdesk.infrastructure.database.repositories.account_repository import SqlAccountRepository

from .exceptions import (
    AccountAlreadyExistsError,
    AccountInactiveError,
    AccountNotFoundError,
    AccountValidationError,
    InvalidCredentialsError,
)
from .models import UNSET, USER_TYPES, User, UserCreateInput, UserUpdateInput
from .repository import AccountRepository

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_email(email: str) -> str:
    normalized = normalize_email(email or "")
    if not EMAIL_PATTERN.match(normalized):
        raise AccountValidationError("Invalid email format")
    return normalized


def validate_password(password: str) -> None:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise AccountValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")


class AccountService:
    """Encapsulates core account use cases."""

    def __init__(self, repository: AccountRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "AccountService":
        return cls(SqlAccountRepository(session))

    async def get_by_id(self, user_id: str) -> User | None:
        return await self._repository.get_by_id(user_id)

    async def get_by_email(self, email: str) -> User | None:
        return await self._repository.get_by_email(normalize_email(email))

    async def require(self, user_id: str) -> User:
        user = await self._repository.get_by_id(user_id)
        if user is None:
            raise AccountNotFoundError(user_id)
        return user

    async def list_users(self, *, user_type: str | None = None, is_active: bool | None = None) -> Sequence[User]:
        return await self._repository.list_users(user_type=user_type, is_active=is_active)

    async def get_supervisor(self) -> User | None:
        """The account that carries the base-price leg of every order charge."""
        return await self._repository.get_supervisor()

    async def authenticate(self, email: str, password: str) -> User:
        user = await self._repository.get_by_email(normalize_email(email))
        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError("Invalid email or password")
        if not user.is_active:
            raise AccountInactiveError("Account is deactivated")
        await self._repository.set_last_login(user.id, datetime.now(timezone.utc))
        return user

    async def create_user(self, payload: UserCreateInput) -> User:
        email = validate_email(payload.email)
        validate_password(payload.password)
        if not payload.full_name or not payload.full_name.strip():
            raise AccountValidationError("Full name is required")
        if payload.user_type not in USER_TYPES:
            raise AccountValidationError(f"Unknown user type: {payload.user_type}")

        existing = await self._repository.get_by_email(email)
        if existing is not None:
            raise AccountAlreadyExistsError("User with this email already exists")

        user = await self._repository.create_user(
            email=email,
            password_hash=hash_password(payload.password),
            full_name=payload.full_name.strip(),
            company_name=payload.company_name,
            phone=payload.phone,
            user_type=payload.user_type,
            price_ratio=payload.price_ratio,
            is_active=payload.is_active,
            currency=get_settings().balances.currency,
        )
        logger.info("Created %s account %s", user.user_type, user.email)
        return user

    async def update_user(self, user_id: str, payload: UserUpdateInput) -> User:
        current = await self.require(user_id)
        fields: dict[str, object] = {}

        if payload.email is not UNSET and payload.email is not None:
            email = validate_email(payload.email)
            if email != current.email:
                existing = await self._repository.get_by_email(email)
                if existing is not None and existing.id != user_id:
                    raise AccountAlreadyExistsError("Email already in use by another user")
                fields["email"] = email
        if payload.full_name is not UNSET and payload.full_name:
            fields["full_name"] = payload.full_name.strip()
        if payload.company_name is not UNSET:
            fields["company_name"] = payload.company_name
        if payload.phone is not UNSET:
            fields["phone"] = payload.phone
        if payload.price_ratio is not UNSET and payload.price_ratio is not None:
            fields["price_ratio"] = float(payload.price_ratio)
        if payload.is_active is not UNSET and payload.is_active is not None:
            fields["is_active"] = payload.is_active
        if payload.password is not UNSET and payload.password is not None:
            validate_password(payload.password)
            fields["password_hash"] = hash_password(payload.password)

        if not fields:
            return current
        return await self._repository.update_user(user_id, **fields)

    async def change_password(self, user_id: str, current_password: str, new_password: str) -> None:
        user = await self.require(user_id)
        if not verify_password(current_password, user.password_hash):
            raise InvalidCredentialsError("Current password is incorrect")
        validate_password(new_password)
        await self._repository.update_user(user_id, password_hash=hash_password(new_password))

    async def reset_password(self, user_id: str, new_password: str) -> None:
        validate_password(new_password)
        await self.require(user_id)
        await self._repository.update_user(user_id, password_hash=hash_password(new_password))
        logger.info("Password reset completed for user %s", user_id)

    async def set_bonus_credit(self, user_id: str, bonus_credit_cents: int) -> User:
        return await self._repository.update_user(user_id, bonus_credit_cents=bonus_credit_cents)
