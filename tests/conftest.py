"""Shared pytest fixtures for the test suite.

Every API test runs against a fresh in-memory SQLite database with the
built-in roles seeded, a recording sample carrier and an unconfigured FedEx
client. Requests go through the real FastAPI app over an ASGI transport.

Fixture overview
----------------
session_factory   - async sessionmaker bound to the in-memory database
carrier           - sample carrier that records outbound bodies
client            - httpx.AsyncClient wired to the app with overrides
make_user         - factory creating an account (optionally funded)
admin / customer  - a funded supervisor admin and a 10% markup customer
headers_for       - bearer headers for a given user
balance_cents     - current balance of a user, read straight from the ledger
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any, Optional

import httpx
import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from freightdesk.core.config import FedexSettings
from freightdesk.core.security import create_access_token
from freightdesk.db import models  # noqa: F401
from freightdesk.infrastructure.carriers import CarrierError, FedexAddressClient, MockCarrierClient
from freightdesk.infrastructure.database.base import Base
from freightdesk.infrastructure.database.session import _configure_sqlite
from freightdesk.interfaces.http.deps import get_carrier, get_db_session, get_fedex
from freightdesk.main import create_app
from freightdesk.modules.accounts import USER_TYPE_ADMIN, USER_TYPE_CUSTOMER, AccountService, User, UserCreateInput
from freightdesk.modules.balances import BalanceService
from freightdesk.modules.roles import CUSTOMER_ROLE, SUPER_ADMIN_ROLE, RoleService

DEFAULT_PASSWORD = "secret123"


# ── Carrier double ───────────────────────────────────────────────────────────


class RecordingCarrier(MockCarrierClient):
    """Sample carrier that keeps every outbound body for assertions."""

    def __init__(self) -> None:
        super().__init__()
        self.quote_bodies: list[dict[str, Any]] = []
        self.placed_orders: list[dict[str, Any]] = []
        self.cancelled: list[str] = []
        self.place_error: Optional[CarrierError] = None
        self.audit_remarks: dict[str, str] = {}

    async def submit_ltl_quote(self, body: dict[str, Any]) -> str:
        self.quote_bodies.append(body)
        return "Q-LTL-1001"

    async def submit_fba_quote(self, body: dict[str, Any]) -> str:
        self.quote_bodies.append(body)
        return "Q-FBA-1001"

    async def submit_tl_quote(self, body: dict[str, Any]) -> tuple[str, list[dict[str, Any]]]:
        self.quote_bodies.append(body)
        return "Q-TL-1001", await self.get_rates("Q-TL-1001")

    async def place_order(self, body: dict[str, Any]) -> dict[str, Any]:
        if self.place_error is not None:
            raise self.place_error
        self.placed_orders.append(body)
        return await super().place_order(body)

    async def cancel_order(self, order_number: str) -> dict[str, Any]:
        self.cancelled.append(order_number)
        return await super().cancel_order(order_number)

    async def order_info(self, order_number: str) -> dict[str, Any]:
        info = await super().order_info(order_number)
        if order_number in self.audit_remarks:
            info["auditRemark"] = self.audit_remarks[order_number]
        return info

    def set_status(self, order_number: str, carrier_status: str, audit_remark: Optional[str] = None) -> None:
        self._orders[order_number] = carrier_status
        if audit_remark is not None:
            self.audit_remarks[order_number] = audit_remark


# ── Database ─────────────────────────────────────────────────────────────────


async def _seeded_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        await RoleService.with_session(session).seed_defaults()
        await session.commit()
    return factory


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Fresh in-memory schema with the built-in roles seeded."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    yield await _seeded_factory(engine)
    await engine.dispose()


@pytest.fixture
async def file_session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """On-disk schema where every session holds its own connection, for racing requests."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'freightdesk.db'}")
    event.listen(engine.sync_engine, "connect", _configure_sqlite)
    yield await _seeded_factory(engine)
    await engine.dispose()


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


# ── Application ──────────────────────────────────────────────────────────────


@pytest.fixture
def carrier() -> RecordingCarrier:
    return RecordingCarrier()


@pytest.fixture
async def fedex() -> AsyncGenerator[FedexAddressClient, None]:
    """FedEx client without credentials."""
    client = FedexAddressClient(FedexSettings())
    yield client
    await client.aclose()


@pytest.fixture
async def client(session_factory, carrier, fedex) -> AsyncGenerator[httpx.AsyncClient, None]:
    app = create_app()

    async def override_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_carrier] = lambda: carrier
    app.dependency_overrides[get_fedex] = lambda: fedex

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
        yield http


# ── Accounts ─────────────────────────────────────────────────────────────────


@pytest.fixture
def make_user(session_factory):
    async def _make(
        email: str,
        *,
        user_type: str = USER_TYPE_CUSTOMER,
        price_ratio: float = 0.0,
        balance_cents: int = 0,
        password: str = DEFAULT_PASSWORD,
        full_name: str = "Test User",
        company_name: Optional[str] = None,
    ) -> User:
        async with session_factory() as session:
            user = await AccountService.with_session(session).create_user(
                UserCreateInput(
                    email=email,
                    password=password,
                    full_name=full_name,
                    company_name=company_name,
                    user_type=user_type,
                    price_ratio=price_ratio,
                )
            )
            role = SUPER_ADMIN_ROLE if user_type == USER_TYPE_ADMIN else CUSTOMER_ROLE
            await RoleService.with_session(session).assign_role_by_name(user.id, role)
            if balance_cents:
                await BalanceService.with_session(session).reset_balance(user.id, balance_cents)
            await session.commit()
        return user

    return _make


@pytest.fixture
async def admin(make_user) -> User:
    """Supervisor admin holding $2,000."""
    return await make_user("admin@example.com", user_type=USER_TYPE_ADMIN, balance_cents=200_000, full_name="Admin")


@pytest.fixture
async def customer(make_user) -> User:
    """Customer with a 10% markup and $1,000 of balance."""
    return await make_user(
        "shipper@example.com",
        price_ratio=10.0,
        balance_cents=100_000,
        full_name="Shipper One",
        company_name="Acme Freight",
    )


@pytest.fixture
def headers_for():
    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id, user.user_type)}"}

    return _headers


@pytest.fixture
def balance_cents(session_factory):
    async def _balance(user: User) -> int:
        async with session_factory() as session:
            snapshot = await BalanceService.with_session(session).ensure_balance(user.id)
            await session.commit()
        return snapshot.current_balance_cents

    return _balance
