"""
API tests for the balance summary and the transaction ledger.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import update

from freightdesk.db.models import (
    BalanceTransaction as BalanceTransactionModel,
    User as UserModel,
    UserBalance as UserBalanceModel,
)
from freightdesk.modules.accounts import USER_TYPE_ADMIN
from freightdesk.modules.balances import TRANSACTION_DEBIT, BalanceService, InsufficientBalanceError


class TestBalanceSummary:
    async def test_summary_in_dollars(self, client, customer, headers_for) -> None:
        response = await client.get("/api/balance", headers=headers_for(customer))
        assert response.status_code == 200
        body = response.json()
        assert body["current_balance"] == 1000.0
        assert body["available_balance"] == 1000.0
        assert body["pending_balance"] == 0.0
        assert body["currency"] == "USD"

    async def test_new_user_starts_at_zero(self, client, make_user, headers_for) -> None:
        fresh = await make_user("fresh@example.com")
        response = await client.get("/api/balance", headers=headers_for(fresh))
        assert response.json()["current_balance"] == 0.0


class TestManualTransactions:
    async def test_credit_raises_balance(self, client, customer, headers_for, balance_cents) -> None:
        response = await client.post(
            "/api/balance/transactions",
            json={"amount": 12.34, "transaction_type": "credit", "description": "Wire received"},
            headers=headers_for(customer),
        )
        assert response.status_code == 201
        [entry] = response.json()["transactions"]
        assert entry["amount"] == 12.34
        assert re.fullmatch(r"TXN-\d{4}-\d{6}", entry["transaction_id"])
        assert await balance_cents(customer) == 100_000 + 1_234

    async def test_debit_is_stored_negative(self, client, customer, headers_for, balance_cents) -> None:
        response = await client.post(
            "/api/balance/transactions",
            json={"amount": 5, "transaction_type": "debit"},
            headers=headers_for(customer),
        )
        assert response.json()["transactions"][0]["amount"] == -5.0
        assert await balance_cents(customer) == 100_000 - 500

    async def test_transaction_ids_are_sequential(self, client, customer, headers_for) -> None:
        ids = []
        for _ in range(2):
            response = await client.post(
                "/api/balance/transactions",
                json={"amount": 1, "transaction_type": "credit"},
                headers=headers_for(customer),
            )
            ids.append(response.json()["transactions"][0]["transaction_id"])
        assert int(ids[1][-6:]) == int(ids[0][-6:]) + 1

    async def test_non_positive_amount_rejected(self, client, customer, headers_for) -> None:
        response = await client.post(
            "/api/balance/transactions",
            json={"amount": 0, "transaction_type": "credit"},
            headers=headers_for(customer),
        )
        assert response.status_code == 400

    async def test_unknown_type_rejected(self, client, customer, headers_for) -> None:
        response = await client.post(
            "/api/balance/transactions",
            json={"amount": 1, "transaction_type": "gift"},
            headers=headers_for(customer),
        )
        assert response.status_code == 400

    async def test_customer_cannot_post_dual_transaction(self, client, customer, headers_for) -> None:
        response = await client.post(
            "/api/balance/transactions",
            json={"amount": 10, "transaction_type": "debit", "create_dual_transaction": True},
            headers=headers_for(customer),
        )
        assert response.status_code == 403

    async def test_dual_transaction_adds_supervisor_leg(
        self, client, admin, make_user, headers_for, balance_cents, session_factory
    ) -> None:
        """A second admin posting a dual debit charges the supervisor at the base amount."""
        ops = await make_user("ops@example.com", user_type=USER_TYPE_ADMIN, balance_cents=50_000)
        async with session_factory() as session:
            later = datetime.now(timezone.utc) + timedelta(days=1)
            await session.execute(update(UserModel).where(UserModel.id == ops.id).values(created_at=later))
            await session.commit()

        response = await client.post(
            "/api/balance/transactions",
            json={
                "amount": 110,
                "base_amount": 100,
                "transaction_type": "debit",
                "description": "Manual freight charge",
                "create_dual_transaction": True,
            },
            headers=headers_for(ops),
        )
        assert response.status_code == 201
        legs = response.json()["transactions"]
        assert [(leg["user_id"], leg["amount"]) for leg in legs] == [(ops.id, -110.0), (admin.id, -100.0)]
        assert legs[1]["is_supervisor_transaction"] is True
        assert await balance_cents(ops) == 50_000 - 11_000
        assert await balance_cents(admin) == 200_000 - 10_000


class TestLedgerVisibility:
    async def _post(self, client, headers, amount: float, transaction_type: str = "credit", **extra) -> None:
        response = await client.post(
            "/api/balance/transactions",
            json={"amount": amount, "transaction_type": transaction_type, **extra},
            headers=headers,
        )
        assert response.status_code == 201

    async def test_customer_sees_only_own_entries(self, client, admin, customer, headers_for) -> None:
        await self._post(client, headers_for(customer), 3)
        await self._post(client, headers_for(admin), 4)

        response = await client.get("/api/balance/transactions", headers=headers_for(customer))
        body = response.json()
        assert body["total"] == 1
        assert body["transactions"][0]["user_id"] == customer.id
        assert body["balance"]["current_balance"] == 1003.0

    async def test_customer_cannot_query_other_user(self, client, admin, customer, headers_for) -> None:
        response = await client.get(
            "/api/balance/transactions",
            params={"user_id": admin.id},
            headers=headers_for(customer),
        )
        assert response.status_code == 403

    async def test_admin_filters_by_user(self, client, admin, customer, headers_for) -> None:
        await self._post(client, headers_for(customer), 3)
        await self._post(client, headers_for(admin), 4)

        response = await client.get(
            "/api/balance/transactions",
            params={"user_id": customer.id},
            headers=headers_for(admin),
        )
        assert [t["user_id"] for t in response.json()["transactions"]] == [customer.id]
        assert response.json()["balance"]["current_balance"] == 1003.0

    async def test_type_and_search_filters(self, client, customer, headers_for) -> None:
        headers = headers_for(customer)
        await self._post(client, headers, 3, description="Wire from bank")
        await self._post(client, headers, 2, "debit", description="Pallet jack rental")

        debits = await client.get("/api/balance/transactions", params={"type": "debit"}, headers=headers)
        assert [t["description"] for t in debits.json()["transactions"]] == ["Pallet jack rental"]

        found = await client.get("/api/balance/transactions", params={"search": "wire"}, headers=headers)
        assert [t["description"] for t in found.json()["transactions"]] == ["Wire from bank"]

    async def test_invalid_range_rejected(self, client, customer, headers_for) -> None:
        response = await client.get(
            "/api/balance/transactions",
            params={"range": "forever"},
            headers=headers_for(customer),
        )
        assert response.status_code == 400

    async def test_range_windows(self, client, customer, headers_for, session_factory) -> None:
        headers = headers_for(customer)
        await self._post(client, headers, 3, description="Old wire")
        await self._post(client, headers, 2, description="Fresh wire")
        async with session_factory() as session:
            earlier = datetime.now(timezone.utc) - timedelta(days=40)
            await session.execute(
                update(BalanceTransactionModel)
                .where(BalanceTransactionModel.description == "Old wire")
                .values(created_at=earlier)
            )
            await session.commit()

        async def descriptions(**params) -> set[str]:
            response = await client.get("/api/balance/transactions", params=params, headers=headers)
            assert response.status_code == 200
            return {t["description"] for t in response.json()["transactions"]}

        assert await descriptions(range="7days") == {"Fresh wire"}
        assert await descriptions() == {"Fresh wire"}
        assert await descriptions(range="90days") == {"Old wire", "Fresh wire"}
        assert await descriptions(range="all") == {"Old wire", "Fresh wire"}


class TestGuardedDebit:
    async def test_debit_beyond_available_refused(self, db_session, customer, balance_cents) -> None:
        balances = BalanceService.with_session(db_session)
        with pytest.raises(InsufficientBalanceError):
            await balances.post(
                customer,
                amount_cents=-100_001,
                transaction_type=TRANSACTION_DEBIT,
                require_available=True,
            )
        await db_session.rollback()
        assert await balance_cents(customer) == 100_000

    async def test_pending_balance_is_not_available(self, db_session, customer, session_factory) -> None:
        async with session_factory() as session:
            await session.execute(
                update(UserBalanceModel)
                .where(UserBalanceModel.user_id == customer.id)
                .values(pending_balance_cents=60_000)
            )
            await session.commit()

        balances = BalanceService.with_session(db_session)
        with pytest.raises(InsufficientBalanceError):
            await balances.post(customer, amount_cents=-50_000, transaction_type=TRANSACTION_DEBIT, require_available=True)
        await db_session.rollback()

        record = await balances.post(
            customer,
            amount_cents=-40_000,
            transaction_type=TRANSACTION_DEBIT,
            require_available=True,
        )
        await db_session.commit()
        assert record.amount_cents == -40_000
        snapshot = await balances.ensure_balance(customer.id)
        assert snapshot.current_balance_cents == 60_000

    async def test_unguarded_debit_may_overdraw(self, db_session, customer) -> None:
        balances = BalanceService.with_session(db_session)
        await balances.post(customer, amount_cents=-150_000, transaction_type=TRANSACTION_DEBIT)
        await db_session.commit()
        snapshot = await balances.ensure_balance(customer.id)
        assert snapshot.current_balance_cents == -50_000
