"""
API tests for the admin maintenance endpoints.
"""

from __future__ import annotations


class TestResetSystem:
    async def test_reset_wipes_activity_and_restores_balances(
        self, client, admin, customer, headers_for, balance_cents
    ) -> None:
        placed = await client.post(
            "/api/balance/transactions",
            json={"amount": 75, "transaction_type": "debit"},
            headers=headers_for(customer),
        )
        assert placed.status_code == 201

        response = await client.post("/api/admin/reset-system", headers=headers_for(admin))
        assert response.status_code == 200
        body = response.json()
        assert body["resetBy"] == "admin@example.com"
        assert body["resetAt"]
        assert "Cleared 1 balance transactions" in body["operations"]
        assert "Reset balance for shipper@example.com: $1000.00" in body["operations"]

        assert await balance_cents(admin) == 200_000
        assert await balance_cents(customer) == 100_000
        ledger = await client.get("/api/balance/transactions", headers=headers_for(customer))
        assert ledger.json()["total"] == 0

    async def test_reset_restores_default_for_unfunded_users(
        self, client, admin, make_user, headers_for, balance_cents
    ) -> None:
        fresh = await make_user("fresh@example.com")
        await client.post("/api/admin/reset-system", headers=headers_for(admin))
        assert await balance_cents(fresh) == 100_000

    async def test_customer_forbidden(self, client, customer, headers_for) -> None:
        response = await client.post("/api/admin/reset-system", headers=headers_for(customer))
        assert response.status_code == 403


class TestClearTopups:
    async def test_nothing_to_clear(self, client, admin, headers_for) -> None:
        response = await client.delete("/api/admin/clear-topup-requests", headers=headers_for(admin))
        assert response.status_code == 200
        assert response.json()["deleted_count"] == 0

    async def test_customer_forbidden(self, client, customer, headers_for) -> None:
        response = await client.delete("/api/admin/clear-topup-requests", headers=headers_for(customer))
        assert response.status_code == 403
