"""
API tests for payment configurations and the top-up request workflow.
"""

from __future__ import annotations

import asyncio

import pytest

ACH_US = {
    "country": "us",
    "payment_method": "ACH",
    "account_name": "Freightdesk LLC",
    "account_number": "000123456789",
    "bank_name": "First Bank",
    "routing_number": "021000021",
}


@pytest.fixture
async def payment_config(client, admin, headers_for) -> dict:
    response = await client.post("/api/admin/payment-config", json=ACH_US, headers=headers_for(admin))
    assert response.status_code == 201
    return response.json()


@pytest.fixture
async def pending_topup(client, customer, headers_for, payment_config) -> dict:
    response = await client.post(
        "/api/top-up/submit",
        json={"payment_config_id": payment_config["id"], "amount": 250, "payment_reference": "WIRE-77"},
        headers=headers_for(customer),
    )
    assert response.status_code == 201
    return response.json()


# ── Payment configurations ───────────────────────────────────────────────────


class TestPaymentConfig:
    async def test_create_uppercases_country(self, payment_config, admin) -> None:
        assert payment_config["country"] == "US"
        assert payment_config["admin_id"] == admin.id
        assert payment_config["is_active"] is True

    async def test_missing_fields(self, client, admin, headers_for) -> None:
        response = await client.post(
            "/api/admin/payment-config",
            json={"country": "US", "payment_method": "ACH"},
            headers=headers_for(admin),
        )
        assert response.status_code == 400
        assert "account_name" in response.json()["detail"]

    async def test_duplicate_country_and_method(self, client, admin, headers_for, payment_config) -> None:
        response = await client.post(
            "/api/admin/payment-config",
            json={**ACH_US, "country": "US", "account_name": "Other"},
            headers=headers_for(admin),
        )
        assert response.status_code == 409

    async def test_update_and_deactivate(self, client, admin, customer, headers_for, payment_config) -> None:
        response = await client.put(
            f"/api/admin/payment-config/{payment_config['id']}",
            json={"is_active": False, "additional_info": "Closed for audit"},
            headers=headers_for(admin),
        )
        assert response.status_code == 200
        assert response.json()["is_active"] is False
        assert response.json()["account_name"] == "Freightdesk LLC"

        active = await client.get("/api/top-up/payment-configs", headers=headers_for(customer))
        assert active.json() == []

    async def test_unknown_config_not_found(self, client, admin, headers_for) -> None:
        response = await client.put(
            "/api/admin/payment-config/missing",
            json={"bank_name": "X"},
            headers=headers_for(admin),
        )
        assert response.status_code == 404

    async def test_delete_unused(self, client, admin, headers_for, payment_config) -> None:
        response = await client.delete(f"/api/admin/payment-config/{payment_config['id']}", headers=headers_for(admin))
        assert response.status_code == 200
        listed = await client.get("/api/admin/payment-config", headers=headers_for(admin))
        assert listed.json() == []

    async def test_delete_in_use_conflicts(self, client, admin, headers_for, payment_config, pending_topup) -> None:
        response = await client.delete(f"/api/admin/payment-config/{payment_config['id']}", headers=headers_for(admin))
        assert response.status_code == 409

    async def test_customer_cannot_manage(self, client, customer, headers_for) -> None:
        response = await client.post("/api/admin/payment-config", json=ACH_US, headers=headers_for(customer))
        assert response.status_code == 403

    async def test_countries_for_top_up_form(self, client, admin, customer, headers_for, payment_config) -> None:
        await client.post(
            "/api/admin/payment-config",
            json={**ACH_US, "country": "CN", "payment_method": "Alipay"},
            headers=headers_for(admin),
        )
        response = await client.get("/api/top-up/countries", headers=headers_for(customer))
        assert sorted((c["code"], c["name"]) for c in response.json()) == [
            ("CN", "China"),
            ("US", "United States"),
        ]

        filtered = await client.get(
            "/api/top-up/payment-configs",
            params={"country": "cn"},
            headers=headers_for(customer),
        )
        assert [c["payment_method"] for c in filtered.json()] == ["Alipay"]


# ── Top-up requests ──────────────────────────────────────────────────────────


class TestSubmit:
    async def test_submit_creates_pending_request(self, pending_topup, customer) -> None:
        assert pending_topup["status"] == "pending"
        assert pending_topup["amount"] == 250.0
        assert pending_topup["user_id"] == customer.id
        assert pending_topup["payment_method"] == "ACH"

    async def test_submit_does_not_touch_balance(self, pending_topup, customer, balance_cents) -> None:
        assert await balance_cents(customer) == 100_000

    async def test_admin_cannot_submit(self, client, admin, headers_for, payment_config) -> None:
        response = await client.post(
            "/api/top-up/submit",
            json={"payment_config_id": payment_config["id"], "amount": 10},
            headers=headers_for(admin),
        )
        assert response.status_code == 403

    async def test_unknown_config(self, client, customer, headers_for) -> None:
        response = await client.post(
            "/api/top-up/submit",
            json={"payment_config_id": "missing", "amount": 10},
            headers=headers_for(customer),
        )
        assert response.status_code == 400

    async def test_non_positive_amount(self, client, customer, headers_for, payment_config) -> None:
        response = await client.post(
            "/api/top-up/submit",
            json={"payment_config_id": payment_config["id"], "amount": -5},
            headers=headers_for(customer),
        )
        assert response.status_code == 400

    async def test_history_lists_own_requests(self, client, customer, headers_for, pending_topup) -> None:
        response = await client.get("/api/top-up/history", headers=headers_for(customer))
        assert [r["id"] for r in response.json()["requests"]] == [pending_topup["id"]]


class TestReview:
    async def test_review_queue_filters_by_status(self, client, admin, headers_for, pending_topup) -> None:
        pending = await client.get("/api/admin/top-up/review", params={"status": "pending"}, headers=headers_for(admin))
        assert [r["id"] for r in pending.json()["requests"]] == [pending_topup["id"]]
        assert pending.json()["requests"][0]["user_email"] == "shipper@example.com"

        approved = await client.get(
            "/api/admin/top-up/review",
            params={"status": "approved"},
            headers=headers_for(admin),
        )
        assert approved.json()["requests"] == []

    async def test_approve_credits_reviewed_amount(
        self, client, admin, customer, headers_for, balance_cents, pending_topup
    ) -> None:
        """The admin may approve a different amount than the customer declared."""
        response = await client.post(
            "/api/admin/top-up/review",
            json={"request_id": pending_topup["id"], "action": "approve", "amount": 240, "notes": "Fee deducted"},
            headers=headers_for(admin),
        )
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "approved"
        assert body["approved_amount"] == 240.0
        assert body["reviewed_by"] == admin.id
        assert await balance_cents(customer) == 100_000 + 24_000

        ledger = await client.get("/api/balance/transactions", headers=headers_for(customer))
        [entry] = ledger.json()["transactions"]
        assert entry["transaction_type"] == "credit"
        assert entry["reference_id"] == pending_topup["id"]

    async def test_approve_requires_amount(self, client, admin, headers_for, pending_topup) -> None:
        response = await client.post(
            "/api/admin/top-up/review",
            json={"request_id": pending_topup["id"], "action": "approve"},
            headers=headers_for(admin),
        )
        assert response.status_code == 400

    async def test_reject_requires_reason(self, client, admin, headers_for, pending_topup) -> None:
        response = await client.post(
            "/api/admin/top-up/review",
            json={"request_id": pending_topup["id"], "action": "reject", "notes": "  "},
            headers=headers_for(admin),
        )
        assert response.status_code == 400

    async def test_reject_leaves_balance(self, client, admin, customer, headers_for, balance_cents, pending_topup) -> None:
        response = await client.post(
            "/api/admin/top-up/review",
            json={"request_id": pending_topup["id"], "action": "reject", "notes": "Payment not received"},
            headers=headers_for(admin),
        )
        assert response.json()["status"] == "rejected"
        assert response.json()["admin_notes"] == "Payment not received"
        assert await balance_cents(customer) == 100_000

    async def test_request_reviewed_only_once(self, client, admin, headers_for, pending_topup) -> None:
        approve = {"request_id": pending_topup["id"], "action": "approve", "amount": 250}
        first = await client.post("/api/admin/top-up/review", json=approve, headers=headers_for(admin))
        second = await client.post("/api/admin/top-up/review", json=approve, headers=headers_for(admin))
        assert first.status_code == 200
        assert second.status_code == 400

    async def test_unknown_action(self, client, admin, headers_for, pending_topup) -> None:
        response = await client.post(
            "/api/admin/top-up/review",
            json={"request_id": pending_topup["id"], "action": "escalate"},
            headers=headers_for(admin),
        )
        assert response.status_code == 400

    async def test_unknown_request(self, client, admin, headers_for) -> None:
        response = await client.post(
            "/api/admin/top-up/review",
            json={"request_id": "missing", "action": "reject", "notes": "x"},
            headers=headers_for(admin),
        )
        assert response.status_code == 404

    async def test_clear_requests(self, client, admin, customer, headers_for, pending_topup) -> None:
        response = await client.delete("/api/admin/clear-topup-requests", headers=headers_for(admin))
        assert response.json()["deleted_count"] == 1

        history = await client.get("/api/top-up/history", headers=headers_for(customer))
        assert history.json()["requests"] == []


class TestConcurrentReview:
    @pytest.fixture
    def session_factory(self, file_session_factory):
        return file_session_factory

    async def test_parallel_approvals_credit_once(
        self, client, admin, customer, headers_for, balance_cents, pending_topup
    ) -> None:
        approve = {"request_id": pending_topup["id"], "action": "approve", "amount": 10}
        responses = await asyncio.gather(
            *(client.post("/api/admin/top-up/review", json=approve, headers=headers_for(admin)) for _ in range(2))
        )
        assert sorted(r.status_code for r in responses) == [200, 400]
        assert await balance_cents(customer) == 100_000 + 1_000

        ledger = await client.get("/api/balance/transactions", headers=headers_for(customer))
        assert [t["reference_id"] for t in ledger.json()["transactions"]] == [pending_topup["id"]]

    async def test_parallel_approve_and_reject(
        self, client, admin, customer, headers_for, balance_cents, pending_topup
    ) -> None:
        approve = {"request_id": pending_topup["id"], "action": "approve", "amount": 250}
        reject = {"request_id": pending_topup["id"], "action": "reject", "notes": "Duplicate wire"}
        responses = await asyncio.gather(
            client.post("/api/admin/top-up/review", json=approve, headers=headers_for(admin)),
            client.post("/api/admin/top-up/review", json=reject, headers=headers_for(admin)),
        )
        [winner] = [r.json() for r in responses if r.status_code == 200]
        credited = 25_000 if winner["status"] == "approved" else 0
        assert await balance_cents(customer) == 100_000 + credited
