"""
API tests for order placement, the order lifecycle and the two-leg ledger.

Placing an order debits the customer at their marked-up price and the
supervisor admin at the carrier's base price; every refund mirrors both legs.
The sample carrier quotes rate 000001 at $485.50, so the 10% customer pays
$534.05.
"""

from __future__ import annotations

import asyncio

import pytest

from freightdesk.infrastructure.carriers import CarrierConfigurationError, CarrierError
from freightdesk.modules.balances import BalanceService


def place_payload(**overrides) -> dict:
    payload = {
        "orderId": "Q-LTL-1001",
        "rateId": "000001",
        "carrierSCAC": "RDWY",
        "carrierGuarantee": "Standard",
        "customerDump": 0,
        "quoteSubmissionData": {
            "serviceType": "LTL",
            "pickupDate": "2026-10-16",
            "originAddress": {
                "address_name": "Main Warehouse",
                "address_line1": "100 Industrial Way",
                "city": "Columbus",
                "state": "OH",
                "postal_code": "43215",
                "address_classification": "Commercial",
            },
            "destinationAddress": {
                "address_name": "Retail Store",
                "address_line1": "9 Market St",
                "city": "Denver",
                "state": "CO",
                "postal_code": "80202",
                "address_classification": "Residential",
            },
            "packageItems": [
                {
                    "packageName": "Machine parts",
                    "totalPallet": 2,
                    "totalPackage": 4,
                    "length": 48,
                    "width": 40,
                    "height": 36,
                    "weight": 500,
                    "packageType": "Pallet",
                }
            ],
        },
        "contactInfo": {"name": "Pat Shipper", "email": "pat@example.com", "phone": "(614) 555-0100"},
    }
    payload.update(overrides)
    return payload


@pytest.fixture
async def placed_order(client, admin, customer, headers_for) -> dict:
    response = await client.post("/api/orders/place", json=place_payload(), headers=headers_for(customer))
    assert response.status_code == 201
    return response.json()


async def order_detail(client, headers, order_id: str) -> dict:
    response = await client.get(f"/api/orders/{order_id}", headers=headers)
    assert response.status_code == 200
    return response.json()


# ── Placement ────────────────────────────────────────────────────────────────


class TestPlaceOrder:
    async def test_charges_both_legs(self, client, admin, customer, headers_for, balance_cents, placed_order) -> None:
        assert placed_order["orderId"] == "Q-LTL-1001"
        assert await balance_cents(customer) == 100_000 - 53_405
        assert await balance_cents(admin) == 200_000 - 48_550

    async def test_order_record(self, client, customer, headers_for, placed_order) -> None:
        order = await order_detail(client, headers_for(customer), placed_order["dbOrderId"])
        assert order["status"] == "pending_review"
        assert order["total_amount"] == 534.05
        assert order["base_amount"] is None
        assert order["carrier_name"] == "YRC Freight"
        assert order["service_type"] == "LTL"
        # Friday pickup plus two business days of transit
        assert order["estimated_delivery_date"] == "2026-10-20"
        assert order["origin"]["contact_name"] == "Pat Shipper"
        [item] = order["items"]
        assert item["description"] == "Machine parts"
        assert item["total_weight"] == 1000.0
        assert item["freight_class"]

    async def test_admin_sees_base_amount(self, client, admin, headers_for, placed_order) -> None:
        order = await order_detail(client, headers_for(admin), placed_order["dbOrderId"])
        assert order["base_amount"] == 485.5

    async def test_carrier_receives_order_body(self, carrier, placed_order) -> None:
        [body] = carrier.placed_orders
        assert body["orderId"] == "Q-LTL-1001"
        assert body["originType"] == "BUSINESS"
        assert body["destinationType"] == "RESIDENTIAL"
        assert body["originDate"] == "2026-10-16"
        assert body["referenceNumber"]
        assert (body["originTimeFrom"], body["originTimeTo"]) == ("08:30", "17:30")

    async def test_time_windows_sent_as_24_hour(self, client, customer, headers_for, carrier) -> None:
        payload = place_payload(originTimeFrom="9:00 AM", originTimeTo="3:30 PM", destinationTimeFrom="07:00")
        response = await client.post("/api/orders/place", json=payload, headers=headers_for(customer))
        assert response.status_code == 201
        [body] = carrier.placed_orders
        assert (body["originTimeFrom"], body["originTimeTo"]) == ("09:00", "15:30")
        assert body["destinationTimeFrom"] == "07:00"

    async def test_ledger_views(self, client, admin, customer, headers_for, placed_order) -> None:
        mine = await client.get("/api/balance/transactions", headers=headers_for(customer))
        assert [(t["transaction_type"], t["amount"]) for t in mine.json()["transactions"]] == [("debit", -534.05)]

        supervisor = await client.get("/api/balance/transactions", headers=headers_for(admin))
        [leg] = supervisor.json()["transactions"]
        assert leg["amount"] == -485.5
        assert leg["is_supervisor_transaction"] is True
        assert leg["order_number"] == "Q-LTL-1001"

    async def test_unknown_rate_uses_selected_quote_price(
        self, client, admin, customer, headers_for, balance_cents
    ) -> None:
        """The selected price is the customer's; the base leg backs the markup out."""
        response = await client.post(
            "/api/orders/place",
            json=place_payload(rateId="999999", selectedQuoteData={"totalCharge": "600.00", "carrierName": "Saia"}),
            headers=headers_for(customer),
        )
        assert response.status_code == 201
        assert await balance_cents(customer) == 100_000 - 60_000
        assert await balance_cents(admin) == 200_000 - 54_545

    async def test_unknown_rate_without_price_rejected(self, client, customer, headers_for) -> None:
        response = await client.post("/api/orders/place", json=place_payload(rateId="999999"), headers=headers_for(customer))
        assert response.status_code == 400

    async def test_admin_order_has_single_leg(self, client, admin, headers_for, balance_cents) -> None:
        response = await client.post("/api/orders/place", json=place_payload(), headers=headers_for(admin))
        assert response.status_code == 201
        assert await balance_cents(admin) == 200_000 - 48_550

        ledger = await client.get("/api/balance/transactions", headers=headers_for(admin))
        assert ledger.json()["total"] == 1


class TestPlaceOrderFailures:
    async def test_insufficient_balance(self, client, admin, make_user, headers_for, balance_cents, carrier) -> None:
        poor = await make_user("poor@example.com", balance_cents=10_000)
        response = await client.post("/api/orders/place", json=place_payload(), headers=headers_for(poor))
        assert response.status_code == 402
        assert carrier.placed_orders == []
        assert await balance_cents(admin) == 200_000

    @pytest.mark.parametrize("field", ["rateId", "carrierSCAC", "quoteSubmissionData", "contactInfo"])
    async def test_missing_required_field(self, client, customer, headers_for, field) -> None:
        payload = place_payload()
        del payload[field]
        response = await client.post("/api/orders/place", json=payload, headers=headers_for(customer))
        assert response.status_code == 400

    async def test_incomplete_contact(self, client, customer, headers_for) -> None:
        response = await client.post(
            "/api/orders/place",
            json=place_payload(contactInfo={"name": "Pat", "email": "pat@example.com"}),
            headers=headers_for(customer),
        )
        assert response.status_code == 400

    async def test_carrier_failure_charges_nothing(self, client, customer, headers_for, balance_cents, carrier) -> None:
        carrier.place_error = CarrierError("Carrier order placement failed", status_code=500)
        response = await client.post("/api/orders/place", json=place_payload(), headers=headers_for(customer))
        assert response.status_code == 502
        assert await balance_cents(customer) == 100_000

        orders = await client.get("/api/orders", headers=headers_for(customer))
        assert orders.json()["total"] == 0

    @pytest.mark.parametrize(
        "window",
        [
            {"originTimeFrom": "17:00", "originTimeTo": "08:00"},
            {"destinationTimeFrom": "4:00 PM", "destinationTimeTo": "9:00 AM"},
        ],
    )
    async def test_inverted_time_window(self, client, customer, headers_for, balance_cents, carrier, window) -> None:
        response = await client.post("/api/orders/place", json=place_payload(**window), headers=headers_for(customer))
        assert response.status_code == 400
        assert "time window" in response.json()["detail"]
        assert carrier.placed_orders == []
        assert await balance_cents(customer) == 100_000

    async def test_balance_drained_after_check(
        self, client, admin, make_user, headers_for, balance_cents, carrier, monkeypatch
    ) -> None:
        """The debit itself re-checks the available balance and releases the carrier booking."""

        async def skip_check(self, user, amount_cents):
            return None

        monkeypatch.setattr(BalanceService, "ensure_can_afford", skip_check)
        poor = await make_user("poor@example.com", balance_cents=10_000)

        response = await client.post("/api/orders/place", json=place_payload(), headers=headers_for(poor))
        assert response.status_code == 402
        assert carrier.cancelled == ["Q-LTL-1001"]
        assert await balance_cents(poor) == 10_000
        assert await balance_cents(admin) == 200_000

        orders = await client.get("/api/orders", headers=headers_for(poor))
        assert orders.json()["total"] == 0

    async def test_carrier_not_configured(self, client, customer, headers_for, carrier) -> None:
        carrier.place_error = CarrierConfigurationError("Carrier API credentials not configured")
        response = await client.post("/api/orders/place", json=place_payload(), headers=headers_for(customer))
        assert response.status_code == 503


# ── Lifecycle ────────────────────────────────────────────────────────────────


class TestListAndAccess:
    async def test_customer_lists_own_orders(self, client, customer, make_user, headers_for, placed_order) -> None:
        other = await make_user("other@example.com", balance_cents=100_000)
        await client.post("/api/orders/place", json=place_payload(orderId="Q-LTL-2002"), headers=headers_for(other))

        response = await client.get("/api/orders", headers=headers_for(customer))
        assert [o["order_number"] for o in response.json()["orders"]] == ["Q-LTL-1001"]

    async def test_admin_lists_everything(self, client, admin, make_user, headers_for, placed_order) -> None:
        other = await make_user("other@example.com", balance_cents=100_000)
        await client.post("/api/orders/place", json=place_payload(orderId="Q-LTL-2002"), headers=headers_for(other))

        response = await client.get("/api/orders", headers=headers_for(admin))
        assert response.json()["total"] == 2

    async def test_status_filter(self, client, customer, headers_for, placed_order) -> None:
        response = await client.get("/api/orders", params={"status": "delivered"}, headers=headers_for(customer))
        assert response.json()["orders"] == []

    async def test_other_customer_gets_not_found(self, client, make_user, headers_for, placed_order) -> None:
        stranger = await make_user("stranger@example.com")
        response = await client.get(f"/api/orders/{placed_order['dbOrderId']}", headers=headers_for(stranger))
        assert response.status_code == 404


class TestCancel:
    async def test_cancel_refunds_both_legs(
        self, client, admin, customer, headers_for, balance_cents, carrier, placed_order
    ) -> None:
        response = await client.post(f"/api/orders/{placed_order['dbOrderId']}/cancel", headers=headers_for(customer))
        assert response.status_code == 200
        order = response.json()["order"]
        assert order["status"] == "cancelled"
        assert order["refund_status"] == "refunded"
        assert order["audit_remark"] == "Customer cancelled"
        assert carrier.cancelled == ["Q-LTL-1001"]
        assert await balance_cents(customer) == 100_000
        assert await balance_cents(admin) == 200_000

    async def test_cancel_only_from_pending_review(self, client, customer, headers_for, carrier, placed_order) -> None:
        carrier.set_status("Q-LTL-1001", "To be picked")
        await client.post(f"/api/orders/{placed_order['dbOrderId']}/sync", headers=headers_for(customer))

        response = await client.post(f"/api/orders/{placed_order['dbOrderId']}/cancel", headers=headers_for(customer))
        assert response.status_code == 400
        assert carrier.cancelled == []

    async def test_second_cancel_rejected(self, client, customer, headers_for, placed_order) -> None:
        url = f"/api/orders/{placed_order['dbOrderId']}/cancel"
        await client.post(url, headers=headers_for(customer))
        again = await client.post(url, headers=headers_for(customer))
        assert again.status_code == 400


class TestReject:
    async def test_admin_reject_refunds(self, client, admin, customer, headers_for, balance_cents, placed_order) -> None:
        response = await client.post(
            f"/api/orders/{placed_order['dbOrderId']}/reject",
            json={"reason": "Hazmat not declared"},
            headers=headers_for(admin),
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Order rejected and refunded"
        order = response.json()["order"]
        assert order["status"] == "rejected"
        assert order["audit_remark"] == "Hazmat not declared"
        assert order["status_history"][-1]["rejected_by"] == admin.id
        assert await balance_cents(customer) == 100_000
        assert await balance_cents(admin) == 200_000

    async def test_customer_cannot_reject(self, client, customer, headers_for, placed_order) -> None:
        response = await client.post(f"/api/orders/{placed_order['dbOrderId']}/reject", headers=headers_for(customer))
        assert response.status_code == 403

    async def test_unknown_order(self, client, admin, headers_for) -> None:
        response = await client.post("/api/orders/missing/reject", headers=headers_for(admin))
        assert response.status_code == 404


class TestRefund:
    async def test_pending_order_not_refundable(self, client, customer, headers_for, placed_order) -> None:
        response = await client.post(f"/api/orders/{placed_order['dbOrderId']}/refund", headers=headers_for(customer))
        assert response.status_code == 400

    async def test_refund_after_cancel_is_idempotent(
        self, client, customer, headers_for, balance_cents, placed_order
    ) -> None:
        order_id = placed_order["dbOrderId"]
        await client.post(f"/api/orders/{order_id}/cancel", headers=headers_for(customer))

        response = await client.post(f"/api/orders/{order_id}/refund", headers=headers_for(customer))
        assert response.status_code == 200
        assert response.json()["message"] == "Refund already processed"
        assert await balance_cents(customer) == 100_000

    async def test_refund_exception_order(
        self, client, admin, customer, headers_for, balance_cents, carrier, placed_order
    ) -> None:
        """Carrier exceptions are not refunded automatically but can be refunded on request."""
        order_id = placed_order["dbOrderId"]
        carrier.set_status("Q-LTL-1001", "Reject")
        synced = await client.post(f"/api/orders/{order_id}/sync", headers=headers_for(customer))
        assert synced.json()["order"]["status"] == "exception"
        assert synced.json()["refund"] is None

        first = await client.post(
            f"/api/orders/{order_id}/refund",
            json={"reason": "Freight damaged"},
            headers=headers_for(customer),
        )
        second = await client.post(f"/api/orders/{order_id}/refund", headers=headers_for(customer))
        assert first.json()["message"] == "Refund processed successfully"
        assert second.json()["message"] == "Refund already processed"
        assert await balance_cents(customer) == 100_000
        assert await balance_cents(admin) == 200_000


class TestConcurrentRefund:
    @pytest.fixture
    def session_factory(self, file_session_factory):
        return file_session_factory

    async def test_parallel_refunds_pay_back_once(
        self, client, admin, customer, headers_for, balance_cents, carrier, placed_order
    ) -> None:
        order_id = placed_order["dbOrderId"]
        carrier.set_status("Q-LTL-1001", "Reject")
        await client.post(f"/api/orders/{order_id}/sync", headers=headers_for(customer))

        responses = await asyncio.gather(
            *(client.post(f"/api/orders/{order_id}/refund", headers=headers_for(customer)) for _ in range(2))
        )
        assert sorted(r.json()["message"] for r in responses) == [
            "Refund already processed",
            "Refund processed successfully",
        ]
        assert await balance_cents(customer) == 100_000
        assert await balance_cents(admin) == 200_000


class TestSync:
    async def test_sync_maps_carrier_status(self, client, customer, headers_for, carrier, placed_order) -> None:
        carrier.set_status("Q-LTL-1001", "In-Transit")
        response = await client.post(f"/api/orders/{placed_order['dbOrderId']}/sync", headers=headers_for(customer))
        assert response.status_code == 200
        body = response.json()
        assert body["order"]["status"] == "in_transit"
        assert body["order"]["status_history"][-1]["source"] == "api_sync"
        assert body["apiResponse"] == {"orderStatus": "In-Transit"}
        assert body["refund"] is None

    async def test_carrier_rejection_refunds_once(
        self, client, admin, customer, headers_for, balance_cents, carrier, placed_order
    ) -> None:
        order_id = placed_order["dbOrderId"]
        carrier.set_status("Q-LTL-1001", "Approval rejection")

        first = await client.post(f"/api/orders/{order_id}/sync", headers=headers_for(customer))
        assert first.json()["order"]["status"] == "rejected"
        assert first.json()["order"]["refund_status"] == "refunded"
        assert first.json()["refund"]["amount"] == 534.05

        second = await client.post(f"/api/orders/{order_id}/sync", headers=headers_for(customer))
        assert second.json()["refund"] is None
        assert await balance_cents(customer) == 100_000
        assert await balance_cents(admin) == 200_000

    async def test_cancelled_order_ignores_lagging_check_pending(
        self, client, admin, customer, headers_for, balance_cents, carrier, placed_order
    ) -> None:
        order_id = placed_order["dbOrderId"]
        await client.post(f"/api/orders/{order_id}/cancel", headers=headers_for(customer))
        carrier.set_status("Q-LTL-1001", "check pending", audit_remark="Cancelled by shipper")

        response = await client.post(f"/api/orders/{order_id}/sync", headers=headers_for(customer))
        body = response.json()
        assert body["order"]["status"] == "cancelled"
        assert body["order"]["audit_remark"] == "Cancelled by shipper"
        assert body["order"]["status_history"][-1]["api_status"] == "check pending"
        assert body["refund"] is None
        assert await balance_cents(customer) == 100_000
        assert await balance_cents(admin) == 200_000

    async def test_check_pending_without_remark_reopens_review(
        self, client, customer, headers_for, carrier, placed_order
    ) -> None:
        order_id = placed_order["dbOrderId"]
        await client.post(f"/api/orders/{order_id}/cancel", headers=headers_for(customer))
        carrier.set_status("Q-LTL-1001", "check pending")

        response = await client.post(f"/api/orders/{order_id}/sync", headers=headers_for(customer))
        assert response.json()["order"]["status"] == "pending_review"

    async def test_unknown_carrier_status_is_normalised(
        self, client, customer, headers_for, carrier, placed_order
    ) -> None:
        carrier.set_status("Q-LTL-1001", "On Hold")
        response = await client.post(f"/api/orders/{placed_order['dbOrderId']}/sync", headers=headers_for(customer))
        assert response.json()["order"]["status"] == "on_hold"

    async def test_tracking(self, client, customer, headers_for, placed_order) -> None:
        response = await client.get(f"/api/orders/{placed_order['dbOrderId']}/tracking", headers=headers_for(customer))
        assert response.status_code == 200
        assert response.json()["success"] is True
