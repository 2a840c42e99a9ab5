"""
API tests for quote submission, priced rate results and shipment estimates.
"""

from __future__ import annotations

from freightdesk.infrastructure.carriers import CarrierError

ORIGIN = {
    "address_line1": "100 Industrial Way",
    "city": "Columbus",
    "state": "OH",
    "postal_code": "43215",
    "address_classification": "Commercial",
}
DESTINATION = {
    "address_line1": "9 Market St",
    "city": "Denver",
    "state": "CO",
    "postal_code": "80202",
    "address_classification": "Residential",
}
ITEMS = [
    {
        "packageName": "Machine parts",
        "totalPallet": 2,
        "totalPackage": 4,
        "length": 48,
        "width": 40,
        "height": 36,
        "weight": 1000,
        "packageType": "Pallet",
    }
]


def ltl_request(**overrides) -> dict:
    payload = {
        "originAddress": ORIGIN,
        "destinationAddress": DESTINATION,
        "pickupDate": "2026-10-16",
        "packageItems": ITEMS,
        "deliveryAccessorials": ["Inside Delivery", "Lift-Gate Delivery", "Teleport"],
    }
    payload.update(overrides)
    return payload


class TestSubmitQuotes:
    async def test_ltl_submission(self, client, customer, headers_for, carrier) -> None:
        response = await client.post("/api/quotes/ltl", json=ltl_request(), headers=headers_for(customer))
        assert response.status_code == 200
        assert response.json()["quoteNumber"] == "Q-LTL-1001"
        assert response.json()["orderId"] == "Q-LTL-1001"

        [body] = carrier.quote_bodies
        assert body["selectMode"] == "LTL"
        assert body["destinationType"] == "RESIDENTIAL"
        assert body["destinationSpecificIds"] == "3,4"
        assert body["palletQuantity"] == 2
        [commodity] = body["commodityList"]
        assert commodity["aclass"] == "65"
        assert commodity["packageTypeId"] == "11"

    async def test_ltl_missing_fields(self, client, customer, headers_for, carrier) -> None:
        response = await client.post(
            "/api/quotes/ltl",
            json=ltl_request(pickupDate=None),
            headers=headers_for(customer),
        )
        assert response.status_code == 400
        assert carrier.quote_bodies == []

    async def test_tl_returns_priced_initial_rates(self, client, customer, headers_for, carrier) -> None:
        response = await client.post("/api/quotes/tl", json=ltl_request(), headers=headers_for(customer))
        assert response.status_code == 200
        body = response.json()
        assert body["isTL"] is True
        assert body["orderId"] == "Q-TL-1001"
        assert body["initialRates"][0]["totalCharge"] == "534.05"

        [sent] = carrier.quote_bodies
        assert sent["selectMode"] == "TL"
        assert sent["palletQuantity"] == "2"
        assert sent["commodityList"][0]["handlingUnits"] == 2

    async def test_fba_submission(self, client, customer, headers_for, carrier) -> None:
        response = await client.post(
            "/api/quotes/fba",
            json={
                "originAddress": ORIGIN,
                "destinationWarehouse": {
                    "name": "Amazon ONT8",
                    "code": "ONT8",
                    "address": "24300 Nandina Ave",
                    "city": "Moreno Valley",
                    "state": "CA",
                    "postalCode": "92551",
                },
                "pickupDate": "2026-10-16",
                "deliveryDate": "2026-10-23",
                "packageItems": ITEMS,
            },
            headers=headers_for(customer),
        )
        assert response.status_code == 200
        assert response.json()["quoteNumber"] == "Q-FBA-1001"

        [sent] = carrier.quote_bodies
        assert sent["destinationLocationCode"] == "ONT8"
        assert sent["destinationAddressLine1"] == "24300 Nandina Ave"
        assert sent["destinationZipCode"] == "92551"
        assert sent["quoteType"] == "1"

    async def test_fba_requires_delivery_date(self, client, customer, headers_for) -> None:
        response = await client.post(
            "/api/quotes/fba",
            json={"originAddress": ORIGIN, "destinationWarehouse": {"code": "ONT8"}, "pickupDate": "2026-10-16"},
            headers=headers_for(customer),
        )
        assert response.status_code == 400

    async def test_carrier_failure_is_bad_gateway(self, client, customer, headers_for, carrier, monkeypatch) -> None:
        async def failing(body):
            raise CarrierError("Failed to submit quote request", status_code=500)

        monkeypatch.setattr(carrier, "submit_ltl_quote", failing)
        response = await client.post("/api/quotes/ltl", json=ltl_request(), headers=headers_for(customer))
        assert response.status_code == 502

    async def test_requires_login(self, client) -> None:
        response = await client.post("/api/quotes/ltl", json=ltl_request())
        assert response.status_code == 401


class TestResults:
    async def test_customer_sees_marked_up_rates(self, client, customer, headers_for) -> None:
        response = await client.post(
            "/api/quotes/results",
            json={"quoteOrderId": "Q-LTL-1001"},
            headers=headers_for(customer),
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["orderId"] == "Q-LTL-1001"
        by_id = {rate["rateId"]: rate for rate in data["rates"]}
        assert by_id["000001"]["totalCharge"] == "534.05"
        assert by_id["000002"]["totalCharge"] == "467.50"
        assert by_id["000001"]["carrierTransitDays"] == 2

    async def test_admin_sees_base_rates(self, client, admin, headers_for) -> None:
        response = await client.post(
            "/api/quotes/results",
            json={"quoteOrderId": "Q-LTL-1001"},
            headers=headers_for(admin),
        )
        charges = {rate["rateId"]: rate["totalCharge"] for rate in response.json()["data"]["rates"]}
        assert charges == {"000001": "485.50", "000002": "425.00", "000003": "550.00"}

    async def test_poll_sorts_cheapest_first(self, client, customer, headers_for) -> None:
        response = await client.post(
            "/api/quotes/results",
            json={"quoteOrderId": "Q-LTL-1001", "poll": True},
            headers=headers_for(customer),
        )
        assert [rate["rateId"] for rate in response.json()["data"]["rates"]] == ["000002", "000001", "000003"]

    async def test_blank_quote_id_rejected(self, client, customer, headers_for) -> None:
        response = await client.post("/api/quotes/results", json={"quoteOrderId": ""}, headers=headers_for(customer))
        assert response.status_code == 400


class TestEstimate:
    async def test_classes_and_delivery_date(self, client, customer, headers_for) -> None:
        response = await client.post(
            "/api/quotes/estimate",
            json={
                "items": [
                    {"weight": 1000, "length": 48, "width": 40, "height": 36},
                    {"weight": 100},
                ],
                "pickupDate": "2026-10-16",
                "transitDays": 2,
            },
            headers=headers_for(customer),
        )
        assert response.status_code == 200
        body = response.json()
        assert body["items"][0] == {"index": 0, "density": 25.0, "freightClass": "65"}
        assert body["items"][1]["density"] is None
        assert body["transitDays"] == 2
        assert body["estimatedDeliveryDate"] == "2026-10-20"

    async def test_default_transit_without_guarantee(self, client, customer, headers_for) -> None:
        response = await client.post(
            "/api/quotes/estimate",
            json={"items": [], "pickupDate": "2026-10-16", "carrierGuarantee": "Standard"},
            headers=headers_for(customer),
        )
        assert response.json()["transitDays"] == 3
        assert response.json()["estimatedDeliveryDate"] == "2026-10-21"

    async def test_no_pickup_date_no_delivery_estimate(self, client, customer, headers_for) -> None:
        response = await client.post(
            "/api/quotes/estimate",
            json={"items": [], "transitDays": 1},
            headers=headers_for(customer),
        )
        assert response.json()["estimatedDeliveryDate"] is None
