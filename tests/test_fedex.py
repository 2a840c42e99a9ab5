"""
Tests for FedEx address resolution and residential/commercial classification.
"""

from __future__ import annotations

import httpx
import pytest

from freightdesk.core.config import FedexSettings
from freightdesk.infrastructure.carriers import FedexAddressClient
from freightdesk.infrastructure.carriers.fedex import classify
from freightdesk.modules.addresses import AddressLookupError

ADDRESS = {
    "address_line1": "1 Main St",
    "city": "New York",
    "state": "NY",
    "postal_code": "10001",
}


class FedexStub:
    """Answers the token and resolve endpoints and counts calls."""

    def __init__(self, resolve_payload: dict | None = None, resolve_status: int = 200) -> None:
        self.token_calls = 0
        self.resolve_calls = 0
        self.resolve_payload = resolve_payload or {}
        self.resolve_status = resolve_status

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/oauth/token":
            self.token_calls += 1
            return httpx.Response(200, json={"access_token": "tok-1", "expires_in": 3600})
        assert request.url.path == "/address/v1/addresses/resolve"
        assert request.headers["Authorization"] == "Bearer tok-1"
        self.resolve_calls += 1
        return httpx.Response(self.resolve_status, json=self.resolve_payload)


def make_client(stub: FedexStub, configured: bool = True) -> FedexAddressClient:
    settings = FedexSettings(
        base_url="https://fedex.test",
        client_id="cid" if configured else "",
        client_secret="secret" if configured else "",
    )
    return FedexAddressClient(settings, transport=httpx.MockTransport(stub))


RESOLVED = {
    "output": {
        "resolvedAddresses": [
            {
                "streetLinesToken": ["1 MAIN ST"],
                "cityToken": ["NEW", "YORK"],
                "stateOrProvinceCodeToken": "NY",
                "postalCodeToken": "10001-2345",
                "countryCode": "US",
                "classification": "BUSINESS",
            }
        ]
    }
}


class TestClassify:
    @pytest.mark.parametrize(
        ("resolved", "expected"),
        [
            ({"classification": "BUSINESS"}, "Commercial"),
            ({"classification": "MIXED"}, "Commercial"),
            ({"classification": "RESIDENTIAL"}, "Residential"),
            ({"classification": "UNKNOWN", "businessResidentialIndicator": "RESIDENTIAL"}, "Residential"),
            ({}, "Unknown"),
        ],
    )
    def test_classification_mapping(self, resolved, expected) -> None:
        assert classify(resolved) == expected


class TestValidate:
    async def test_resolved_address_is_matched_and_classified(self) -> None:
        stub = FedexStub(RESOLVED)
        client = make_client(stub)
        result = await client.validate(**ADDRESS)
        await client.aclose()

        assert result.success and result.validated
        assert result.classification == "Commercial"
        assert result.matched_address == {
            "streetLines": ["1 MAIN ST"],
            "city": "NEW YORK",
            "state": "NY",
            "postalCode": "10001-2345",
            "country": "US",
        }
        assert result.original_address["postal_code"] == "10001"

    async def test_token_is_cached_between_calls(self) -> None:
        stub = FedexStub(RESOLVED)
        client = make_client(stub)
        await client.validate(**ADDRESS)
        await client.validate(**ADDRESS)
        await client.aclose()

        assert stub.token_calls == 1
        assert stub.resolve_calls == 2

    async def test_unresolved_address_reports_alerts(self) -> None:
        stub = FedexStub({"output": {"resolvedAddresses": [], "alerts": [{"message": "Address not found"}]}})
        client = make_client(stub)
        result = await client.validate(**ADDRESS)
        await client.aclose()

        assert result.success is True
        assert result.validated is False
        assert result.classification == "Unknown"
        assert result.errors == ["Address not found"]

    async def test_api_error_raises_lookup_error(self) -> None:
        client = make_client(FedexStub({"errors": []}, resolve_status=500))
        with pytest.raises(AddressLookupError):
            await client.validate(**ADDRESS)
        await client.aclose()

    async def test_unconfigured_client_raises(self) -> None:
        stub = FedexStub(RESOLVED)
        client = make_client(stub, configured=False)
        assert client.configured is False
        with pytest.raises(AddressLookupError):
            await client.validate(**ADDRESS)
        await client.aclose()

        assert stub.token_calls == 0
