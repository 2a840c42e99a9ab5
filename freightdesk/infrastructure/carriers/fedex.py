"""FedEx address resolution used to classify saved addresses."""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

import httpx

from freightdesk.core.config import FedexSettings
from freightdesk.modules.addresses.exceptions import AddressLookupError
from freightdesk.modules.addresses.models import AddressValidationResult

logger = logging.getLogger(__name__)

# refresh the OAuth token this many seconds before FedEx expires it
TOKEN_EXPIRY_MARGIN = 60

_CLASSIFICATIONS = {
    "BUSINESS": "Commercial",
    "MIXED": "Commercial",
    "RESIDENTIAL": "Residential",
}


def classify(resolved: dict[str, Any]) -> str:
    for key in ("classification", "businessResidentialIndicator"):
        mapped = _CLASSIFICATIONS.get(str(resolved.get(key) or "").upper())
        if mapped:
            return mapped
    return "Unknown"


class FedexAddressClient:
    def __init__(
        self,
        settings: FedexSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._client = httpx.AsyncClient(
            base_url=settings.base_url.rstrip("/"),
            timeout=settings.timeout,
            transport=transport,
        )
        self._token: Optional[str] = None
        self._token_expires_at = 0.0

    @property
    def configured(self) -> bool:
        return self._settings.configured

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _access_token(self) -> str:
        if self._token and self._token_expires_at > time.monotonic():
            return self._token
        if not self._settings.configured:
            raise AddressLookupError("FedEx API credentials not configured")

        logger.info("Requesting FedEx OAuth token")
        try:
            response = await self._client.post(
                "/oauth/token",
                data={
                    "grant_type": "client_credentials",
                    "client_id": self._settings.client_id,
                    "client_secret": self._settings.client_secret,
                },
            )
        except httpx.HTTPError as exc:
            raise AddressLookupError(f"Failed to get FedEx token: {exc}") from exc
        if response.status_code >= 400:
            raise AddressLookupError(f"Failed to get FedEx token: {response.status_code}")

        payload = response.json()
        self._token = payload["access_token"]
        self._token_expires_at = time.monotonic() + max(int(payload.get("expires_in", 0)) - TOKEN_EXPIRY_MARGIN, 0)
        return self._token

    async def validate(
        self,
        *,
        address_line1: str,
        city: str,
        state: str,
        postal_code: str,
        address_line2: Optional[str] = None,
        country: str = "US",
    ) -> AddressValidationResult:
        original = {
            "address_line1": address_line1,
            "address_line2": address_line2,
            "city": city,
            "state": state,
            "postal_code": postal_code,
            "country": country,
        }
        token = await self._access_token()
        street_lines = [address_line1] + ([address_line2] if address_line2 else [])
        body = {
            "addressesToValidate": [
                {
                    "address": {
                        "streetLines": street_lines,
                        "city": city,
                        "stateOrProvinceCode": state,
                        "postalCode": postal_code,
                        "countryCode": country,
                    }
                }
            ]
        }
        try:
            response = await self._client.post(
                "/address/v1/addresses/resolve",
                json=body,
                headers={
                    "Authorization": f"Bearer {token}",
                    "X-locale": "en_US",
                    "X-customer-transaction-id": f"FD-{int(time.time() * 1000)}",
                },
            )
        except httpx.HTTPError as exc:
            raise AddressLookupError(f"FedEx address validation failed: {exc}") from exc
        if response.status_code >= 400:
            logger.warning("FedEx address validation returned %s: %s", response.status_code, response.text)
            raise AddressLookupError(f"FedEx API error: {response.status_code}")

        output = response.json().get("output") or {}
        resolved_list = output.get("resolvedAddresses") or []
        if not resolved_list:
            return AddressValidationResult(
                success=True,
                validated=False,
                classification="Unknown",
                matched_address=None,
                original_address=original,
                errors=[alert.get("message", "") for alert in output.get("alerts") or []],
            )

        resolved = resolved_list[0]
        matched = {
            "streetLines": resolved.get("streetLinesToken") or [],
            "city": " ".join(resolved.get("cityToken") or []) or city,
            "state": resolved.get("stateOrProvinceCodeToken") or state,
            "postalCode": resolved.get("postalCodeToken") or postal_code,
            "country": resolved.get("countryCode") or country,
        }
        return AddressValidationResult(
            success=True,
            validated=True,
            classification=classify(resolved),
            matched_address=matched,
            original_address=original,
            errors=[],
        )
