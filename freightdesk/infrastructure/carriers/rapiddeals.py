"""Async client for the RapidDeals shipment API."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

import httpx

from freightdesk.core.config import CarrierSettings

from .exceptions import CarrierConfigurationError, CarrierError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_success(payload: dict[str, Any]) -> bool:
    """RapidDeals signals success through any of code, success or msg."""
    code = payload.get("code")
    if code in (200, "200"):
        return True
    if payload.get("success") in (True, "true"):
        return True
    msg = payload.get("msg")
    return isinstance(msg, str) and msg.lower() == "success"


def _total_charge(rate: dict[str, Any]) -> float:
    try:
        return float(rate.get("totalCharge") or 0)
    except (TypeError, ValueError):
        return float("inf")


class RapidDealsClient:
    """Thin wrapper over the carrier endpoints with the retry policy applied."""

    def __init__(
        self,
        settings: CarrierSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._settings = settings
        self._sleep = sleep
        self._client = httpx.AsyncClient(
            base_url=settings.base_url.rstrip("/"),
            timeout=settings.timeout,
            limits=httpx.Limits(max_keepalive_connections=10, max_connections=50),
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        if not self._settings.configured:
            raise CarrierConfigurationError("RapidDeals API credentials not configured")
        return {"api_Id": self._settings.api_id, "user_key": self._settings.api_key}

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        headers = self._headers()
        logger.info("RapidDeals %s %s", method, path)
        try:
            response = await self._client.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            raise CarrierError(f"RapidDeals request failed: {exc}") from exc
        if response.status_code >= 400:
            raise CarrierError(
                f"API request failed: {response.status_code} - {response.text}",
                status_code=response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise CarrierError("RapidDeals returned a non-JSON response", status_code=response.status_code) from exc
        if not isinstance(payload, dict):
            raise CarrierError("Unexpected RapidDeals response", payload=payload)
        return payload

    async def _with_retries(self, label: str, attempts: int, delay: float, call: Callable[[], Awaitable[T]]) -> T:
        last_error: CarrierError | None = None
        for attempt in range(1, max(attempts, 1) + 1):
            try:
                return await call()
            except CarrierConfigurationError:
                raise
            except CarrierError as exc:
                last_error = exc
                logger.warning("%s failed (%d/%d): %s", label, attempt, attempts, exc)
                if attempt < attempts:
                    await self._sleep(delay)
        assert last_error is not None
        raise last_error

    async def _submit_rates(self, label: str, body: dict[str, Any]) -> str:
        """POST /rates; returns the quote order number."""

        async def call() -> str:
            payload = await self._request("POST", "/rates", json=body)
            data = payload.get("data")
            if not data:
                raise CarrierError(payload.get("msg") or "Failed to get quote number from RapidDeals", payload=payload)
            return str(data)

        return await self._with_retries(
            label, self._settings.quote_retries, self._settings.retry_delay, call
        )

    async def submit_ltl_quote(self, body: dict[str, Any]) -> str:
        return await self._submit_rates("LTL quote submission", body)

    async def submit_fba_quote(self, body: dict[str, Any]) -> str:
        return await self._submit_rates("FBA quote submission", body)

    async def submit_tl_quote(self, body: dict[str, Any]) -> tuple[str, list[dict[str, Any]]]:
        async def call() -> tuple[str, list[dict[str, Any]]]:
            payload = await self._request("POST", "/ratesTL", json=body)
            data = payload.get("data") or {}
            order_id = data.get("orderId") if isinstance(data, dict) else None
            if not order_id:
                raise CarrierError(payload.get("msg") or "Failed to get TL quote from RapidDeals", payload=payload)
            return str(order_id), list(data.get("rates") or [])

        return await self._with_retries(
            "TL quote submission", self._settings.quote_retries, self._settings.retry_delay, call
        )

    async def get_rates(self, quote_order_id: str) -> list[dict[str, Any]]:
        async def call() -> list[dict[str, Any]]:
            payload = await self._request("POST", "/getRates", json={"quoteOrderId": quote_order_id})
            data = payload.get("data") or {}
            if not is_success(payload) or not isinstance(data, dict):
                return []
            return list(data.get("rates") or [])

        return await self._with_retries(
            "Quote results", self._settings.results_retries, self._settings.retry_delay / 2, call
        )

    async def poll_rates(
        self,
        quote_order_id: str,
        *,
        attempts: Optional[int] = None,
        interval: Optional[float] = None,
    ) -> list[dict[str, Any]]:
        """Collect rates over several fetches, de-duplicated by rateId, cheapest first."""
        attempts = attempts or self._settings.poll_attempts
        interval = self._settings.poll_interval if interval is None else interval
        seen: set[str] = set()
        rates: list[dict[str, Any]] = []
        for attempt in range(1, attempts + 1):
            try:
                batch = await self.get_rates(quote_order_id)
            except CarrierConfigurationError:
                raise
            except CarrierError as exc:
                logger.warning("Polling %s attempt %d failed: %s", quote_order_id, attempt, exc)
                batch = []
            for rate in batch:
                rate_id = str(rate.get("rateId") or "")
                if rate_id and rate_id in seen:
                    continue
                seen.add(rate_id)
                rates.append(rate)
            if attempt < attempts:
                await self._sleep(interval)
        rates.sort(key=_total_charge)
        return rates

    async def place_order(self, body: dict[str, Any]) -> dict[str, Any]:
        payload = await self._request("POST", "/shipmentOrder", json=body)
        if not is_success(payload):
            raise CarrierError(payload.get("msg") or "Failed to place order with carrier", payload=payload)
        return payload

    async def cancel_order(self, order_number: str) -> dict[str, Any]:
        payload = await self._request("POST", "/cancelOrder", data={"orderId": order_number})
        if not is_success(payload):
            raise CarrierError(payload.get("msg") or "Failed to cancel order with carrier", payload=payload)
        return payload

    async def tracking(self, order_number: str) -> dict[str, Any]:
        return await self._request("GET", "/tracking", params={"orderId": order_number})

    async def order_info(self, order_number: str) -> dict[str, Any]:
        payload = await self._request("GET", "/orderInfo", params={"orderId": order_number})
        data = payload.get("data")
        return data if isinstance(data, dict) else payload

    async def insurance_quote(self, body: dict[str, Any]) -> dict[str, Any]:
        payload = await self._request("POST", "/apiInsuredAmount", json=body)
        if payload.get("code") not in (200, "200") or not payload.get("success"):
            raise CarrierError(payload.get("msg") or "Failed to get insurance quote from RapidDeals", payload=payload)
        return payload.get("data") or {}
