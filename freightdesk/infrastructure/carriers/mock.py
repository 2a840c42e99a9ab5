"""Sample carrier used when ``CARRIER__MOCK`` is enabled in development."""

from __future__ import annotations

import logging
import time
from decimal import Decimal
from typing import Any

logger = logging.getLogger(__name__)

_SAMPLE_RATES: tuple[dict[str, Any], ...] = (
    {
        "rateId": "000001",
        "carrierName": "YRC Freight",
        "carrierSCAC": "RDWY",
        "carrierTransitDays": 2,
        "carrierGuarantee": "Standard",
        "totalCharge": "485.50",
        "lineCharge": "368.00",
        "fuelCharge": "42.50",
        "accessorialCharge": "75.00",
        "insuredCharge": "25.00",
        "customerDump": 0,
        "accesoriesList": [{"serviceName": "Inside Delivery", "serviceCode": "ISD", "chargeAmount": "75.00"}],
    },
    {
        "rateId": "000002",
        "carrierName": "Estes Express Lines",
        "carrierSCAC": "EXLA",
        "carrierTransitDays": 3,
        "carrierGuarantee": "GN",
        "totalCharge": "425.00",
        "lineCharge": "325.00",
        "fuelCharge": "35.00",
        "accessorialCharge": "65.00",
        "insuredCharge": "30.00",
        "customerDump": 0,
        "accesoriesList": [{"serviceName": "Inside Delivery", "serviceCode": "ISD", "chargeAmount": "65.00"}],
    },
    {
        "rateId": "000003",
        "carrierName": "FedEx Freight",
        "carrierSCAC": "FXFE",
        "carrierTransitDays": 1,
        "carrierGuarantee": "Priority",
        "totalCharge": "550.00",
        "lineCharge": "420.00",
        "fuelCharge": "50.00",
        "accessorialCharge": "80.00",
        "insuredCharge": "35.00",
        "customerDump": 0,
        "accesoriesList": [
            {"serviceName": "Inside Delivery", "serviceCode": "ISD", "chargeAmount": "80.00"},
            {"serviceName": "Liftgate Service", "serviceCode": "LG", "chargeAmount": "0.00"},
        ],
    },
)


class MockCarrierClient:
    """Implements the RapidDealsClient surface with canned data and no network."""

    def __init__(self) -> None:
        self._orders: dict[str, str] = {}

    async def aclose(self) -> None:
        return None

    @staticmethod
    def _quote_number(prefix: str) -> str:
        return f"{prefix}{int(time.time() * 1000)}"

    async def submit_ltl_quote(self, body: dict[str, Any]) -> str:
        quote_number = self._quote_number("MOCK-Q")
        logger.info("Mock carrier issued LTL quote %s", quote_number)
        return quote_number

    async def submit_fba_quote(self, body: dict[str, Any]) -> str:
        quote_number = self._quote_number("MOCK-FBA")
        logger.info("Mock carrier issued FBA quote %s", quote_number)
        return quote_number

    async def submit_tl_quote(self, body: dict[str, Any]) -> tuple[str, list[dict[str, Any]]]:
        order_id = self._quote_number("MOCK-TL")
        return order_id, await self.get_rates(order_id)

    async def get_rates(self, quote_order_id: str) -> list[dict[str, Any]]:
        return [{**rate, "orderId": quote_order_id} for rate in _SAMPLE_RATES]

    async def poll_rates(self, quote_order_id: str, **_: Any) -> list[dict[str, Any]]:
        rates = await self.get_rates(quote_order_id)
        return sorted(rates, key=lambda rate: float(rate["totalCharge"]))

    async def place_order(self, body: dict[str, Any]) -> dict[str, Any]:
        self._orders[str(body.get("orderId"))] = "check pending"
        return {"code": 200, "success": True, "data": "Place an order successfully", "msg": "success"}

    async def cancel_order(self, order_number: str) -> dict[str, Any]:
        self._orders[order_number] = "Cancelled"
        return {"code": 200, "success": True, "data": {"auditRemark": "Customer cancelled"}, "msg": "success"}

    async def tracking(self, order_number: str) -> dict[str, Any]:
        return {"code": 200, "success": True, "data": {"trackingInfo": []}, "msg": "success"}

    async def order_info(self, order_number: str) -> dict[str, Any]:
        return {"orderStatus": self._orders.get(order_number, "check pending")}

    async def insurance_quote(self, body: dict[str, Any]) -> dict[str, Any]:
        declared = Decimal(str(body.get("declaredValue") or 0))
        # 0.3% of declared value, $20 minimum
        amount = max(Decimal("20"), declared * Decimal("0.003"))
        return {"insuranceAmount": f"{amount:.2f}", "compensationCeiling": str(body.get("declaredValue"))}
