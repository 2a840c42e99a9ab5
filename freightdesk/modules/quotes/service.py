"""Quote submission, rate retrieval and shipment estimates."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from freightdesk.infrastructure.carriers import CarrierClient
from freightdesk.modules.accounts.models import User
from freightdesk.modules.freight import (
    calculate_density,
    calculate_freight_class,
    estimate_delivery_date,
    resolve_transit_days,
)
from freightdesk.modules.pricing import apply_pricing_to_quotes, pricing_for

from .builders import (
    SERVICE_FBA,
    SERVICE_LTL,
    SERVICE_TL,
    build_fba_body,
    build_ltl_body,
    build_tl_body,
)
from .exceptions import QuoteValidationError
from .models import ItemEstimate, ShipmentEstimate, SubmittedQuote

logger = logging.getLogger(__name__)


def price_rates_for(viewer: User, rates: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Rates as ``viewer`` should see them; admins get the carrier's base price."""
    return apply_pricing_to_quotes(rates, pricing_for(viewer.is_admin(), viewer.price_ratio))


@dataclass(slots=True)
class QuoteService:
    carrier: CarrierClient

    async def submit_ltl(self, payload: Mapping[str, Any]) -> SubmittedQuote:
        body = build_ltl_body(payload)
        quote_number = await self.carrier.submit_ltl_quote(body)
        logger.info("LTL quote %s submitted (%d items)", quote_number, len(body["commodityList"]))
        return SubmittedQuote(quote_number=quote_number, service_type=SERVICE_LTL)

    async def submit_tl(self, payload: Mapping[str, Any], viewer: User) -> SubmittedQuote:
        body = build_tl_body(payload)
        order_id, rates = await self.carrier.submit_tl_quote(body)
        logger.info("TL quote %s submitted with %d initial rates", order_id, len(rates))
        return SubmittedQuote(
            quote_number=order_id,
            service_type=SERVICE_TL,
            initial_rates=price_rates_for(viewer, rates),
        )

    async def submit_fba(self, payload: Mapping[str, Any]) -> SubmittedQuote:
        body = build_fba_body(payload)
        quote_number = await self.carrier.submit_fba_quote(body)
        logger.info("FBA quote %s submitted to %s", quote_number, body.get("destinationLocationCode"))
        return SubmittedQuote(quote_number=quote_number, service_type=SERVICE_FBA)

    async def results(self, quote_order_id: str, viewer: User, *, poll: bool = False) -> list[dict[str, Any]]:
        if not quote_order_id:
            raise QuoteValidationError("Quote order ID is required")
        if poll:
            rates = await self.carrier.poll_rates(quote_order_id)
        else:
            rates = await self.carrier.get_rates(quote_order_id)
        return price_rates_for(viewer, rates)

    async def find_rate(self, quote_order_id: str, rate_id: str) -> Optional[dict[str, Any]]:
        """The unpriced carrier rate with ``rate_id``, if the carrier still offers it."""
        for rate in await self.carrier.get_rates(quote_order_id):
            if str(rate.get("rateId")) == str(rate_id):
                return rate
        return None

    @staticmethod
    def estimate(
        items: list[Mapping[str, Any]],
        *,
        pickup_date: Optional[date] = None,
        guarantee: Optional[str] = None,
        transit_days: Optional[int] = None,
    ) -> ShipmentEstimate:
        estimates = []
        for index, item in enumerate(items):
            dims = (item.get("weight"), item.get("length"), item.get("width"), item.get("height"))
            estimates.append(
                ItemEstimate(
                    index=index,
                    density=calculate_density(*dims),
                    freight_class=calculate_freight_class(*dims),
                )
            )

        days = resolve_transit_days(guarantee, transit_days)
        delivery = estimate_delivery_date(pickup_date, guarantee, days)
        return ShipmentEstimate(items=estimates, transit_days=days, estimated_delivery_date=delivery)
