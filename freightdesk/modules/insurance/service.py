"""Cargo insurance quotes priced for the caller."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from freightdesk.infrastructure.carriers import CarrierClient
from freightdesk.modules.accounts.models import User
from freightdesk.modules.pricing import customer_price, pricing_for, quantize, to_decimal

from .exceptions import InsuranceValidationError
from .models import OPTIONAL_FIELDS, REQUIRED_FIELDS, InsuranceQuote

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class InsuranceService:
    carrier: CarrierClient

    @staticmethod
    def build_request(payload: Mapping[str, Any]) -> dict[str, Any]:
        for name in REQUIRED_FIELDS:
            if not payload.get(name):
                raise InsuranceValidationError(f"{name} is required")
        body = {name: payload[name] for name in REQUIRED_FIELDS}
        body.update({name: payload.get(name) or "" for name in OPTIONAL_FIELDS})
        return body

    async def quote(self, user: User, payload: Mapping[str, Any]) -> InsuranceQuote:
        body = self.build_request(payload)
        data = await self.carrier.insurance_quote(body)
        base = quantize(to_decimal(data.get("insuranceAmount") or 0))
        ratio = pricing_for(user.is_admin(), user.price_ratio)
        logger.info("Insurance quote for %s: base %s, ratio %s", body["quoteOrderId"], base, ratio)
        return InsuranceQuote(
            insurance_amount=customer_price(base, ratio),
            base_insurance_amount=base,
            price_ratio=ratio,
            compensation_ceiling=data.get("compensationCeiling"),
        )
