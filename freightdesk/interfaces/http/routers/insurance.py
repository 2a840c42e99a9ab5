"""Cargo insurance quotes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from freightdesk.core.security import get_current_user
from freightdesk.infrastructure.carriers import CarrierClient, CarrierError
from freightdesk.interfaces.http.deps import get_carrier
from freightdesk.interfaces.http.errors import carrier_http_error
from freightdesk.modules.accounts import User
from freightdesk.modules.insurance import InsuranceService, InsuranceValidationError
from freightdesk.modules.pricing import PricingError
from freightdesk.schemas import InsuranceQuoteData, InsuranceQuoteRequest, InsuranceQuoteResponse

router = APIRouter()


@router.post("/quote-rapiddeals", response_model=InsuranceQuoteResponse, summary="Insured amount for a quote")
async def insurance_quote(
    payload: InsuranceQuoteRequest,
    user: User = Depends(get_current_user),
    carrier: CarrierClient = Depends(get_carrier),
) -> InsuranceQuoteResponse:
    try:
        quote = await InsuranceService(carrier).quote(user, payload.model_dump())
    except (InsuranceValidationError, PricingError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except CarrierError as exc:
        raise carrier_http_error(exc) from exc
    return InsuranceQuoteResponse(
        data=InsuranceQuoteData(
            insurance_amount=str(quote.insurance_amount),
            base_insurance_amount=str(quote.base_insurance_amount),
            compensation_ceiling=quote.compensation_ceiling,
            price_ratio=float(quote.price_ratio),
        )
    )
