"""LTL, TL and FBA quoting."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from freightdesk.core.security import get_current_user
from freightdesk.infrastructure.carriers import CarrierClient, CarrierError
from freightdesk.interfaces.http.deps import get_carrier
from freightdesk.interfaces.http.errors import carrier_http_error
from freightdesk.modules.accounts import User
from freightdesk.modules.quotes import QuoteService, QuoteValidationError
from freightdesk.schemas import (
    EstimateRequest,
    EstimateResponse,
    ItemEstimateResponse,
    QuoteRequest,
    QuoteResultsData,
    QuoteResultsRequest,
    QuoteResultsResponse,
    QuoteSubmitResponse,
    TLQuoteResponse,
)

router = APIRouter()


@router.post("/ltl", response_model=QuoteSubmitResponse, summary="Submit an LTL quote request")
async def submit_ltl_quote(
    payload: QuoteRequest,
    _: User = Depends(get_current_user),
    carrier: CarrierClient = Depends(get_carrier),
) -> QuoteSubmitResponse:
    try:
        quote = await QuoteService(carrier).submit_ltl(payload.model_dump(by_alias=True))
    except QuoteValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except CarrierError as exc:
        raise carrier_http_error(exc) from exc
    return QuoteSubmitResponse(
        quote_number=quote.quote_number,
        order_id=quote.quote_number,
        message="Quote submitted successfully",
    )


@router.post("/tl", response_model=TLQuoteResponse, summary="Submit a truckload quote request")
async def submit_tl_quote(
    payload: QuoteRequest,
    user: User = Depends(get_current_user),
    carrier: CarrierClient = Depends(get_carrier),
) -> TLQuoteResponse:
    try:
        quote = await QuoteService(carrier).submit_tl(payload.model_dump(by_alias=True), user)
    except QuoteValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except CarrierError as exc:
        raise carrier_http_error(exc) from exc
    return TLQuoteResponse(
        order_id=quote.quote_number,
        initial_rates=quote.initial_rates,
        message="TL quote submitted successfully",
    )


@router.post("/fba", response_model=QuoteSubmitResponse, summary="Submit an Amazon FBA quote request")
async def submit_fba_quote(
    payload: QuoteRequest,
    _: User = Depends(get_current_user),
    carrier: CarrierClient = Depends(get_carrier),
) -> QuoteSubmitResponse:
    try:
        quote = await QuoteService(carrier).submit_fba(payload.model_dump(by_alias=True))
    except QuoteValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except CarrierError as exc:
        raise carrier_http_error(exc) from exc
    return QuoteSubmitResponse(
        quote_number=quote.quote_number,
        order_id=quote.quote_number,
        message="FBA quote submitted successfully",
    )


@router.post("/results", response_model=QuoteResultsResponse, summary="Rates for a submitted quote")
async def quote_results(
    payload: QuoteResultsRequest,
    user: User = Depends(get_current_user),
    carrier: CarrierClient = Depends(get_carrier),
) -> QuoteResultsResponse:
    try:
        rates = await QuoteService(carrier).results(payload.quote_order_id, user, poll=payload.poll)
    except QuoteValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except CarrierError as exc:
        raise carrier_http_error(exc) from exc
    return QuoteResultsResponse(data=QuoteResultsData(order_id=payload.quote_order_id, rates=rates))


@router.post("/estimate", response_model=EstimateResponse, summary="Freight classes and delivery estimate")
async def estimate_shipment(
    payload: EstimateRequest,
    _: User = Depends(get_current_user),
) -> EstimateResponse:
    estimate = QuoteService.estimate(
        [item.model_dump() for item in payload.items],
        pickup_date=payload.pickup_date,
        guarantee=payload.carrier_guarantee,
        transit_days=payload.transit_days,
    )
    return EstimateResponse(
        items=[
            ItemEstimateResponse(index=item.index, density=item.density, freight_class=item.freight_class)
            for item in estimate.items
        ],
        transit_days=estimate.transit_days,
        estimated_delivery_date=estimate.estimated_delivery_date,
    )
