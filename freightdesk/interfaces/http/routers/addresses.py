"""Saved address book and FedEx address validation."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from freightdesk.core.security import get_current_user
from freightdesk.infrastructure.carriers import FedexAddressClient
from freightdesk.interfaces.http.deps import get_db_session, get_fedex
from freightdesk.modules.accounts import User
from freightdesk.modules.addresses import (
    AddressLookupError,
    AddressNotFoundError,
    AddressService,
    AddressValidationError,
)
from freightdesk.schemas import (
    AddressFields,
    AddressResponse,
    AddressValidateRequest,
    AddressValidationResponse,
    SuccessResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[AddressResponse], summary="List the caller's saved addresses")
async def list_addresses(
    address_type: Optional[str] = Query(None),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> list[AddressResponse]:
    try:
        addresses = await AddressService.with_session(db).list_addresses(user, address_type)
    except AddressValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return [AddressResponse.model_validate(address) for address in addresses]


@router.post("", response_model=AddressResponse, status_code=status.HTTP_201_CREATED, summary="Save an address")
async def create_address(
    payload: AddressFields,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> AddressResponse:
    try:
        address = await AddressService.with_session(db).create_address(user, payload.model_dump(exclude_none=True))
    except AddressValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return AddressResponse.model_validate(address)


@router.post("/validate", response_model=AddressValidationResponse, summary="Validate and classify via FedEx")
async def validate_address(
    payload: AddressValidateRequest,
    _: User = Depends(get_current_user),
    fedex: FedexAddressClient = Depends(get_fedex),
) -> AddressValidationResponse:
    if not (payload.address_line1 and payload.city and payload.state and payload.postal_code):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing required address fields")
    if not fedex.configured:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Address validation is not configured",
        )

    try:
        result = await fedex.validate(
            address_line1=payload.address_line1,
            address_line2=payload.address_line2,
            city=payload.city,
            state=payload.state,
            postal_code=payload.postal_code,
            country=payload.country,
        )
    except AddressLookupError as exc:
        logger.warning("Address validation failed for %s: %s", payload.postal_code, exc)
        return AddressValidationResponse(
            success=False,
            validated=False,
            classification="Unknown",
            original_address=payload.model_dump(),
            errors=[str(exc)],
        )

    return AddressValidationResponse(
        success=result.success,
        validated=result.validated,
        classification=result.classification,
        matched_address=result.matched_address,
        original_address=result.original_address,
        errors=result.errors,
    )


@router.get("/{address_id}", response_model=AddressResponse, summary="Address detail")
async def get_address(
    address_id: str = Path(..., description="Address id"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> AddressResponse:
    try:
        address = await AddressService.with_session(db).get_address(user, address_id)
    except AddressNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return AddressResponse.model_validate(address)


@router.put("/{address_id}", response_model=AddressResponse, summary="Update a saved address")
async def update_address(
    payload: AddressFields,
    address_id: str = Path(..., description="Address id"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> AddressResponse:
    try:
        address = await AddressService.with_session(db).update_address(
            user, address_id, payload.model_dump(exclude_unset=True)
        )
    except AddressNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except AddressValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return AddressResponse.model_validate(address)


@router.delete("/{address_id}", response_model=SuccessResponse, summary="Delete a saved address")
async def delete_address(
    address_id: str = Path(..., description="Address id"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    try:
        await AddressService.with_session(db).delete_address(user, address_id)
    except AddressNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return SuccessResponse(message="Address deleted successfully")
