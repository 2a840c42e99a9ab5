"""Shared mapping of outbound integration failures to HTTP errors."""

from fastapi import HTTPException, status

from freightdesk.infrastructure.carriers import CarrierConfigurationError, CarrierError


def carrier_http_error(exc: CarrierError) -> HTTPException:
    if isinstance(exc, CarrierConfigurationError):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))


__all__ = ["carrier_http_error"]
