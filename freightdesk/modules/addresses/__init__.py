"""Saved pickup and delivery addresses."""

from .exceptions import AddressError, AddressLookupError, AddressNotFoundError, AddressValidationError
from .models import ADDRESS_TYPES, Address, AddressValidationResult
from .service import AddressService

__all__ = [
    "ADDRESS_TYPES",
    "Address",
    "AddressError",
    "AddressLookupError",
    "AddressNotFoundError",
    "AddressService",
    "AddressValidationError",
    "AddressValidationResult",
]
