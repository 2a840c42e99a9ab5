"""Outbound HTTP integrations: RapidDeals shipments and FedEx address checks."""

from .base import CarrierClient
from .exceptions import CarrierConfigurationError, CarrierError
from .fedex import FedexAddressClient
from .mock import MockCarrierClient
from .rapiddeals import RapidDealsClient, is_success

__all__ = [
    "CarrierClient",
    "CarrierConfigurationError",
    "CarrierError",
    "FedexAddressClient",
    "MockCarrierClient",
    "RapidDealsClient",
    "is_success",
]
