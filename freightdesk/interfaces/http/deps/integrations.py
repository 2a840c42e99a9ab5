"""Outbound client providers, overridable in tests."""

from freightdesk.core.container import get_container
from freightdesk.infrastructure.carriers import CarrierClient, FedexAddressClient


def get_carrier() -> CarrierClient:
    return get_container().carrier


def get_fedex() -> FedexAddressClient:
    return get_container().fedex


__all__ = ["get_carrier", "get_fedex"]
