"""Shipment orders: placement, cancellation, refunds and carrier sync."""

from .exceptions import OrderError, OrderNotFoundError, OrderStateError, OrderValidationError
from .models import (
    CARRIER_STATUS_MAP,
    Order,
    OrderItem,
    RefundResult,
    SyncResult,
    map_carrier_status,
)
from .service import OrderService

__all__ = [
    "CARRIER_STATUS_MAP",
    "Order",
    "OrderError",
    "OrderItem",
    "OrderNotFoundError",
    "OrderService",
    "OrderStateError",
    "OrderValidationError",
    "RefundResult",
    "SyncResult",
    "map_carrier_status",
]
