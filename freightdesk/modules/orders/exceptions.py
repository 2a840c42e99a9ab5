"""Order domain specific exceptions."""


class OrderError(Exception):
    """Base class for order errors."""


class OrderNotFoundError(OrderError):
    """Raised when an order does not exist or is not visible to the caller."""


class OrderValidationError(OrderError):
    """Raised when a place-order request is incomplete."""


class OrderStateError(OrderError):
    """Raised when an action is not allowed from the order's current status."""
