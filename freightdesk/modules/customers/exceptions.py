"""Customer management errors."""


class CustomerError(Exception):
    """Base class for customer management errors."""


class CustomerNotFoundError(CustomerError):
    """Raised when the id does not belong to a customer account."""


class CustomerValidationError(CustomerError):
    """Raised for out-of-range price ratios or bonus credit."""
