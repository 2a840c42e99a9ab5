"""Top-up domain specific exceptions."""


class TopupError(Exception):
    """Base class for top-up errors."""


class TopupNotFoundError(TopupError):
    """Raised when a top-up request id is unknown."""


class TopupValidationError(TopupError):
    """Raised for invalid amounts, inactive configs or missing review notes."""


class TopupPermissionError(TopupError):
    """Raised when a non-customer submits a top-up."""


class TopupStateError(TopupError):
    """Raised when reviewing a request that is no longer pending."""
