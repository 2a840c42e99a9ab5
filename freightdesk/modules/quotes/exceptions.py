"""Quote errors."""


class QuoteError(Exception):
    """Base class for quote errors."""


class QuoteValidationError(QuoteError):
    """Raised when a quote or order payload lacks required data."""
