"""Balance domain specific exceptions."""


class BalanceError(Exception):
    """Base class for balance errors."""


class InsufficientBalanceError(BalanceError):
    """Raised when an account cannot cover a charge."""


class TransactionValidationError(BalanceError):
    """Raised for malformed manual transactions."""


class TransactionPermissionError(BalanceError):
    """Raised when a non-admin requests an admin-only posting."""
