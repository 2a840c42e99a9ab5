"""Payment configuration exceptions."""


class PaymentConfigError(Exception):
    """Base class for payment configuration errors."""


class PaymentConfigNotFoundError(PaymentConfigError):
    """Raised when a configuration does not exist or is not the admin's."""


class PaymentConfigConflictError(PaymentConfigError):
    """Raised on a duplicate country/method pair or a delete of a config in use."""


class PaymentConfigValidationError(PaymentConfigError):
    """Raised when required fields are missing."""
