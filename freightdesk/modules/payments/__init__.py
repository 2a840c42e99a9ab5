"""Payment instructions shown to customers topping up their balance."""

from .exceptions import (
    PaymentConfigConflictError,
    PaymentConfigError,
    PaymentConfigNotFoundError,
    PaymentConfigValidationError,
)
from .models import COUNTRY_NAMES, Country, PaymentConfig, country_name
from .service import PaymentConfigService

__all__ = [
    "COUNTRY_NAMES",
    "Country",
    "PaymentConfig",
    "PaymentConfigConflictError",
    "PaymentConfigError",
    "PaymentConfigNotFoundError",
    "PaymentConfigService",
    "PaymentConfigValidationError",
    "country_name",
]
