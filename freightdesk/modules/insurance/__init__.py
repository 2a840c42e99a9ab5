"""Cargo insurance quotes through the carrier."""

from .exceptions import InsuranceError, InsuranceValidationError
from .models import InsuranceQuote
from .service import InsuranceService

__all__ = ["InsuranceError", "InsuranceQuote", "InsuranceService", "InsuranceValidationError"]
