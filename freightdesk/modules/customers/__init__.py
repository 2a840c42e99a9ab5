"""Admin management of customer accounts."""

from .exceptions import CustomerError, CustomerNotFoundError, CustomerValidationError
from .models import Customer, CustomerCreateInput, CustomerUpdateInput
from .service import CustomerService

__all__ = [
    "Customer",
    "CustomerCreateInput",
    "CustomerError",
    "CustomerNotFoundError",
    "CustomerService",
    "CustomerUpdateInput",
    "CustomerValidationError",
]
