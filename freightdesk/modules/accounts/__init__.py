"""User accounts and authentication."""

from .exceptions import (
    AccountAlreadyExistsError,
    AccountError,
    AccountInactiveError,
    AccountNotFoundError,
    AccountValidationError,
    InvalidCredentialsError,
)
from .models import (
    UNSET,
    USER_TYPE_ADMIN,
    USER_TYPE_CUSTOMER,
    User,
    UserCreateInput,
    UserUpdateInput,
)
from .service import AccountService, normalize_email, validate_email, validate_password

__all__ = [
    "AccountAlreadyExistsError",
    "AccountError",
    "AccountInactiveError",
    "AccountNotFoundError",
    "AccountService",
    "AccountValidationError",
    "InvalidCredentialsError",
    "UNSET",
    "USER_TYPE_ADMIN",
    "USER_TYPE_CUSTOMER",
    "User",
    "UserCreateInput",
    "UserUpdateInput",
    "normalize_email",
    "validate_email",
    "validate_password",
]
