"""Account domain specific exceptions."""


class AccountError(Exception):
    """Base class for account domain errors."""


class AccountAlreadyExistsError(AccountError):
    """Raised when attempting to create an account with a duplicate email."""


class AccountNotFoundError(AccountError):
    """Raised when the requested account cannot be found."""


class AccountInactiveError(AccountError):
    """Raised when a deactivated account tries to sign in."""


class InvalidCredentialsError(AccountError):
    """Raised when an email/password pair does not match."""


class AccountValidationError(AccountError):
    """Raised when submitted account fields are malformed."""
