"""Address domain specific exceptions."""


class AddressError(Exception):
    """Base class for address errors."""


class AddressNotFoundError(AddressError):
    """Raised when an address is missing or belongs to someone else."""


class AddressValidationError(AddressError):
    """Raised when address fields are missing or invalid."""


class AddressLookupError(AddressError):
    """Raised when the address verification provider fails."""
