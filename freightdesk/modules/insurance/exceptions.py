"""Insurance quote errors."""


class InsuranceError(Exception):
    """Base class for insurance errors."""


class InsuranceValidationError(InsuranceError):
    """Raised when a required shipment field is missing."""
