"""Errors raised by outbound carrier integrations."""


class CarrierError(Exception):
    """The carrier rejected a request or could not be reached."""

    def __init__(self, message: str, *, status_code: int | None = None, payload: object = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class CarrierConfigurationError(CarrierError):
    """Credentials for the carrier API are missing."""
