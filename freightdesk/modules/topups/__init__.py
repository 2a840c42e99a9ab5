"""Customer top-up requests and their admin review."""

from .exceptions import (
    TopupError,
    TopupNotFoundError,
    TopupPermissionError,
    TopupStateError,
    TopupValidationError,
)
from .models import ACTION_APPROVE, ACTION_REJECT, STATUSES, TopupRequest
from .service import TopupService

__all__ = [
    "ACTION_APPROVE",
    "ACTION_REJECT",
    "STATUSES",
    "TopupError",
    "TopupNotFoundError",
    "TopupPermissionError",
    "TopupRequest",
    "TopupService",
    "TopupStateError",
    "TopupValidationError",
]
