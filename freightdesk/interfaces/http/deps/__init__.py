"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .integrations import get_carrier, get_fedex

__all__ = [
    "get_carrier",
    "get_db_session",
    "get_fedex",
]
