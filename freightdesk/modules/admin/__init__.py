"""System-wide admin maintenance."""

from .service import ResetReport, SystemService

__all__ = ["ResetReport", "SystemService"]
