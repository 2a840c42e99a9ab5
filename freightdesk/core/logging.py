"""Logging setup shared by the API process and the maintenance scripts."""

from __future__ import annotations

import logging
from logging.config import dictConfig

from freightdesk.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(settings: Settings) -> None:
    level = "DEBUG" if settings.debug else settings.log_level.upper()
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"default": {"format": LOG_FORMAT}},
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "loggers": {
                "freightdesk": {"handlers": ["console"], "level": level, "propagate": False},
                # httpx logs every request at INFO
                "httpx": {"level": "WARNING"},
            },
        }
    )
    logging.getLogger(__name__).debug("Logging configured at %s", level)


__all__ = ["configure_logging", "LOG_FORMAT"]
