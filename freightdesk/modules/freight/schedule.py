"""Transit time parsing and business-day delivery estimates."""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Optional

DEFAULT_TRANSIT_DAYS = 3

_TRANSIT_PATTERN = re.compile(r"(\d+)(?:-(\d+))?\s*(?:business\s*)?days?", re.IGNORECASE)


def parse_transit_days(text: Optional[str]) -> Optional[int]:
    """Extract the transit day count from carrier guarantee text.

    "3-5 business days" yields 5: for a range the upper bound is used.
    """
    if not text:
        return None
    match = _TRANSIT_PATTERN.search(text)
    if match is None:
        return None
    low = int(match.group(1))
    high = int(match.group(2)) if match.group(2) else low
    return max(low, high)


def add_business_days(start: date, days: int) -> date:
    """Add ``days`` weekdays to ``start``; Saturday and Sunday are skipped."""
    if days < 0:
        raise ValueError("days must be non-negative")
    current = start
    remaining = days
    while remaining > 0:
        current += timedelta(days=1)
        if current.weekday() < 5:
            remaining -= 1
    return current


def resolve_transit_days(
    guarantee: Optional[str],
    transit_days: Optional[int] = None,
    default_days: int = DEFAULT_TRANSIT_DAYS,
) -> int:
    """An explicit day count wins, then the guarantee text, then ``default_days``."""
    if transit_days is not None:
        return transit_days
    days = parse_transit_days(guarantee)
    return default_days if days is None else days


def estimate_delivery_date(
    pickup: Optional[date],
    guarantee: Optional[str],
    transit_days: Optional[int] = None,
    default_days: int = DEFAULT_TRANSIT_DAYS,
) -> Optional[date]:
    if pickup is None:
        return None
    return add_business_days(pickup, resolve_transit_days(guarantee, transit_days, default_days))


__all__ = [
    "DEFAULT_TRANSIT_DAYS",
    "add_business_days",
    "estimate_delivery_date",
    "parse_transit_days",
    "resolve_transit_days",
]
