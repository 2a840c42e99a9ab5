"""Phone, time and text normalisation used by forms and carrier payloads."""

from __future__ import annotations

import re
from typing import Optional

DEFAULT_CARRIER_PHONE = "(000) 000-0000"

_NON_DIGIT = re.compile(r"\D")
_TIME_12H = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*([AaPp][Mm])\s*$")
_TIME_24H = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::\d{2})?\s*$")


def digits_only(value: Optional[str]) -> str:
    return _NON_DIGIT.sub("", value or "")


def format_phone_display(value: Optional[str]) -> str:
    """Progressive "(123) 456 7890" formatting for partially typed numbers."""
    digits = digits_only(value)[:10]
    if not digits:
        return ""
    if len(digits) <= 3:
        return f"({digits}"
    if len(digits) <= 6:
        return f"({digits[:3]}) {digits[3:]}"
    return f"({digits[:3]}) {digits[3:6]} {digits[6:]}"


def format_phone_for_carrier(value: Optional[str]) -> str:
    digits = digits_only(value)
    if not digits:
        return DEFAULT_CARRIER_PHONE
    if len(digits) == 11 and digits.startswith("1"):
        digits = digits[1:]
    if len(digits) >= 10:
        return f"({digits[:3]}) {digits[3:6]}-{digits[6:10]}"
    return (value or "").strip()


def _parse_time(value: str) -> Optional[tuple[int, int]]:
    """24-hour (hour, minute) from "14:05", "14:05:00" or "2:05 PM"."""
    match = _TIME_12H.match(value)
    if match is not None:
        hour, minute, period = int(match.group(1)), int(match.group(2)), match.group(3).upper()
        if not 1 <= hour <= 12 or minute > 59:
            return None
        return hour % 12 + (12 if period == "PM" else 0), minute
    match = _TIME_24H.match(value)
    if match is not None:
        hour, minute = int(match.group(1)), int(match.group(2))
        if hour <= 23 and minute <= 59:
            return hour, minute
    return None


def validate_time_range(start: Optional[str], end: Optional[str]) -> bool:
    """Check that a pickup/delivery window ends after it starts.

    Empty sides are accepted. Hours before noon count as AM: a window from AM
    to PM is always valid and one from PM to AM never is; within the same
    period minutes are compared.
    """
    if not start or not end:
        return True
    parsed_start = _parse_time(start)
    parsed_end = _parse_time(end)
    if parsed_start is None or parsed_end is None:
        return False
    if parsed_start[0] < 12 <= parsed_end[0]:
        return True
    if parsed_end[0] < 12 <= parsed_start[0]:
        return False
    return parsed_end[0] * 60 + parsed_end[1] > parsed_start[0] * 60 + parsed_start[1]


def format_time_display(value: Optional[str]) -> str:
    """Convert "14:05" to "2:05 PM". Unparseable input is returned unchanged."""
    if not value:
        return ""
    match = _TIME_24H.match(value)
    if match is None:
        return value
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return value
    period = "PM" if hour >= 12 else "AM"
    display_hour = hour % 12 or 12
    return f"{display_hour}:{minute:02d} {period}"


def to_carrier_time(value: Optional[str], default: str) -> str:
    """Normalise "2:05 PM" or "14:05" to the carrier's 24-hour "HH:MM"."""
    if not value:
        return default
    parsed = _parse_time(value)
    if parsed is None:
        return default
    return f"{parsed[0]:02d}:{parsed[1]:02d}"


def strip_non_ascii(value: Optional[str]) -> str:
    return (value or "").encode("ascii", "ignore").decode("ascii")


def truncate(value: Optional[str], limit: int) -> str:
    return (value or "")[:limit]


__all__ = [
    "DEFAULT_CARRIER_PHONE",
    "digits_only",
    "format_phone_display",
    "format_phone_for_carrier",
    "format_time_display",
    "strip_non_ascii",
    "to_carrier_time",
    "truncate",
    "validate_time_range",
]
