"""Pure freight helpers: classification, transit estimates and formatting."""

from .classification import (
    DENSITY_CLASS_TABLE,
    calculate_density,
    calculate_freight_class,
    freight_class_for_density,
)
from .formatting import (
    DEFAULT_CARRIER_PHONE,
    digits_only,
    format_phone_display,
    format_phone_for_carrier,
    format_time_display,
    strip_non_ascii,
    to_carrier_time,
    truncate,
    validate_time_range,
)
from .schedule import (
    DEFAULT_TRANSIT_DAYS,
    add_business_days,
    estimate_delivery_date,
    parse_transit_days,
    resolve_transit_days,
)

__all__ = [
    "DEFAULT_CARRIER_PHONE",
    "DEFAULT_TRANSIT_DAYS",
    "DENSITY_CLASS_TABLE",
    "add_business_days",
    "calculate_density",
    "calculate_freight_class",
    "digits_only",
    "estimate_delivery_date",
    "format_phone_display",
    "format_phone_for_carrier",
    "format_time_display",
    "freight_class_for_density",
    "parse_transit_days",
    "resolve_transit_days",
    "strip_non_ascii",
    "to_carrier_time",
    "truncate",
    "validate_time_range",
]
