"""Density and NMFC freight class lookup."""

from __future__ import annotations

from typing import Optional

CUBIC_INCHES_PER_FOOT = 1728

# (minimum density in lb/ft^3, freight class), highest density first
DENSITY_CLASS_TABLE: tuple[tuple[float, str], ...] = (
    (50, "50"),
    (35, "55"),
    (30, "60"),
    (22.5, "65"),
    (15, "70"),
    (13.5, "77.5"),
    (12, "85"),
    (10.5, "92.5"),
    (9, "100"),
    (8, "110"),
    (7, "125"),
    (6, "150"),
    (5, "175"),
    (4, "200"),
    (3, "250"),
    (2, "300"),
    (1, "400"),
)
LOWEST_CLASS = "500"


def _positive(value: Optional[float]) -> bool:
    return value is not None and value > 0


def calculate_density(
    weight_lb: Optional[float],
    length_in: Optional[float],
    width_in: Optional[float],
    height_in: Optional[float],
) -> Optional[float]:
    """Return pounds per cubic foot, or None when any measurement is missing."""
    if not all(_positive(v) for v in (weight_lb, length_in, width_in, height_in)):
        return None
    cubic_feet = (length_in * width_in * height_in) / CUBIC_INCHES_PER_FOOT
    return weight_lb / cubic_feet


def freight_class_for_density(density: float) -> str:
    for threshold, freight_class in DENSITY_CLASS_TABLE:
        if density >= threshold:
            return freight_class
    return LOWEST_CLASS


def calculate_freight_class(
    weight_lb: Optional[float],
    length_in: Optional[float],
    width_in: Optional[float],
    height_in: Optional[float],
) -> str:
    """Freight class for one handling unit; empty string if it cannot be computed."""
    density = calculate_density(weight_lb, length_in, width_in, height_in)
    if density is None:
        return ""
    return freight_class_for_density(density)


__all__ = [
    "DENSITY_CLASS_TABLE",
    "calculate_density",
    "calculate_freight_class",
    "freight_class_for_density",
]
