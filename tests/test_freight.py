"""
Unit tests for freight classification, transit estimates and formatting helpers.
"""

from __future__ import annotations

from datetime import date

import pytest

from freightdesk.modules.freight import (
    DEFAULT_CARRIER_PHONE,
    add_business_days,
    calculate_density,
    calculate_freight_class,
    estimate_delivery_date,
    format_phone_display,
    format_phone_for_carrier,
    format_time_display,
    parse_transit_days,
    resolve_transit_days,
    strip_non_ascii,
    to_carrier_time,
    truncate,
    validate_time_range,
)

FRIDAY = date(2026, 10, 16)


# ── Density and freight class ────────────────────────────────────────────────


class TestFreightClass:
    def test_density_in_pounds_per_cubic_foot(self) -> None:
        # 48 x 40 x 48 in is 53.33 cubic feet
        assert calculate_density(500, 48, 40, 48) == pytest.approx(9.375)

    def test_missing_dimension_has_no_density(self) -> None:
        assert calculate_density(500, 48, None, 48) is None
        assert calculate_density(0, 48, 40, 48) is None

    @pytest.mark.parametrize(
        ("weight", "dims", "expected"),
        [
            (1000, (12, 12, 12), "50"),
            (1000, (48, 40, 36), "65"),
            (500, (48, 40, 48), "100"),
            (10, (48, 48, 48), "500"),
        ],
    )
    def test_class_from_density(self, weight, dims, expected) -> None:
        assert calculate_freight_class(weight, *dims) == expected

    def test_class_is_empty_when_not_computable(self) -> None:
        assert calculate_freight_class(None, 48, 40, 48) == ""


# ── Transit days and delivery dates ──────────────────────────────────────────


class TestSchedule:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("3-5 business days", 5),
            ("2 days", 2),
            ("1 Day", 1),
            ("Standard", None),
            (None, None),
        ],
    )
    def test_parse_transit_days(self, text, expected) -> None:
        assert parse_transit_days(text) == expected

    def test_business_days_skip_weekend(self) -> None:
        assert FRIDAY.weekday() == 4
        assert add_business_days(FRIDAY, 1) == date(2026, 10, 19)
        assert add_business_days(FRIDAY, 3) == date(2026, 10, 21)

    def test_zero_days_returns_start(self) -> None:
        assert add_business_days(FRIDAY, 0) == FRIDAY

    def test_negative_days_rejected(self) -> None:
        with pytest.raises(ValueError):
            add_business_days(FRIDAY, -1)

    def test_estimate_uses_default_when_guarantee_unparseable(self) -> None:
        """Three business days is the fallback transit time."""
        assert estimate_delivery_date(FRIDAY, "Priority") == date(2026, 10, 21)
        assert estimate_delivery_date(FRIDAY, "1-2 days") == date(2026, 10, 20)

    def test_explicit_transit_days_win(self) -> None:
        assert resolve_transit_days("3-5 business days", 1) == 1
        assert resolve_transit_days("3-5 business days") == 5
        assert resolve_transit_days(None) == 3
        assert estimate_delivery_date(FRIDAY, "Standard", 2) == date(2026, 10, 20)

    def test_estimate_needs_pickup(self) -> None:
        assert estimate_delivery_date(None, "2 days") is None


# ── Formatting ───────────────────────────────────────────────────────────────


class TestPhoneFormatting:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("", ""),
            ("12", "(12"),
            ("12345", "(123) 45"),
            ("1234567890", "(123) 456 7890"),
            ("123-456-78901234", "(123) 456 7890"),
        ],
    )
    def test_progressive_display(self, raw, expected) -> None:
        assert format_phone_display(raw) == expected

    def test_carrier_format_strips_country_code(self) -> None:
        assert format_phone_for_carrier("+1 (555) 123-4567") == "(555) 123-4567"

    def test_carrier_format_default_when_empty(self) -> None:
        assert format_phone_for_carrier(None) == DEFAULT_CARRIER_PHONE

    def test_short_number_passed_through(self) -> None:
        assert format_phone_for_carrier(" 12345 ") == "12345"


class TestTimeFormatting:
    @pytest.mark.parametrize(
        ("start", "end", "expected"),
        [
            ("08:00", "17:00", True),
            ("17:00", "08:00", False),
            ("10:00", "09:30", False),
            ("12:30", "13:00", True),
            ("00:00", "11:59", True),
            ("9:00 AM", "5:00 PM", True),
            ("5:00 PM", "9:00 AM", False),
            ("12:30 PM", "1:00 PM", True),
            ("", "17:00", True),
            ("bad", "17:00", False),
        ],
    )
    def test_validate_time_range(self, start, end, expected) -> None:
        assert validate_time_range(start, end) is expected

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("14:05", "2:05 PM"), ("00:15", "12:15 AM"), ("12:00", "12:00 PM"), ("bogus", "bogus"), ("", "")],
    )
    def test_display_time(self, raw, expected) -> None:
        assert format_time_display(raw) == expected

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("2:05 PM", "14:05"),
            ("12:00 AM", "00:00"),
            ("9:30", "09:30"),
            ("09:30:00", "09:30"),
            (None, "08:30"),
            ("25:00", "08:30"),
        ],
    )
    def test_carrier_time(self, raw, expected) -> None:
        assert to_carrier_time(raw, "08:30") == expected


class TestText:
    def test_strip_non_ascii(self) -> None:
        assert strip_non_ascii("Café Road") == "Caf Road"

    def test_truncate(self) -> None:
        assert truncate("abcdef", 3) == "abc"
        assert truncate(None, 3) == ""
