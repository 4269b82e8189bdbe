"""
Tests for Fitness Genie utility functions.
"""

from datetime import date

import pytest

from fitness_genie.utils import (
    activity_pace,
    clean_nones,
    format_pace,
    format_signed,
    meters_to_km,
    parse_date,
    round_half_up,
    seconds_to_minutes,
    strava_to_date,
)


class TestRounding:
    def test_half_rounds_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4

    def test_below_half(self):
        assert round_half_up(2.49) == 2


class TestConversions:
    def test_meters_to_km(self):
        assert meters_to_km(5234.6) == 5.23

    def test_meters_to_km_none(self):
        assert meters_to_km(None) == 0

    def test_seconds_to_minutes(self):
        assert seconds_to_minutes(3000) == 50

    def test_seconds_to_minutes_half(self):
        assert seconds_to_minutes(90) == 2


class TestFormatPace:
    def test_format_pace(self):
        assert format_pace(330) == "5:30/km"

    def test_format_pace_rounds_into_next_minute(self):
        assert format_pace(299.7) == "5:00/km"

    def test_format_pace_zero(self):
        assert format_pace(0) is None


class TestActivityPace:
    def test_run(self):
        assert activity_pace("Run", 10000, 3000) == "5:00/km"

    def test_trail_run(self):
        assert activity_pace("TrailRun", 5000, 1800) == "6:00/km"

    def test_not_a_run(self):
        assert activity_pace("Ride", 20000, 3600) is None

    def test_zero_distance(self):
        assert activity_pace("Run", 0, 1200) is None


class TestDates:
    def test_strava_to_date(self):
        assert strava_to_date("2026-10-15T06:30:00Z") == "2026-10-15"

    def test_strava_to_date_none(self):
        assert strava_to_date(None) is None

    def test_parse_date(self):
        assert parse_date("2026-10-17") == date(2026, 10, 17)

    def test_parse_date_invalid(self):
        with pytest.raises(ValueError):
            parse_date("17/10/2026")


def test_format_signed():
    assert format_signed(1.5) == "+1.5"
    assert format_signed(-0.3) == "-0.3"
    assert format_signed(0) == "+0.0"


def test_clean_nones():
    assert clean_nones({"a": 1, "b": None, "c": {"d": None, "e": 2}}) == {"a": 1, "c": {"e": 2}}
