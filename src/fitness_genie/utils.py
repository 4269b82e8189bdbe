"""
Shared utility functions for the Fitness Genie MCP server.

Unit conversions, rounding and formatting helpers used across domain modules.
"""

import math
from datetime import date, datetime
from typing import Optional


# Strava activity types that get a running pace
RUN_TYPES = {"Run", "TrailRun", "VirtualRun"}


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up.

    Python's round() uses banker's rounding (round(2.5) == 2); calorie and
    duration figures use conventional rounding instead.
    """
    return int(math.floor(value + 0.5))


def meters_to_km(meters: float) -> float:
    """Convert meters to kilometers with 2 decimals.

    Args:
        meters: Distance in meters

    Returns:
        Distance in km, e.g. 5234.6 -> 5.23
    """
    return round((meters or 0) / 1000, 2)


def seconds_to_minutes(seconds: float) -> int:
    """Convert seconds to whole minutes."""
    return round_half_up((seconds or 0) / 60)


def format_pace(seconds_per_km: float) -> Optional[str]:
    """Format a pace in seconds per km as min:sec/km.

    Args:
        seconds_per_km: Pace in seconds per km

    Returns:
        Formatted string like "5:30/km", or None for a non-positive pace
    """
    if not seconds_per_km or seconds_per_km <= 0:
        return None
    minutes, secs = divmod(round_half_up(seconds_per_km), 60)
    return f"{minutes}:{secs:02d}/km"


def activity_pace(activity_type: str, distance_m: float, moving_time_s: float) -> Optional[str]:
    """Pace for a run, None for other activity types or zero distance."""
    if activity_type not in RUN_TYPES or not distance_m or distance_m <= 0:
        return None
    return format_pace(moving_time_s / (distance_m / 1000))


def parse_strava_datetime(value: str) -> Optional[datetime]:
    """Parse a Strava ISO-8601 timestamp like "2026-02-10T06:30:00Z"."""
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def strava_to_date(value: str) -> Optional[str]:
    """Convert a Strava timestamp to YYYY-MM-DD, or None if missing."""
    parsed = parse_strava_datetime(value)
    return parsed.date().isoformat() if parsed else None


def parse_date(date_str: str) -> date:
    """Parse a YYYY-MM-DD string.

    Raises:
        ValueError: If the string is not a valid date
    """
    return datetime.strptime(date_str, "%Y-%m-%d").date()


def format_signed(value: float, decimals: int = 1) -> str:
    """Format a number with an explicit sign, e.g. +1.5 or -0.3."""
    return f"{value:+.{decimals}f}"


def clean_nones(d):
    """Recursively remove None values from a dict."""
    if isinstance(d, dict):
        return {k: clean_nones(v) for k, v in d.items() if v is not None}
    if isinstance(d, list):
        return [clean_nones(i) for i in d]
    return d
