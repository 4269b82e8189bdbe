"""
Activity history: what have you done?

Recent sessions, single-activity detail, and training load over a window.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

from fitness_genie.sdk.client import StravaClient
from fitness_genie.sdk import activities as sdk_activities
from fitness_genie.sdk.errors import ToolArgumentError
from fitness_genie.utils import (
    activity_pace,
    clean_nones,
    meters_to_km,
    round_half_up,
    seconds_to_minutes,
    strava_to_date,
)


# Strava's page size limit for the activity list
MAX_PER_PAGE = 30
DEFAULT_COUNT = 10

# One page is fetched for the training load window
TRAINING_LOAD_PAGE_SIZE = 50


def get_recent_activities(client: StravaClient, count: int = DEFAULT_COUNT) -> dict:
    """Most recent activities with distance, duration, heart rate and pace."""
    if count is None or count < 1:
        raise ToolArgumentError("count must be a positive integer")

    data = sdk_activities.list_activities(client, per_page=min(count, MAX_PER_PAGE))
    activities = [summarize_activity(a) for a in data]

    return {
        "count": len(activities),
        "activities": activities,
    }


def summarize_activity(activity: Dict[str, Any]) -> dict:
    """Human units for one activity from the list endpoint."""
    distance = activity.get("distance") or 0
    moving_time = activity.get("moving_time") or 0

    return clean_nones({
        "id": activity.get("id"),
        "name": activity.get("name"),
        "type": activity.get("type"),
        "date": strava_to_date(activity.get("start_date")),
        "distance_km": meters_to_km(distance),
        "duration_minutes": seconds_to_minutes(moving_time),
        "avg_heart_rate": _round_hr(activity.get("average_heartrate")),
        "max_heart_rate": _round_hr(activity.get("max_heartrate")),
        "avg_pace_per_km": activity_pace(activity.get("type"), distance, moving_time),
        "elevation_gain_m": activity.get("total_elevation_gain"),
    })


def get_activity_detail(client: StravaClient, activity_id: str) -> dict:
    """Full activity: timing, distance, heart rate, speed, location."""
    if not activity_id or not str(activity_id).strip():
        raise ToolArgumentError("activity_id is required")

    data = sdk_activities.get_activity(client, str(activity_id).strip())
    distance = data.get("distance") or 0
    moving_time = data.get("moving_time") or 0
    avg_speed = data.get("average_speed")

    return clean_nones({
        "activity_id": data.get("id", activity_id),
        "name": data.get("name"),
        "type": data.get("type"),
        "start_time": data.get("start_date"),

        # Distance and timing
        "distance_km": meters_to_km(distance),
        "duration_minutes": seconds_to_minutes(moving_time),
        "avg_pace_per_km": activity_pace(data.get("type"), distance, moving_time),
        "elevation_gain_m": data.get("total_elevation_gain"),

        # Heart rate
        "avg_heart_rate": _round_hr(data.get("average_heartrate")),
        "max_heart_rate": _round_hr(data.get("max_heartrate")),

        # Performance
        "avg_speed_kmh": round(avg_speed * 3.6, 1) if avg_speed else None,
        "calories": data.get("calories") or None,
        "perceived_exertion": data.get("perceived_exertion"),

        # Location
        "start_latlng": data.get("start_latlng") or None,
        "end_latlng": data.get("end_latlng") or None,
    })


def get_training_load(client: StravaClient, days: int = 7, now: datetime = None) -> dict:
    """Fetch the activities of the last `days` days and summarize their load."""
    if days is None or days < 1:
        raise ToolArgumentError("days must be a positive integer")

    now = now or datetime.now(timezone.utc)
    since = now - timedelta(days=days)

    data = sdk_activities.list_activities(
        client, per_page=TRAINING_LOAD_PAGE_SIZE, after=since,
    )
    result = summarize_training_load(data, days)
    result["period"]["since"] = since.date().isoformat()
    return result


def summarize_training_load(activities: List[Dict[str, Any]], days: int) -> dict:
    """
    Totals, heart rate, per-type counts and weekly rates for a window.

    Weekly rates scale linearly (metric * 7 / days). Average heart rate
    only counts activities that recorded one.
    """
    if not activities:
        return {
            "period": {"days": days},
            "activity_count": 0,
            "message": f"No activities found in the last {days} days.",
        }

    total_distance_km = sum(a.get("distance") or 0 for a in activities) / 1000
    total_minutes = sum(a.get("moving_time") or 0 for a in activities) / 60
    total_hours = total_minutes / 60

    heart_rates = [a["average_heartrate"] for a in activities if a.get("average_heartrate")]
    avg_hr = round_half_up(sum(heart_rates) / len(heart_rates)) if heart_rates else None

    by_type = {}
    for a in activities:
        activity_type = a.get("type") or "Unknown"
        by_type[activity_type] = by_type.get(activity_type, 0) + 1

    return {
        "period": {"days": days},
        "activity_count": len(activities),
        "totals": {
            "distance_km": round(total_distance_km, 2),
            "time_hours": round(total_hours, 1),
            "avg_heart_rate": avg_hr,
        },
        "by_type": by_type,
        "weekly_averages": {
            "distance_km": round(total_distance_km * 7 / days, 1),
            "time_hours": round(total_hours * 7 / days, 1),
            "activities": round(len(activities) * 7 / days, 1),
        },
    }


def _round_hr(value):
    return round_half_up(value) if value else None
