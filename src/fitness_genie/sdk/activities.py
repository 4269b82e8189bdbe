"""
Strava activities SDK functions.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from fitness_genie.sdk.client import StravaClient


def list_activities(
    client: StravaClient,
    per_page: int = 10,
    after: Optional[datetime] = None,
) -> List[Dict[str, Any]]:
    """
    Get one page of the athlete's activities, newest first.

    GET athlete/activities

    Args:
        per_page: Page size
        after: Only activities that started after this time

    Returns:
        [{id, name, type, start_date, distance, moving_time, average_heartrate, ...}]
    """
    params = {"per_page": per_page}
    if after:
        params["after"] = int(after.timestamp())

    return client.make_request("GET", "athlete/activities", params=params)


def get_activity(client: StravaClient, activity_id: str) -> Dict[str, Any]:
    """
    Get detailed information about an activity.

    GET activities/{id}

    Returns:
        {id, name, type, start_date, distance, moving_time, calories,
         average_speed, start_latlng, end_latlng, ...}
    """
    return client.make_request("GET", f"activities/{activity_id}")
