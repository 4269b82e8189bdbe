"""
Strava athlete SDK functions.
"""

from typing import Any, Dict

from fitness_genie.sdk.client import StravaClient


def get_athlete(client: StravaClient) -> Dict[str, Any]:
    """
    Get the authenticated athlete's profile.

    GET athlete

    Returns:
        {id, firstname, lastname, city, state, created_at, profile, ...}
    """
    return client.make_request("GET", "athlete")
