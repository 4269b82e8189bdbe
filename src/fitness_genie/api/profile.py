"""
Athlete profile: who are you on Strava?
"""

from fitness_genie.sdk.client import StravaClient
from fitness_genie.sdk import athlete as sdk_athlete
from fitness_genie.utils import clean_nones, strava_to_date


def get_athlete_profile(client: StravaClient) -> dict:
    """Identity, location and account stats from GET athlete."""
    data = sdk_athlete.get_athlete(client)

    name = " ".join(p for p in (data.get("firstname"), data.get("lastname")) if p)
    location = ", ".join(p for p in (data.get("city"), data.get("state")) if p)

    return clean_nones({
        "athlete_id": data.get("id"),
        "name": name or None,
        "location": location or None,
        "country": data.get("country"),
        "sex": data.get("sex"),
        "weight_kg": data.get("weight"),
        "activity_count": data.get("activity_count"),
        "follower_count": data.get("follower_count"),
        "created": strava_to_date(data.get("created_at")),
        "profile_picture": data.get("profile"),
    })
