"""Tests for api/profile.py: Strava athlete profile."""

from unittest.mock import Mock, patch

from fitness_genie.api.profile import get_athlete_profile


@patch("fitness_genie.api.profile.sdk_athlete")
def test_get_athlete_profile(mock_sdk):
    mock_sdk.get_athlete.return_value = {
        "id": 12345,
        "firstname": "Alex",
        "lastname": "Runner",
        "city": "Lyon",
        "state": "Auvergne-Rhone-Alpes",
        "country": "France",
        "sex": "M",
        "weight": 72.5,
        "created_at": "2019-03-01T10:00:00Z",
        "profile": "https://example.com/pic.jpg",
        "follower_count": 10,
    }

    result = get_athlete_profile(Mock())

    assert result["athlete_id"] == 12345
    assert result["name"] == "Alex Runner"
    assert result["location"] == "Lyon, Auvergne-Rhone-Alpes"
    assert result["created"] == "2019-03-01"
    assert result["profile_picture"] == "https://example.com/pic.jpg"
    assert result["follower_count"] == 10
    assert "activity_count" not in result


@patch("fitness_genie.api.profile.sdk_athlete")
def test_get_athlete_profile_sparse(mock_sdk):
    mock_sdk.get_athlete.return_value = {"id": 1, "firstname": "Sam"}

    result = get_athlete_profile(Mock())

    assert result == {"athlete_id": 1, "name": "Sam"}
