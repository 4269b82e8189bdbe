"""Tests for SDK activity and athlete endpoint functions."""

from datetime import datetime, timezone
from unittest.mock import Mock

from fitness_genie.sdk import activities, athlete


def test_list_activities():
    client = Mock()
    client.make_request.return_value = [{"id": 1}]

    result = activities.list_activities(client, per_page=5)

    assert result == [{"id": 1}]
    client.make_request.assert_called_once_with(
        "GET", "athlete/activities", params={"per_page": 5},
    )


def test_list_activities_after():
    client = Mock()
    client.make_request.return_value = []
    after = datetime(2026, 10, 10, tzinfo=timezone.utc)

    activities.list_activities(client, per_page=50, after=after)

    params = client.make_request.call_args.kwargs["params"]
    assert params == {"per_page": 50, "after": int(after.timestamp())}


def test_get_activity():
    client = Mock()
    client.make_request.return_value = {"id": 42}

    assert activities.get_activity(client, "42") == {"id": 42}
    client.make_request.assert_called_once_with("GET", "activities/42")


def test_get_athlete():
    client = Mock()
    client.make_request.return_value = {"id": 7}

    assert athlete.get_athlete(client) == {"id": 7}
    client.make_request.assert_called_once_with("GET", "athlete")
