"""Tests for SDK client (HTTP transport, bearer auth, error mapping)."""

import pytest
from unittest.mock import patch, Mock

from fitness_genie.sdk.client import StravaClient
from fitness_genie.sdk.errors import RefreshTokenInvalidError, StravaAPIError


@pytest.fixture
def token_manager():
    manager = Mock()
    manager.get_valid_access_token = Mock(return_value="tok")
    return manager


class TestMakeRequest:
    def test_sends_bearer_token(self, token_manager):
        client = StravaClient(token_manager)
        with patch.object(client._session, "request") as mock_request:
            mock_request.return_value = Mock(ok=True, json=lambda: {"id": 1})
            result = client.make_request("get", "athlete")

            assert result == {"id": 1}
            args, kwargs = mock_request.call_args
            assert args == ("GET", "https://www.strava.com/api/v3/athlete")
            assert kwargs["headers"] == {"Authorization": "Bearer tok"}
            assert kwargs["params"] is None

    def test_passes_query_params(self, token_manager):
        client = StravaClient(token_manager, api_url="http://test/api")
        with patch.object(client._session, "request") as mock_request:
            mock_request.return_value = Mock(ok=True, json=lambda: [])
            client.make_request("GET", "athlete/activities", params={"per_page": 5})

            args, kwargs = mock_request.call_args
            assert args[1] == "http://test/api/athlete/activities"
            assert kwargs["params"] == {"per_page": 5}

    def test_asks_for_token_on_every_request(self, token_manager):
        client = StravaClient(token_manager)
        with patch.object(client._session, "request") as mock_request:
            mock_request.return_value = Mock(ok=True, json=lambda: {})
            client.make_request("GET", "athlete")
            client.make_request("GET", "athlete")

        assert token_manager.get_valid_access_token.call_count == 2

    def test_raises_on_api_error(self, token_manager):
        client = StravaClient(token_manager)
        with patch.object(client._session, "request") as mock_request:
            mock_request.return_value = Mock(
                ok=False,
                status_code=404,
                reason="Not Found",
                json=lambda: {"message": "Record Not Found", "errors": []},
            )
            with pytest.raises(StravaAPIError, match="Record Not Found") as exc_info:
                client.make_request("GET", "activities/999")

        assert exc_info.value.status_code == 404

    def test_error_without_json_body(self, token_manager):
        client = StravaClient(token_manager)
        with patch.object(client._session, "request") as mock_request:
            response = Mock(ok=False, status_code=502, text="", reason="Bad Gateway")
            response.json.side_effect = ValueError("no json")
            mock_request.return_value = response

            with pytest.raises(StravaAPIError, match="Bad Gateway"):
                client.make_request("GET", "athlete")

    def test_token_errors_propagate(self, token_manager):
        token_manager.get_valid_access_token.side_effect = RefreshTokenInvalidError()
        client = StravaClient(token_manager)
        with patch.object(client._session, "request") as mock_request:
            with pytest.raises(RefreshTokenInvalidError):
                client.make_request("GET", "athlete")
            mock_request.assert_not_called()
