"""
Strava API HTTP client.

Handles HTTP transport, bearer authentication and error handling.
Endpoint-specific calls live in the sibling modules (athlete, activities).
"""

import logging
from typing import Any, Dict

import requests

from fitness_genie.sdk.auth import API_URL, TokenManager
from fitness_genie.sdk.errors import StravaAPIError

logger = logging.getLogger(__name__)


class StravaClient:
    """
    Strava API v3 transport.

    Every request asks the token manager for a valid access token first,
    which may trigger a single refresh.
    """

    def __init__(self, token_manager: TokenManager, api_url: str = API_URL):
        self._token_manager = token_manager
        self._api_url = api_url
        self._session = requests.Session()

    @property
    def token_manager(self) -> TokenManager:
        return self._token_manager

    def make_request(
        self,
        method: str,
        endpoint: str,
        params: Dict = None,
    ) -> Any:
        """
        Make an authenticated API request.

        Args:
            method: HTTP method (GET/POST)
            endpoint: API endpoint path (e.g. "athlete/activities")
            params: Query parameters

        Returns:
            Decoded JSON response body

        Raises:
            StravaAPIError: If the API returns a non-2xx status
            TokenRefreshError: If no valid access token could be obtained
        """
        access_token = self._token_manager.get_valid_access_token()
        headers = {"Authorization": f"Bearer {access_token}"}
        url = f"{self._api_url}/{endpoint}"

        response = self._session.request(method.upper(), url, headers=headers, params=params)

        if not response.ok:
            raise StravaAPIError(response.status_code, _error_message(response))

        return response.json()


def _error_message(response) -> str:
    """Best-effort message from a Strava error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason or "Unknown API error"
    if isinstance(body, dict) and body.get("message"):
        return body["message"]
    return response.reason or "Unknown API error"
