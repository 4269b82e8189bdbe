"""
Strava OAuth2 credential handling.

TokenManager keeps the access/refresh token pair, checks the access token
against the API before use and swaps in a new pair when Strava reports it
as invalid. New tokens are written back to the .env file so the next
process start picks them up.

The helpers at the bottom cover the one-time authorization-code flow used
by the fitness-genie-auth CLI.
"""

import logging
import os
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import parse_qs, urlencode, urlparse

import requests

from fitness_genie.sdk.errors import (
    RefreshTokenInvalidError,
    StravaAPIError,
    TokenRefreshError,
)

logger = logging.getLogger(__name__)

API_URL = "https://www.strava.com/api/v3"
TOKEN_URL = "https://www.strava.com/oauth/token"
AUTHORIZE_URL = "https://www.strava.com/oauth/authorize"

# Seconds to wait for the token validation probe
VALIDATION_TIMEOUT = 5

ACCESS_TOKEN_KEY = "STRAVA_ACCESS_TOKEN"
REFRESH_TOKEN_KEY = "STRAVA_REFRESH_TOKEN"


class TokenManager:
    """
    Access/refresh token pair for one Strava athlete.

    The access token is validated on every call to get_valid_access_token().
    Only an explicit 401 counts as invalid; network errors and other
    statuses leave the token in use.
    """

    def __init__(
        self,
        client_id: str = "",
        client_secret: str = "",
        access_token: str = "",
        refresh_token: str = "",
        env_file: Optional[Path] = None,
    ):
        self._client_id = client_id
        self._client_secret = client_secret
        self._access_token = access_token or None
        self._refresh_token = refresh_token or None
        self._expires_at: Optional[int] = None
        self._env_file = Path(env_file) if env_file else None
        self._session = requests.Session()

    @classmethod
    def from_settings(cls, settings) -> "TokenManager":
        return cls(
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            access_token=settings.access_token,
            refresh_token=settings.refresh_token,
            env_file=settings.env_file,
        )

    @property
    def access_token(self) -> Optional[str]:
        return self._access_token

    @property
    def refresh_token(self) -> Optional[str]:
        return self._refresh_token

    @property
    def expires_at(self) -> Optional[datetime]:
        """Expiry of the current access token, known only after a refresh."""
        if self._expires_at is None:
            return None
        return datetime.fromtimestamp(self._expires_at, tz=timezone.utc)

    def get_valid_access_token(self) -> str:
        """
        Return an access token that Strava accepts.

        Returns:
            The cached token if it is still valid, otherwise a refreshed one

        Raises:
            RefreshTokenInvalidError: If Strava rejected the refresh token
            TokenRefreshError: If the refresh failed for any other reason
        """
        if self._access_token and self.is_token_valid():
            return self._access_token

        logger.info("Access token invalid or expired, refreshing...")
        return self.refresh_access_token()

    def is_token_valid(self) -> bool:
        """Probe GET /athlete with the cached token."""
        try:
            response = self._session.get(
                f"{API_URL}/athlete",
                headers={"Authorization": f"Bearer {self._access_token}"},
                timeout=VALIDATION_TIMEOUT,
            )
        except requests.RequestException as e:
            logger.warning(f"Unable to verify token, assuming valid: {e}")
            return True

        if response.status_code == 401:
            logger.warning("Token is expired or invalid")
            return False

        if not response.ok:
            logger.warning(
                f"Unable to verify token (HTTP {response.status_code}), assuming valid"
            )
        return True

    def refresh_access_token(self) -> str:
        """
        Exchange the refresh token for a new token pair.

        POST oauth/token (grant_type=refresh_token)

        Returns:
            The new access token
        """
        if not self._refresh_token:
            raise RefreshTokenInvalidError(
                f"No refresh token configured. Set {REFRESH_TOKEN_KEY} or re-authorize "
                "the app by running: fitness-genie-auth url"
            )

        logger.info("Refreshing Strava access token...")
        try:
            response = self._session.post(
                TOKEN_URL,
                data={
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                    "refresh_token": self._refresh_token,
                    "grant_type": "refresh_token",
                },
            )
        except requests.RequestException as e:
            logger.error(f"Failed to refresh token: {e}")
            raise TokenRefreshError(
                "Token refresh failed. You may need to re-authorize the app."
            ) from e

        if not response.ok:
            body = _json_or_empty(response)
            logger.error(f"Failed to refresh token: {body or response.text}")
            if response.status_code == 400 and _refresh_token_rejected(body):
                raise RefreshTokenInvalidError()
            raise TokenRefreshError(
                "Token refresh failed. You may need to re-authorize the app."
            )

        tokens = response.json()
        self._access_token = tokens["access_token"]
        # Strava rotates the refresh token as well
        self._refresh_token = tokens.get("refresh_token", self._refresh_token)
        self._expires_at = tokens.get("expires_at")

        if self.expires_at:
            logger.info(f"Token refreshed successfully, expires at: {self.expires_at.isoformat()}")
        else:
            logger.info("Token refreshed successfully")

        update_env_file(self._env_file, self._access_token, self._refresh_token)
        return self._access_token


def update_env_file(env_file: Optional[Path], access_token: str, refresh_token: str) -> bool:
    """
    Rewrite the token lines of a KEY=value env file in place.

    Only the STRAVA_ACCESS_TOKEN and STRAVA_REFRESH_TOKEN lines change. An
    `export ` prefix and CRLF line endings are preserved, and a missing line
    is appended. The process environment is updated too.

    Returns:
        True if the file was written
    """
    os.environ[ACCESS_TOKEN_KEY] = access_token
    os.environ[REFRESH_TOKEN_KEY] = refresh_token

    if env_file is None or not env_file.exists():
        logger.warning(".env file not found, skipping automatic update")
        return False

    try:
        content = env_file.read_bytes().decode()
        content = _set_env_line(content, ACCESS_TOKEN_KEY, access_token)
        content = _set_env_line(content, REFRESH_TOKEN_KEY, refresh_token)
        env_file.write_bytes(content.encode())
    except OSError as e:
        logger.warning(
            f"Could not update {env_file}: {e}. Manual update needed:\n"
            f"{ACCESS_TOKEN_KEY}={access_token}\n{REFRESH_TOKEN_KEY}={refresh_token}"
        )
        return False

    logger.info(f"{env_file} updated with new tokens")
    return True


def _set_env_line(content: str, key: str, value: str) -> str:
    pattern = re.compile(rf"^((?:export[ \t]+)?){key}=[^\r\n]*", re.MULTILINE)
    if pattern.search(content):
        return pattern.sub(lambda m: f"{m.group(1)}{key}={value}", content, count=1)
    newline = "\r\n" if "\r\n" in content else "\n"
    if content and not content.endswith("\n"):
        content += newline
    return f"{content}{key}={value}{newline}"


def _json_or_empty(response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _refresh_token_rejected(body: Dict[str, Any]) -> bool:
    return any(
        e.get("code") == "invalid" and e.get("field") == "refresh_token"
        for e in body.get("errors", [])
        if isinstance(e, dict)
    )


# ── Authorization-code flow ──────────────────────────────────────────


def build_authorization_url(client_id: str, redirect_uri: str, scope: str) -> str:
    """URL the athlete opens once to grant access to this app."""
    params = {
        "client_id": client_id,
        "response_type": "code",
        "redirect_uri": redirect_uri,
        "approval_prompt": "force",
        "scope": scope,
    }
    return f"{AUTHORIZE_URL}?{urlencode(params, safe=',:/')}"


def extract_authorization_code(redirect_url: str) -> str:
    """
    Pull the ?code= parameter out of the URL Strava redirected to.

    Raises:
        ValueError: If the URL has no code parameter
    """
    codes = parse_qs(urlparse(redirect_url).query).get("code")
    if not codes or not codes[0]:
        raise ValueError("No authorization code found in URL. Make sure it contains ?code=...")
    return codes[0]


def exchange_authorization_code(
    client_id: str,
    client_secret: str,
    code: str,
    session: Optional[requests.Session] = None,
) -> Dict[str, Any]:
    """
    Exchange a one-time authorization code for a token pair.

    POST oauth/token (grant_type=authorization_code)

    Returns:
        {access_token, refresh_token, expires_at, scope, athlete, ...}

    Raises:
        StravaAPIError: If Strava rejects the exchange
    """
    session = session or requests.Session()
    response = session.post(
        TOKEN_URL,
        data={
            "client_id": client_id,
            "client_secret": client_secret,
            "code": code,
            "grant_type": "authorization_code",
        },
    )
    if not response.ok:
        body = _json_or_empty(response)
        raise StravaAPIError(response.status_code, body.get("message") or response.text)
    return response.json()
