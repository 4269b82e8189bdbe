"""
Client and session factory for the Fitness Genie MCP server.

- get_client(ctx): Strava client sharing one process-wide TokenManager,
  since the credential pair belongs to the .env file, not to a session.
- get_session(ctx): CoachingSession keyed by the MCP session id, so each
  connection has its own profile and progress log.
- tool_errors: decorator that turns any exception raised by a tool into a
  JSON error payload instead of a transport-level failure.
"""

import functools
import json
import logging
from collections import OrderedDict

from fastmcp import Context

from fitness_genie.config import Settings, load_settings
from fitness_genie.sdk.auth import TokenManager
from fitness_genie.sdk.client import StravaClient
from fitness_genie.sdk.errors import (
    FitnessGenieError,
    RefreshTokenInvalidError,
    StravaAPIError,
    TokenRefreshError,
)
from fitness_genie.session import CoachingSession

logger = logging.getLogger(__name__)

DEFAULT_SESSION_KEY = "default"

# Least recently used sessions are dropped past this many
MAX_SESSIONS = 100

_sessions: "OrderedDict[str, CoachingSession]" = OrderedDict()


@functools.lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Settings loaded once per process."""
    return load_settings()


@functools.lru_cache(maxsize=None)
def get_token_manager() -> TokenManager:
    """The process-wide token manager built from settings."""
    return TokenManager.from_settings(get_settings())


def get_client(ctx: Context) -> StravaClient:
    """
    Get a Strava client for a tool call.

    Usage in tools:
        @app.tool()
        async def get_athlete_profile(ctx: Context) -> str:
            client = get_client(ctx)
            return json.dumps(api_profile.get_athlete_profile(client))

    Args:
        ctx: FastMCP Context (automatically injected by framework)

    Returns:
        StravaClient backed by the shared TokenManager
    """
    return StravaClient(get_token_manager())


def _session_key(ctx: Context) -> str:
    """MCP session id, or the default key outside an HTTP session."""
    if ctx is None:
        return DEFAULT_SESSION_KEY
    try:
        session_id = getattr(ctx, "session_id", None)
    except (RuntimeError, ValueError):
        # session_id not available (not in request context)
        return DEFAULT_SESSION_KEY
    return session_id or DEFAULT_SESSION_KEY


def get_session(ctx: Context) -> CoachingSession:
    """
    Get (or create) the coaching session for this MCP connection.

    At most MAX_SESSIONS sessions are kept; creating one more drops the
    session that was used least recently.

    Args:
        ctx: FastMCP Context

    Returns:
        CoachingSession for the caller
    """
    key = _session_key(ctx)
    session = _sessions.get(key)
    if session is not None:
        _sessions.move_to_end(key)
        return session

    session = CoachingSession(ingestion_mode=get_settings().ingestion_mode)
    _sessions[key] = session
    logger.info(f"Created coaching session '{key}'")

    while len(_sessions) > MAX_SESSIONS:
        evicted, _ = _sessions.popitem(last=False)
        logger.info(f"Dropped idle coaching session '{evicted}'")
    return session


def clear_sessions() -> None:
    """Drop all coaching sessions."""
    _sessions.clear()


def error_response(error: Exception) -> str:
    """
    Convert an exception into the JSON error text returned by tools.

    Args:
        error: The exception raised while running a tool

    Returns:
        JSON string with error, error_code and, where useful, a solution
    """
    if isinstance(error, FitnessGenieError):
        error_code = error.error_code
        logger.warning(f"Tool error ({error_code}): {error}")
    elif isinstance(error, ValueError):
        error_code = "INVALID_ARGUMENT"
        logger.warning(f"Tool error ({error_code}): {error}")
    else:
        error_code = "UNEXPECTED_ERROR"
        logger.exception("Unexpected tool error")

    payload = {"error": str(error), "error_code": error_code}

    if isinstance(error, RefreshTokenInvalidError):
        payload["solution"] = (
            "Re-authorize the app:\n"
            "  1. Run `fitness-genie-auth url` and open the printed link\n"
            "  2. Approve access on Strava and copy the redirect URL\n"
            "  3. Run `fitness-genie-auth complete \"<redirect_url>\"`\n"
            "  4. Put the printed tokens in your .env file and restart the server"
        )
    elif isinstance(error, TokenRefreshError):
        payload["note"] = "Strava could not refresh the session right now. Try again in a moment."
    elif isinstance(error, StravaAPIError):
        payload["status"] = error.status_code

    return json.dumps(payload, indent=2)


def tool_errors(fn):
    """Wrap an async tool so exceptions come back as error text."""

    @functools.wraps(fn)
    async def wrapper(*args, **kwargs):
        try:
            return await fn(*args, **kwargs)
        except Exception as e:
            return error_response(e)

    return wrapper
