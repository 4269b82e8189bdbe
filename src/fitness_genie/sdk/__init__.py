"""
Strava API Low-Level SDK.

Thin wrapper over the Strava v3 HTTP API.
Each function maps 1:1 to a Strava endpoint.
"""

from fitness_genie.sdk.auth import TokenManager
from fitness_genie.sdk.client import StravaClient
from fitness_genie.sdk.errors import (
    FitnessGenieError,
    IngestionError,
    RefreshTokenInvalidError,
    StravaAPIError,
    TokenRefreshError,
    ToolArgumentError,
)

__all__ = [
    "TokenManager",
    "StravaClient",
    "FitnessGenieError",
    "IngestionError",
    "RefreshTokenInvalidError",
    "StravaAPIError",
    "TokenRefreshError",
    "ToolArgumentError",
]
