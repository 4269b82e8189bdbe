"""
Exceptions raised by the Strava SDK and the coaching layers.

The tool layer turns every one of these into a text response; see
client_factory.tool_errors.
"""

REAUTHORIZE_COMMAND = "fitness-genie-auth url"


class FitnessGenieError(Exception):
    """Base class for all errors raised by this package."""
    error_code = "ERROR"


class StravaAPIError(FitnessGenieError):
    """The Strava API answered with a non-2xx status."""
    error_code = "STRAVA_API_ERROR"

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"Strava API error {status_code}: {message}")


class TokenRefreshError(FitnessGenieError):
    """Refreshing the access token failed. Usually transient, retry later."""
    error_code = "TOKEN_REFRESH_FAILED"


class RefreshTokenInvalidError(TokenRefreshError):
    """Strava rejected the refresh token itself. The app must be re-authorized."""
    error_code = "REAUTHORIZATION_REQUIRED"

    def __init__(self, message: str = None):
        super().__init__(
            message
            or "Refresh token is invalid. You need to re-authorize the app by running: "
            f"{REAUTHORIZE_COMMAND}"
        )


class ToolArgumentError(FitnessGenieError):
    """A tool was called with a missing or malformed argument."""
    error_code = "INVALID_ARGUMENT"


class IngestionError(FitnessGenieError):
    """A knowledge source could not be added to the knowledge base."""
    error_code = "INGESTION_FAILED"
