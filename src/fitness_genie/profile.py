"""
Athlete profile tool for the Fitness Genie MCP server.
"""

import json

from fastmcp import Context

from fitness_genie.api import profile as api_profile
from fitness_genie.client_factory import get_client, tool_errors


def register_tools(app):
    """Register profile tools with the MCP app."""

    @app.tool()
    @tool_errors
    async def get_athlete_profile(ctx: Context) -> str:
        """
        Get your Strava athlete profile.

        Returns name, location, activity and follower counts, and the date
        the account was created.

        Returns:
            JSON with athlete profile
        """
        client = get_client(ctx)
        return json.dumps(api_profile.get_athlete_profile(client), indent=2)

    return app
