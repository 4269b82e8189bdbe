"""
Activity tools for the Fitness Genie MCP server.

Recent Strava activities, single-activity detail and training load.
"""

import json

from fastmcp import Context

from fitness_genie.api import activities as api_activities
from fitness_genie.client_factory import get_client, tool_errors


def register_tools(app):
    """Register activity tools with the MCP app."""

    @app.tool()
    @tool_errors
    async def get_recent_activities(ctx: Context, count: int = 10) -> str:
        """
        Get your recent Strava activities.

        Returns distance, duration, heart rate, elevation and, for runs,
        average pace per km.

        Args:
            count: Number of recent activities to fetch (default: 10, max: 30)

        Returns:
            JSON with the activity list
        """
        client = get_client(ctx)
        return json.dumps(api_activities.get_recent_activities(client, count=count), indent=2)

    @app.tool()
    @tool_errors
    async def get_activity_details(activity_id: str, ctx: Context) -> str:
        """
        Get detailed information about a specific Strava activity.

        Includes timing, distance, pace, heart rate, speed, calories,
        perceived effort and start/end coordinates.

        Args:
            activity_id: Strava activity ID (from get_recent_activities)

        Returns:
            JSON with detailed activity data
        """
        client = get_client(ctx)
        return json.dumps(api_activities.get_activity_detail(client, activity_id), indent=2)

    @app.tool()
    @tool_errors
    async def analyze_training_load(ctx: Context, days: int = 7) -> str:
        """
        Analyze your recent training load.

        Totals distance, time and activity count over the window, averages
        heart rate over activities that recorded it, breaks activities down
        by type and extrapolates weekly averages.

        Args:
            days: Number of days to analyze (default: 7)

        Returns:
            JSON with training load summary
        """
        client = get_client(ctx)
        return json.dumps(api_activities.get_training_load(client, days=days), indent=2)

    return app
