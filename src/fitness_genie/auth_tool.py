"""
Feature overview tool for the Fitness Genie MCP server.

Strava credentials are not entered through the protocol; they come from
the .env file written by the fitness-genie-auth command.
"""

import json

from fastmcp import Context

from fitness_genie.client_factory import get_session


def register_tools(app):
    """Register the feature overview tool with the MCP app."""

    @app.tool()
    async def get_available_features(ctx: Context) -> str:
        """
        Get list of available Fitness Genie features.

        Returns a summary of the tools this MCP server provides and how
        Strava access is set up.

        Returns:
            JSON with available feature categories
        """
        session = get_session(ctx)
        features = {
            "platform": "Strava + personal coaching",
            "auth": [
                "Run `fitness-genie-auth url` and open the printed link to grant access",
                "Run `fitness-genie-auth complete <redirect_url>` and put the tokens in .env",
                "Access tokens are refreshed automatically and written back to .env",
            ],
            "strava": [
                "get_recent_activities - Recent activities with distance, time, HR and run pace",
                "get_activity_details - Detailed data for one activity",
                "analyze_training_load - Totals, by-type counts and weekly averages over N days",
                "get_athlete_profile - Strava athlete profile",
            ],
            "coaching": [
                "setup_user_profile - Calorie and protein targets from age, size, goal and activity",
                "log_progress - Log daily weight, workouts and calories",
                "get_coaching_advice - Rule-based progress assessment with research context",
                "get_daily_advice - Daily check-in based on your last workout",
            ],
            "knowledge": [
                "add_website_knowledge - Add a website to the knowledge base",
                "add_file_knowledge - Add a local text file to the knowledge base",
                "search_knowledge - Search built-in research and added sources",
                "get_rag_stats - Knowledge base statistics",
            ],
            "session": {
                "profile_set_up": session.profile is not None,
                "days_logged": len(session.progress),
                "ingestion_mode": session.ingestor.mode,
            },
            "notes": [
                "Profile, progress and added sources live only as long as the MCP session",
                "Knowledge search ranks documents by keyword overlap, not semantic embeddings",
                "In mock ingestion mode websites and files are recorded but not fetched",
            ],
        }
        return json.dumps(features, indent=2)

    return app
