"""
Shared pytest fixtures for Fitness Genie MCP testing.
"""
import pytest
from unittest.mock import Mock, patch

# Monkey-patch: production uses fastmcp.FastMCP, tests use mcp.server.fastmcp.
# Patch fastmcp.Context to match mcp.server.fastmcp.Context so tools work
# with the test FastMCP.
import fastmcp
from mcp.server.fastmcp import server as mcp_server
fastmcp.Context = mcp_server.Context

from mcp.server.fastmcp import FastMCP

from fitness_genie.api.calculator import create_user_profile
from fitness_genie.session import CoachingSession


def get_tool_result_text(result):
    """Extract text from tool result.

    FastMCP call_tool returns a tuple (list_of_TextContent, metadata_dict).
    This helper extracts the text from the first TextContent item.
    """
    # Handle tuple return: (content_list, metadata)
    if isinstance(result, tuple) and len(result) > 0:
        result = result[0]
    if isinstance(result, list) and len(result) > 0:
        if hasattr(result[0], 'text'):
            return result[0].text
    return str(result)


@pytest.fixture
def mock_strava_client():
    """Mock Strava client. Tool tests mock at the api/ level instead."""
    client = Mock()
    client.make_request = Mock()
    return client


@pytest.fixture(autouse=True)
def mock_get_client(mock_strava_client):
    """Auto-mock client_factory.get_client in the Strava tool modules.

    Yields the mock function (not the client) so tests can set side_effect
    for error scenarios.
    """
    get_client_fn = Mock(return_value=mock_strava_client)

    modules_to_patch = [
        "fitness_genie.activities",
        "fitness_genie.profile",
    ]

    patchers = []
    for module in modules_to_patch:
        p = patch(f"{module}.get_client", get_client_fn)
        p.start()
        patchers.append(p)

    yield get_client_fn

    for p in patchers:
        p.stop()


@pytest.fixture
def coaching_session():
    """Fresh in-memory coaching session in mock ingestion mode."""
    return CoachingSession(ingestion_mode="mock")


@pytest.fixture(autouse=True)
def mock_get_session(coaching_session):
    """Auto-mock client_factory.get_session in the session-backed tool modules."""
    get_session_fn = Mock(return_value=coaching_session)

    modules_to_patch = [
        "fitness_genie.auth_tool",
        "fitness_genie.coaching",
        "fitness_genie.knowledge",
    ]

    patchers = []
    for module in modules_to_patch:
        p = patch(f"{module}.get_session", get_session_fn)
        p.start()
        patchers.append(p)

    yield get_session_fn

    for p in patchers:
        p.stop()


@pytest.fixture
def user_profile():
    """Male, 30, 180 lbs, 70 in, moderately active, losing weight."""
    return create_user_profile(
        age=30,
        gender="male",
        weight=180,
        height=70,
        goal="lose_weight",
        activity_level="moderately_active",
        target_weight=165,
    )


def create_test_app(module):
    """Helper to create a FastMCP app with a specific module registered."""
    app = FastMCP(f"Test Fitness Genie {module.__name__}")
    app = module.register_tools(app)
    return app


def make_activity(**overrides):
    """Strava activity summary as returned by GET athlete/activities."""
    activity = {
        "id": 1001,
        "name": "Morning Run",
        "type": "Run",
        "start_date": "2026-10-15T06:30:00Z",
        "distance": 10000.0,
        "moving_time": 3000,
        "average_heartrate": 150.4,
        "max_heartrate": 172.0,
        "total_elevation_gain": 45.2,
    }
    activity.update(overrides)
    return activity
