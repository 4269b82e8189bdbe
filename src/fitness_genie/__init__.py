"""
MCP Server for Strava-backed fitness coaching.

Provides tools to read Strava activity data, keep a per-session coaching
profile and progress log, and search a small fitness knowledge base via
the Model Context Protocol (MCP).

Supports two transport modes:
- stdio: For single-user local usage (default)
- http: For multi-user HTTP server deployment
"""

import logging
import os

from fastmcp import FastMCP

from fitness_genie import auth_tool
from fitness_genie import activities
from fitness_genie import profile
from fitness_genie import coaching
from fitness_genie import knowledge

logging.basicConfig(level=logging.INFO)


def create_app() -> FastMCP:
    """Create and configure the MCP app with all tools registered."""
    app = FastMCP("Fitness Genie v1.0")

    # Feature overview
    app = auth_tool.register_tools(app)

    # Strava data
    app = activities.register_tools(app)
    app = profile.register_tools(app)

    # Personal coaching
    app = coaching.register_tools(app)

    # Knowledge base
    app = knowledge.register_tools(app)

    return app


def main():
    """Initialize the MCP server and run with configured transport.

    Environment variables:
    - MCP_TRANSPORT: 'stdio' (default) or 'http'
    - MCP_HOST: Host to bind to (default: '0.0.0.0')
    - MCP_PORT: Port for HTTP transport (default: 8081)
    """
    app = create_app()

    transport = os.environ.get("MCP_TRANSPORT", "stdio")

    if transport == "http":
        host = os.environ.get("MCP_HOST", "0.0.0.0")
        port = int(os.environ.get("MCP_PORT", "8081"))
        app.run(transport="http", host=host, port=port)
    else:
        app.run()


if __name__ == "__main__":
    main()
