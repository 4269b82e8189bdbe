"""
Entry point for running fitness_genie as a module.

Usage:
    python -m fitness_genie                    # Run with stdio transport
    python -m fitness_genie --http             # Run with HTTP transport
    python -m fitness_genie --http --port 9000 # Run HTTP on custom port
"""

import argparse
import os

from fitness_genie import create_app


def main():
    parser = argparse.ArgumentParser(
        description="Fitness Genie MCP Server - Strava data and personal fitness coaching"
    )
    parser.add_argument(
        "--http",
        action="store_true",
        help="Use http transport instead of stdio"
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host to bind to (default: 0.0.0.0)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8081,
        help="Port for HTTP transport (default: 8081)"
    )

    args = parser.parse_args()

    os.environ["MCP_TRANSPORT"] = "http" if args.http else "stdio"

    app = create_app()

    if args.http:
        print(f"Starting Fitness Genie MCP server on http://{args.host}:{args.port}/mcp")
        app.run(transport="http", host=args.host, port=args.port)
    else:
        app.run()


if __name__ == "__main__":
    main()
