"""
One-time Strava authorization for Fitness Genie.

Usage:
    fitness-genie-auth url                        # Print the link to approve access
    fitness-genie-auth complete "<redirect_url>"  # Exchange the code for tokens

Reads STRAVA_CLIENT_ID / STRAVA_CLIENT_SECRET / STRAVA_REDIRECT_URI from the
environment or the .env file.
"""

import argparse
import sys
from datetime import datetime, timezone

from fitness_genie.config import load_settings
from fitness_genie.sdk.auth import (
    ACCESS_TOKEN_KEY,
    REFRESH_TOKEN_KEY,
    build_authorization_url,
    exchange_authorization_code,
    extract_authorization_code,
)
from fitness_genie.sdk.errors import StravaAPIError


def print_authorization_url(settings) -> int:
    if not settings.client_id:
        print("❌ STRAVA_CLIENT_ID is not set", file=sys.stderr)
        return 1

    url = build_authorization_url(settings.client_id, settings.redirect_uri, settings.scope)
    print("🧞‍♂️ Fitness Genie - Strava Authorization\n")
    print("1. Open this URL in your browser and approve access:\n")
    print(f"   {url}\n")
    print("2. You will be redirected to a page that may fail to load. Copy its full URL.")
    print('3. Run: fitness-genie-auth complete "<redirect_url>"')
    return 0


def complete_authorization(settings, redirect_url: str) -> int:
    try:
        code = extract_authorization_code(redirect_url)
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    if not settings.client_id or not settings.client_secret:
        print("❌ STRAVA_CLIENT_ID and STRAVA_CLIENT_SECRET must be set", file=sys.stderr)
        return 1

    print(f"✅ Found authorization code: {code[:10]}...")
    print("🔄 Exchanging code for access tokens...")
    try:
        tokens = exchange_authorization_code(settings.client_id, settings.client_secret, code)
    except StravaAPIError as e:
        print(f"❌ Error getting tokens: {e}", file=sys.stderr)
        return 1

    print("\n🎉 Success! Put these lines in your .env file:\n")
    print(f"{ACCESS_TOKEN_KEY}={tokens.get('access_token', '')}")
    print(f"{REFRESH_TOKEN_KEY}={tokens.get('refresh_token', '')}")

    expires_at = tokens.get("expires_at")
    if expires_at:
        expires = datetime.fromtimestamp(expires_at, tz=timezone.utc)
        print(f"\nExpires at: {expires.isoformat()}")
    print(f"Scope: {tokens.get('scope', settings.scope)}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="fitness-genie-auth",
        description="Authorize Fitness Genie to read your Strava activities",
    )
    parser.add_argument(
        "--env-file",
        default=None,
        help="Path to the .env file (default: $FITNESS_GENIE_ENV_FILE or ./.env)"
    )
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("url", help="Print the Strava authorization URL")
    complete = commands.add_parser("complete", help="Exchange the redirect URL for tokens")
    complete.add_argument("redirect_url", help="URL Strava redirected to after approval")

    args = parser.parse_args(argv)
    settings = load_settings(args.env_file)

    if args.command == "url":
        return print_authorization_url(settings)
    return complete_authorization(settings, args.redirect_url)


if __name__ == "__main__":
    sys.exit(main())
