"""
Runtime configuration for the Fitness Genie MCP server.

Settings come from environment variables. A local .env file is loaded
first (without overriding variables that are already set), and it is the
same file the token manager rewrites after a refresh.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


ENV_FILE_VAR = "FITNESS_GENIE_ENV_FILE"
DEFAULT_REDIRECT_URI = "http://localhost"
DEFAULT_SCOPE = "read,activity:read_all"

INGESTION_MODES = ("mock", "live")


@dataclass
class Settings:
    """Strava credentials and server options."""
    client_id: str = ""
    client_secret: str = ""
    access_token: str = ""
    refresh_token: str = ""
    redirect_uri: str = DEFAULT_REDIRECT_URI
    scope: str = DEFAULT_SCOPE
    env_file: Optional[Path] = None
    ingestion_mode: str = "mock"

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Settings":
        return cls(
            client_id=os.environ.get("STRAVA_CLIENT_ID", ""),
            client_secret=os.environ.get("STRAVA_CLIENT_SECRET", ""),
            access_token=os.environ.get("STRAVA_ACCESS_TOKEN", ""),
            refresh_token=os.environ.get("STRAVA_REFRESH_TOKEN", ""),
            redirect_uri=os.environ.get("STRAVA_REDIRECT_URI", DEFAULT_REDIRECT_URI),
            env_file=env_file,
            ingestion_mode=_ingestion_mode(os.environ.get("FITNESS_GENIE_INGESTION_MODE")),
        )


def default_env_file() -> Path:
    """Path of the .env file: $FITNESS_GENIE_ENV_FILE or ./.env."""
    return Path(os.environ.get(ENV_FILE_VAR, Path.cwd() / ".env"))


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """
    Load settings from the .env file and the process environment.

    Args:
        env_file: Explicit .env path (default: default_env_file())

    Returns:
        Populated Settings
    """
    env_file = Path(env_file) if env_file else default_env_file()
    if env_file.exists():
        load_dotenv(env_file, override=False)
    return Settings.from_env(env_file=env_file)


def _ingestion_mode(value: Optional[str]) -> str:
    mode = (value or "mock").strip().lower()
    if mode not in INGESTION_MODES:
        raise ValueError(
            f"Invalid FITNESS_GENIE_INGESTION_MODE '{value}'. "
            f"Must be one of: {', '.join(INGESTION_MODES)}"
        )
    return mode
