"""Runtime settings and tracked-team configuration."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from dota_tracker import TeamConfig

API_BASE = "https://api.opendota.com/api"


class ConfigError(Exception):
    """Raised when the tracker cannot start with the given configuration."""


@dataclass
class Settings:
    """Server settings, read from the environment (and .env if present)."""

    port: int = 3000
    host: str = "0.0.0.0"
    api_key: str = ""
    api_base: str = API_BASE
    refresh_interval: float = 5 * 60
    live_refresh_interval: float = 60
    player_hero_ttl: float = 30 * 60
    image_ttl: float = 24 * 60 * 60
    teams_path: str = "teams.json"
    static_dir: str = "public"
    debug: bool = False


def load_settings(env_file: str | None = ".env") -> Settings:
    """Build Settings from environment variables.

    Values from a .env file only fill in variables that are not already set.
    """
    if env_file and Path(env_file).exists():
        load_dotenv(env_file, override=False)

    try:
        port = int(os.environ.get("PORT", "3000"))
    except ValueError as e:
        raise ConfigError(f"PORT must be an integer: {e}") from e

    return Settings(
        port=port,
        host=os.environ.get("HOST", "0.0.0.0"),
        api_key=os.environ.get("OPENDOTA_API_KEY", ""),
        teams_path=os.environ.get("TEAMS_FILE", "teams.json"),
        static_dir=os.environ.get("STATIC_DIR", "public"),
        debug=os.environ.get("DEBUG", "").lower() in ("1", "true", "yes"),
    )


def load_teams(path: str = "teams.json") -> list[TeamConfig]:
    """Load team configurations from JSON file."""
    try:
        with open(path) as f:
            data = json.load(f)
        teams = [TeamConfig(**t) for t in data["teams"]]
    except (OSError, ValueError, KeyError, TypeError) as e:
        raise ConfigError(f"Could not load teams from {path}: {e}") from e

    if not teams:
        raise ConfigError(f"No teams configured in {path}")

    keys = [t.key for t in teams]
    if len(set(keys)) != len(keys):
        raise ConfigError(f"Duplicate team keys in {path}: {keys}")
    return teams
