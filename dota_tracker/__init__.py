"""Shared data models for the Dota 2 team tracker."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class TeamConfig:
    """Configuration for a team to track."""

    key: str
    id: int
    name: str
    tag: str

    @property
    def liquipedia_url(self) -> str:
        return f"https://liquipedia.net/dota2/{self.name.replace(' ', '_')}"


@dataclass
class UpcomingMatch:
    """A scheduled match scraped from Liquipedia."""

    team_key: str
    team_tag: str
    opponent: str
    tournament: str
    best_of: str
    our_logo: str | None
    opp_logo: str | None
    timestamp: int | None

    @property
    def date_str(self) -> str | None:
        if self.timestamp is None:
            return None
        dt = datetime.fromtimestamp(self.timestamp, tz=timezone.utc)
        return dt.strftime("%Y-%m-%dT%H:%M:%S.000Z")

    def to_dict(self) -> dict:
        data = asdict(self)
        data["date_str"] = self.date_str
        return data


@dataclass(frozen=True)
class Snapshot:
    """One complete refresh result. Replaced wholesale, never edited in place."""

    teams: dict[str, dict]
    hero_map: dict[int, dict]
    live_matches: list[dict]
    upcoming: list[UpcomingMatch]
    ongoing: list[dict]
    team_config: list[TeamConfig]
    last_updated: str
    live_updated: str | None = None
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to the JSON payload served by /api/data."""
        return {
            "teams": self.teams,
            "hero_map": {str(k): v for k, v in self.hero_map.items()},
            "live_matches": self.live_matches,
            "upcoming": [m.to_dict() for m in self.upcoming],
            "ongoing": self.ongoing,
            "team_config": {
                t.key: {"id": t.id, "name": t.name, "tag": t.tag}
                for t in self.team_config
            },
            "last_updated": self.last_updated,
            "live_updated": self.live_updated,
            "errors": self.errors,
        }


def utc_now_iso() -> str:
    """Current time as an ISO-8601 UTC string."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
