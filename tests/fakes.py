"""Canned OpenDota data and stand-ins for the network layer."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from dota_tracker import TeamConfig
from dota_tracker.fetch import FetchError

FIXTURE_DIR = Path(__file__).parent / "fixtures"

XG = TeamConfig(key="xg", id=8261500, name="Xtreme Gaming", tag="XG")
YB = TeamConfig(key="yb", id=9351740, name="Yakult Brothers", tag="YB")
VG = TeamConfig(key="vg", id=726228, name="Vici Gaming", tag="VG")
TEAMS = [XG, YB, VG]


class FakeClient:
    """Stands in for OpenDotaClient, answering from a dict of endpoint -> payload.

    A payload that is an exception is raised instead. Unknown endpoints fail.
    """

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self.responses = responses or {}
        self.calls: list[str] = []

    def fetch_with_retry(self, endpoint: str, retries: int = 3) -> Any:
        self.calls.append(endpoint)
        if endpoint not in self.responses:
            raise FetchError(f"HTTP 404 for {endpoint}")
        value = self.responses[endpoint]
        if isinstance(value, Exception):
            raise value
        return value


class FakeResponse:
    def __init__(
        self,
        status_code: int = 200,
        json_data: Any = None,
        content: bytes = b"",
        headers: dict[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self._json = json_data
        self.content = content
        self.headers = headers or {}

    def json(self) -> Any:
        if self._json is None:
            raise ValueError("No JSON object could be decoded")
        return self._json


def team_matches(opponent_id: int = 2163, league: str = "DreamLeague Season 28") -> list[dict]:
    """Three games, newest first: a 2-1 series win from radiant/dire mixed sides."""
    return [
        {"match_id": 303, "start_time": 1_800_007_000, "radiant": True, "radiant_win": True,
         "opposing_team_id": opponent_id, "opposing_team_name": "Team Liquid", "league_name": league,
         "leagueid": 18000, "radiant_score": 30, "dire_score": 12, "duration": 2400},
        {"match_id": 302, "start_time": 1_800_003_000, "radiant": False, "radiant_win": True,
         "opposing_team_id": opponent_id, "opposing_team_name": "Team Liquid", "league_name": league,
         "leagueid": 18000, "radiant_score": 25, "dire_score": 20, "duration": 2100},
        {"match_id": 301, "start_time": 1_800_000_000, "radiant": False, "radiant_win": False,
         "opposing_team_id": opponent_id, "opposing_team_name": "Team Liquid", "league_name": league,
         "leagueid": 18000, "radiant_score": 10, "dire_score": 28, "duration": 1900},
    ]


def match_detail(match_id: int = 303) -> dict:
    radiant = [{"account_id": 100 + i, "player_slot": i, "personaname": f"rad{i}", "hero_id": 10 + i}
               for i in range(5)]
    dire = [{"account_id": 200 + i, "player_slot": 128 + i, "personaname": f"dire{i}", "hero_id": 20 + i}
            for i in range(5)]
    return {"match_id": match_id, "players": radiant + dire}


def full_responses() -> dict[str, Any]:
    """Every endpoint a full refresh touches, answered for XG only; YB and VG fail."""
    return {
        f"/teams/{XG.id}": {"team_id": XG.id, "name": "Xtreme Gaming", "tag": "XG", "wins": 300, "losses": 200},
        f"/teams/{XG.id}/matches": team_matches(),
        f"/teams/{XG.id}/players": [{"account_id": 100, "games_played": 150, "wins": 90}],
        f"/teams/{XG.id}/heroes": [{"hero_id": 1, "games_played": 40, "wins": 25}],
        "/matches/303": match_detail(303),
        "/heroStats": [{"id": 1, "localized_name": "Anti-Mage", "img": "/apps/dota2/images/antimage.png"}],
        "/live": [
            {"match_id": 9, "radiant_team_id": XG.id, "dire_team_id": 1, "radiant_score": 5, "dire_score": 3},
            {"match_id": 10, "radiant_team_id": 2, "dire_team_id": 3},
        ],
        "/proPlayers": [{"account_id": 101, "name": "Ame"}, {"account_id": 999, "name": None}],
    }
