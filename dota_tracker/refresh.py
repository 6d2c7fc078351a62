"""Builds snapshots: parallel OpenDota fan-out plus the Liquipedia schedule."""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import replace
from typing import Any, Callable

from dota_tracker import Snapshot, TeamConfig, UpcomingMatch, utc_now_iso
from dota_tracker.fetch import FetchError
from dota_tracker.notify import RefreshAlerter
from dota_tracker.opendota import OpenDotaClient
from dota_tracker.scraper import fetch_upcoming
from dota_tracker.series import (
    group_matches_into_series,
    group_series_by_league,
    ongoing_tournaments,
    recent_form,
)

log = logging.getLogger(__name__)

MAX_MATCHES = 50
# player_slot values from 128 up are on the Dire side
DIRE_SLOT = 128


def pro_name_map(pro_players: list[dict]) -> dict[int, str]:
    """account_id -> registered pro name."""
    return {
        p["account_id"]: p["name"]
        for p in pro_players or []
        if p.get("account_id") and p.get("name")
    }


def build_roster(
    recent_match: dict,
    match_detail: dict,
    team_players: list[dict],
    pro_names: dict[int, str],
) -> list[dict]:
    """Take the five players on our side of the most recent match."""
    players = match_detail.get("players") or []
    is_radiant = recent_match.get("radiant") is True
    stats = {p.get("account_id"): p for p in team_players or []}

    roster = []
    for p in players:
        on_radiant = (p.get("player_slot") or 0) < DIRE_SLOT
        if on_radiant != is_radiant:
            continue
        account_id = p.get("account_id")
        player_stats = stats.get(account_id, {})
        roster.append({
            "account_id": account_id,
            "name": pro_names.get(account_id) or p.get("personaname") or str(account_id),
            "personaname": p.get("personaname") or "",
            "games_played": player_stats.get("games_played") or 0,
            "wins": player_stats.get("wins") or 0,
            "hero_id": p.get("hero_id"),
        })
    return roster


def filter_live(live: list[dict], team_ids: set[int]) -> list[dict]:
    """Keep live games involving a tracked team."""
    return [
        m for m in live or []
        if m.get("radiant_team_id") in team_ids or m.get("dire_team_id") in team_ids
    ]


class Refresher:
    """Owns the current snapshot and the two refresh operations.

    A refresh already in progress makes further refresh_all() calls return
    immediately; they are not queued.
    """

    def __init__(
        self,
        client: OpenDotaClient,
        teams: list[TeamConfig],
        upcoming_source: Callable[[list[TeamConfig]], list[UpcomingMatch]] = fetch_upcoming,
        alerter: RefreshAlerter | None = None,
        max_workers: int = 8,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.client = client
        self.teams = teams
        self.team_ids = {t.id for t in teams}
        self._upcoming_source = upcoming_source
        self._alerter = alerter
        self._max_workers = max_workers
        self._clock = clock

        self._snapshot: Snapshot | None = None
        self._refreshing = threading.Lock()
        self._swap = threading.Lock()
        self._errors: list[str] = []
        self._errors_lock = threading.Lock()

    @property
    def snapshot(self) -> Snapshot | None:
        return self._snapshot

    @property
    def is_refreshing(self) -> bool:
        return self._refreshing.locked()

    def refresh_all(self) -> bool:
        """Rebuild the whole snapshot. Returns True if a new snapshot was stored."""
        if not self._refreshing.acquire(blocking=False):
            log.info("Refresh already running, skipping")
            return False

        log.info("Refreshing all data...")
        started = time.monotonic()
        try:
            snapshot = self._build_snapshot()
        except Exception as e:
            log.exception(f"Refresh failed: {e}")
            if self._alerter:
                self._alerter.record_failure(str(e))
            return False
        finally:
            self._refreshing.release()

        with self._swap:
            self._snapshot = snapshot
        if self._alerter:
            self._alerter.record_success()

        log.info(
            f"Data refreshed in {time.monotonic() - started:.1f}s "
            f"({len(snapshot.upcoming)} upcoming, {len(snapshot.live_matches)} live, "
            f"{len(snapshot.errors)} failed fetches)"
        )
        return True

    def refresh_live(self) -> bool:
        """Update only the live games of the current snapshot."""
        if self._snapshot is None:
            return False
        try:
            live = self.client.fetch_with_retry("/live")
        except FetchError as e:
            log.warning(f"Live refresh failed: {e}")
            return False

        with self._swap:
            current = self._snapshot
            if current is None:
                return False
            self._snapshot = replace(
                current,
                live_matches=filter_live(_as_list(live), self.team_ids),
                live_updated=utc_now_iso(),
            )
        return True

    def _build_snapshot(self) -> Snapshot:
        with self._errors_lock:
            self._errors = []

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:

            def submit(endpoint: str, default: Any) -> Future:
                return executor.submit(self._fetch_or_default, endpoint, default)

            team_futures = {
                team.key: {
                    "info": submit(f"/teams/{team.id}", {}),
                    "matches": submit(f"/teams/{team.id}/matches", []),
                    "players": submit(f"/teams/{team.id}/players", []),
                    "heroes": submit(f"/teams/{team.id}/heroes", []),
                }
                for team in self.teams
            }
            hero_stats_future = submit("/heroStats", [])
            live_future = submit("/live", [])
            pro_players_future = submit("/proPlayers", [])
            upcoming_future = executor.submit(self._fetch_upcoming)

            team_results = {
                key: {field: f.result() for field, f in futures.items()}
                for key, futures in team_futures.items()
            }
            for results in team_results.values():
                results["matches"] = results["matches"][:MAX_MATCHES]

            pro_names = pro_name_map(pro_players_future.result())
            roster_futures = {
                team.key: executor.submit(self._fetch_roster, team, team_results[team.key], pro_names)
                for team in self.teams
            }
            rosters = {key: f.result() for key, f in roster_futures.items()}

            hero_stats = hero_stats_future.result()
            live = live_future.result()
            upcoming = upcoming_future.result()

        teams: dict[str, dict] = {}
        team_series: dict[str, list[dict]] = {}
        for team in self.teams:
            results = team_results[team.key]
            series = group_matches_into_series(results["matches"])
            team_series[team.key] = series
            teams[team.key] = {
                "key": team.key,
                **results,
                "roster": rosters[team.key],
                "leagues": group_series_by_league(series),
                "form": recent_form(series),
            }

        with self._errors_lock:
            errors = list(self._errors)

        return Snapshot(
            teams=teams,
            hero_map={h["id"]: h for h in hero_stats if isinstance(h, dict) and "id" in h},
            live_matches=filter_live(live, self.team_ids),
            upcoming=upcoming,
            ongoing=ongoing_tournaments(team_series, now=self._clock()),
            team_config=list(self.teams),
            last_updated=utc_now_iso(),
            errors=errors,
        )

    def _fetch_or_default(self, endpoint: str, default: Any) -> Any:
        """Fetch with retry; on failure log it and return the default."""
        try:
            data = self.client.fetch_with_retry(endpoint)
        except FetchError as e:
            log.warning(f"{endpoint} failed: {e}")
            with self._errors_lock:
                self._errors.append(f"{endpoint}: {e}")
            return default

        # OpenDota answers some failures with {"error": ...} and status 200
        if isinstance(default, list):
            return _as_list(data)
        return data if isinstance(data, dict) else default

    def _fetch_roster(self, team: TeamConfig, results: dict, pro_names: dict[int, str]) -> list[dict]:
        matches = results["matches"]
        if not matches:
            return []
        recent = matches[0]
        try:
            detail = self.client.fetch_with_retry(f"/matches/{recent['match_id']}")
        except (FetchError, KeyError) as e:
            log.warning(f"{team.tag} roster fetch failed: {e}")
            return []
        if not isinstance(detail, dict):
            return []

        roster = build_roster(recent, detail, results["players"], pro_names)
        log.info(f"{team.tag} roster: {', '.join(p['name'] for p in roster)}")
        return roster

    def _fetch_upcoming(self) -> list[UpcomingMatch]:
        try:
            return self._upcoming_source(self.teams)
        except Exception as e:
            log.warning(f"Upcoming match scrape failed: {e}")
            return []


def _as_list(data: Any) -> list:
    return data if isinstance(data, list) else []
