"""Lazily fetched, time-limited cache of per-player hero stats."""

from __future__ import annotations

import logging
import threading

from cachetools import TTLCache

from dota_tracker.fetch import FetchError
from dota_tracker.opendota import OpenDotaClient

log = logging.getLogger(__name__)

TOP_HEROES = 10
# game_mode=2 is Captain's Mode, i.e. tournament games
PLAYER_HEROES_ENDPOINT = "/players/{account_id}/heroes?game_mode=2"


class PlayerHeroCache:
    """account_id -> most played competitive heroes, kept for `ttl` seconds."""

    def __init__(self, client: OpenDotaClient, ttl: float = 30 * 60, maxsize: int = 512) -> None:
        self.client = client
        self._cache: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def get(self, account_id: int) -> list[dict]:
        with self._lock:
            cached = self._cache.get(account_id)
        if cached is not None:
            return cached

        data = self.client.fetch_with_retry(
            PLAYER_HEROES_ENDPOINT.format(account_id=account_id)
        )
        # OpenDota reports some failures as {"error": ...} with status 200
        if not isinstance(data, list):
            raise FetchError(data.get("error") if isinstance(data, dict) else "Unexpected response")

        heroes = [
            {
                "hero_id": h.get("hero_id"),
                "games": h.get("games") or 0,
                "win": h.get("win") or 0,
            }
            for h in data
            if isinstance(h, dict) and (h.get("games") or 0) > 0
        ][:TOP_HEROES]

        with self._lock:
            self._cache[account_id] = heroes
        log.debug(f"Cached {len(heroes)} heroes for player {account_id}")
        return heroes
