"""OpenDota API client with linear-backoff retry."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

import requests

from dota_tracker.config import API_BASE
from dota_tracker.fetch import TIMEOUT, FetchError, RateLimitedError

log = logging.getLogger(__name__)


class OpenDotaClient:
    """Thin JSON client for https://api.opendota.com/api."""

    def __init__(
        self,
        api_key: str = "",
        base_url: str = API_BASE,
        sleep: Callable[[float], None] = time.sleep,
        backoff: float = 1.0,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._sleep = sleep
        self._backoff = backoff

    def url_for(self, endpoint: str) -> str:
        url = f"{self.base_url}{endpoint}"
        if self.api_key:
            sep = "&" if "?" in endpoint else "?"
            url = f"{url}{sep}api_key={self.api_key}"
        return url

    def fetch_json(self, endpoint: str) -> Any:
        """Fetch and decode a single endpoint. No retry."""
        try:
            response = requests.get(
                self.url_for(endpoint),
                headers={"Accept": "application/json"},
                timeout=TIMEOUT,
            )
        except requests.RequestException as e:
            raise FetchError(f"GET {endpoint} failed: {e}") from e

        if response.status_code == 429:
            raise RateLimitedError("Rate limited")
        try:
            return response.json()
        except ValueError as e:
            raise FetchError(f"Parse error on {endpoint}") from e

    def fetch_with_retry(self, endpoint: str, retries: int = 3) -> Any:
        """Fetch an endpoint, waiting 1s, 2s, ... between failed attempts.

        The error from the final attempt is re-raised.
        """
        for attempt in range(retries):
            try:
                return self.fetch_json(endpoint)
            except FetchError as e:
                if attempt == retries - 1:
                    raise
                delay = self._backoff * (attempt + 1)
                log.debug(f"{endpoint} attempt {attempt + 1} failed ({e}), retrying in {delay:.0f}s")
                self._sleep(delay)
        raise FetchError(f"No attempts made for {endpoint}")
