"""Plain HTTPS GET shared by the Liquipedia scraper and the image proxy."""

from __future__ import annotations

import requests

USER_AGENT = "Dota2PersonalTracker/1.0"
TIMEOUT = 30


class FetchError(Exception):
    """An upstream request failed or returned something unusable."""


class RateLimitedError(FetchError):
    """Upstream answered 429."""


def http_get(url: str, accept: str = "application/json") -> requests.Response:
    """GET a URL, following redirects. Anything but a final 200 raises FetchError."""
    headers = {
        "User-Agent": USER_AGENT,
        "Accept": accept,
        "Accept-Encoding": "gzip",
    }
    try:
        response = requests.get(url, headers=headers, timeout=TIMEOUT)
    except requests.RequestException as e:
        raise FetchError(f"GET {url} failed: {e}") from e

    if response.status_code == 429:
        raise RateLimitedError("Rate limited")
    if response.status_code != 200:
        raise FetchError(f"HTTP {response.status_code}")
    return response
