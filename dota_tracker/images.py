"""Re-hosts Liquipedia images, which block hotlinking from other origins."""

from __future__ import annotations

import threading
from dataclasses import dataclass

from cachetools import TTLCache

from dota_tracker.fetch import http_get

TRUSTED_PREFIX = "https://liquipedia.net/"
DEFAULT_CONTENT_TYPE = "image/png"


@dataclass(frozen=True)
class CachedImage:
    data: bytes
    content_type: str


def is_trusted(url: str | None) -> bool:
    return bool(url) and url.startswith(TRUSTED_PREFIX)


class ImageProxy:
    """Fetch-through cache of image bytes keyed by source URL."""

    def __init__(self, ttl: float = 24 * 60 * 60, maxsize: int = 256) -> None:
        self._cache: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def get(self, url: str) -> CachedImage:
        """Return the image at url. Raises ValueError for untrusted URLs, FetchError on failure."""
        if not is_trusted(url):
            raise ValueError(f"Untrusted image source: {url}")

        with self._lock:
            cached = self._cache.get(url)
        if cached is not None:
            return cached

        response = http_get(url, accept="image/*")
        image = CachedImage(
            data=response.content,
            content_type=response.headers.get("Content-Type") or DEFAULT_CONTENT_TYPE,
        )
        with self._lock:
            self._cache[url] = image
        return image
