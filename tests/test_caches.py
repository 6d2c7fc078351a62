"""Tests for the per-player hero cache and the image proxy cache."""

from __future__ import annotations

import pytest

from dota_tracker import images
from dota_tracker.fetch import FetchError
from dota_tracker.images import CachedImage, ImageProxy, is_trusted
from dota_tracker.players import PlayerHeroCache
from tests.fakes import FakeClient, FakeResponse

HEROES_ENDPOINT = "/players/101/heroes?game_mode=2"


class TestPlayerHeroCache:
    def test_filters_and_limits(self) -> None:
        data = [{"hero_id": 0, "games": 0, "win": 0}] + [
            {"hero_id": i, "games": 20 - i, "win": 5, "with_games": 3} for i in range(1, 15)
        ]
        cache = PlayerHeroCache(FakeClient({HEROES_ENDPOINT: data}))

        heroes = cache.get(101)
        assert len(heroes) == 10
        assert heroes[0] == {"hero_id": 1, "games": 19, "win": 5}
        assert all(h["games"] > 0 for h in heroes)

    def test_second_lookup_served_from_cache(self) -> None:
        client = FakeClient({HEROES_ENDPOINT: [{"hero_id": 1, "games": 3, "win": 2}]})
        cache = PlayerHeroCache(client)

        assert cache.get(101) == cache.get(101)
        assert client.calls == [HEROES_ENDPOINT]
        assert len(cache) == 1

    def test_fetch_error_propagates_and_is_not_cached(self) -> None:
        client = FakeClient({HEROES_ENDPOINT: FetchError("Rate limited")})
        cache = PlayerHeroCache(client)
        with pytest.raises(FetchError):
            cache.get(101)
        assert len(cache) == 0

    def test_error_body_raises_fetch_error(self) -> None:
        cache = PlayerHeroCache(FakeClient({HEROES_ENDPOINT: {"error": "Internal Server Error"}}))
        with pytest.raises(FetchError, match="Internal Server Error"):
            cache.get(101)
        assert len(cache) == 0

    def test_unexpected_payload(self) -> None:
        cache = PlayerHeroCache(FakeClient({HEROES_ENDPOINT: "oops"}))
        with pytest.raises(FetchError, match="Unexpected response"):
            cache.get(101)

    def test_missing_counts(self) -> None:
        cache = PlayerHeroCache(FakeClient({HEROES_ENDPOINT: [{"hero_id": 7, "games": 2}]}))
        assert cache.get(101) == [{"hero_id": 7, "games": 2, "win": 0}]


class TestImageProxy:
    URL = "https://liquipedia.net/commons/images/Xtreme_Gaming_darkmode.png"

    def test_is_trusted(self) -> None:
        assert is_trusted(self.URL)
        assert not is_trusted("https://liquipedia.net.evil.example/x.png")
        assert not is_trusted("http://liquipedia.net/x.png")
        assert not is_trusted("")
        assert not is_trusted(None)

    def test_untrusted_rejected_without_fetch(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[str] = []
        monkeypatch.setattr(images, "http_get", lambda url, accept="": calls.append(url))
        with pytest.raises(ValueError):
            ImageProxy().get("https://example.com/logo.png")
        assert calls == []

    def test_fetches_once_and_caches(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[tuple[str, str]] = []

        def fake_get(url: str, accept: str = "application/json") -> FakeResponse:
            calls.append((url, accept))
            return FakeResponse(content=b"\x89PNG", headers={"Content-Type": "image/webp"})

        monkeypatch.setattr(images, "http_get", fake_get)
        proxy = ImageProxy()

        first = proxy.get(self.URL)
        assert first == CachedImage(data=b"\x89PNG", content_type="image/webp")
        assert proxy.get(self.URL) is first
        assert calls == [(self.URL, "image/*")]
        assert len(proxy) == 1

    def test_default_content_type(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(images, "http_get", lambda url, accept="": FakeResponse(content=b"x"))
        assert ImageProxy().get(self.URL).content_type == "image/png"

    def test_fetch_error_propagates(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def failing_get(url: str, accept: str = "") -> FakeResponse:
            raise FetchError("HTTP 404")

        monkeypatch.setattr(images, "http_get", failing_get)
        proxy = ImageProxy()
        with pytest.raises(FetchError):
            proxy.get(self.URL)
        assert len(proxy) == 0
