from __future__ import annotations

import pytest

from dota_tracker import TeamConfig
from tests.fakes import FIXTURE_DIR, TEAMS


@pytest.fixture
def liquipedia_html() -> str:
    return (FIXTURE_DIR / "liquipedia_matches.html").read_text()


@pytest.fixture
def teams() -> list[TeamConfig]:
    return list(TEAMS)
