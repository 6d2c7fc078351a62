"""Tests for the dashboard page shell."""

from __future__ import annotations

import json
import re

from dota_tracker import TeamConfig
from dota_tracker.html_gen import generate_index_html
from tests.fakes import TEAMS


class TestIndexHtml:
    def test_tab_per_team_after_overview(self) -> None:
        html = generate_index_html(TEAMS)
        views = re.findall(r'data-view="([^"]+)"', html)
        assert views == ["overview", "xg", "yb", "vg"]

    def test_embeds_team_config(self) -> None:
        html = generate_index_html(TEAMS)
        match = re.search(r"const TEAMS = (\{.*?\});</script>", html)
        assert match
        assert json.loads(match.group(1))["yb"] == {"id": 9351740, "name": "Yakult Brothers", "tag": "YB"}

    def test_mount_points(self) -> None:
        html = generate_index_html(TEAMS)
        for element_id in ("loading-overlay", "live-banner", "content"):
            assert f'id="{element_id}"' in html
        assert 'href="/api/upcoming.ics"' in html

    def test_escapes_tags(self) -> None:
        html = generate_index_html([TeamConfig(key="t1", id=1, name="T<1>", tag="<b>T1</b>")])
        assert "&lt;b&gt;T1&lt;/b&gt;" in html
