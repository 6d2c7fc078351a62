"""Liquipedia scraper for upcoming matches of tracked teams."""

from __future__ import annotations

import logging
import re
import time

from bs4 import BeautifulSoup, Tag

from dota_tracker import TeamConfig, UpcomingMatch
from dota_tracker.fetch import FetchError, http_get

log = logging.getLogger(__name__)

MATCHES_URL = (
    "https://liquipedia.net/dota2/api.php"
    "?action=parse&page=Liquipedia:Matches&format=json&prop=text"
)
LIQUIPEDIA_BASE = "https://liquipedia.net"
MATCH_MARKER = '<div class="match-info">'
FRAGMENT_LIMIT = 5000
MIN_PAGE_LENGTH = 1000
# Matches that started up to an hour ago are still shown
RECENT_WINDOW = 3600

BEST_OF_RE = re.compile(r"\(Bo(\d)\)", re.IGNORECASE)


def fetch_upcoming(teams: list[TeamConfig]) -> list[UpcomingMatch]:
    """Fetch the Liquipedia:Matches page and extract matches for tracked teams.

    Best-effort: a single attempt, and any failure yields an empty list.
    """
    try:
        response = http_get(MATCHES_URL)
        data = response.json()
        html = data.get("parse", {}).get("text", {}).get("*", "")
    except (FetchError, ValueError, AttributeError) as e:
        log.warning(f"Liquipedia failed: {e}")
        return []

    if len(html) < MIN_PAGE_LENGTH:
        log.warning(f"Liquipedia returned a suspiciously short page ({len(html)} chars)")
        return []

    upcoming = parse_upcoming_from_html(html, teams)
    log.info(f"Liquipedia: {len(upcoming)} upcoming matches")
    return upcoming


def parse_upcoming_from_html(
    html: str, teams: list[TeamConfig], now: float | None = None
) -> list[UpcomingMatch]:
    """Parse upcoming matches from the rendered Liquipedia:Matches HTML."""
    if now is None:
        now = time.time()

    lookup = _build_team_lookup(teams)
    teams_by_key = {t.key: t for t in teams}

    matches: list[UpcomingMatch] = []
    for fragment in html.split(MATCH_MARKER)[1:]:
        match = _parse_fragment(fragment[:FRAGMENT_LIMIT], lookup, teams_by_key, now)
        if match:
            matches.append(match)

    matches.sort(key=lambda m: m.timestamp or 0)
    return matches


def _build_team_lookup(teams: list[TeamConfig]) -> dict[str, str]:
    """Map lowercase name patterns (full name, tag, first word) to team keys."""
    lookup: dict[str, str] = {}
    for team in teams:
        lookup[team.name.lower()] = team.key
        lookup[team.tag.lower()] = team.key
        lookup[team.name.split(" ")[0].lower()] = team.key
    return lookup


def _parse_fragment(
    fragment: str,
    lookup: dict[str, str],
    teams_by_key: dict[str, TeamConfig],
    now: float,
) -> UpcomingMatch | None:
    """Parse one match-info fragment. Returns None if it should be skipped."""
    soup = BeautifulSoup(fragment, "html.parser")

    names, logos = _extract_teams(soup)
    if len(names) < 2:
        return None

    key = _find_tracked_team(names, lookup)
    if key is None:
        return None
    team = teams_by_key[key]

    timestamp = _extract_timestamp(soup)
    if timestamp is not None and timestamp < now - RECENT_WINDOW:
        return None

    our_names = (team.name.lower(), team.tag.lower())
    opponent = next(
        (n for n in names if not any(o in n.lower() for o in our_names)),
        names[1],
    )
    our_name = next(
        (n for n in names if any(o in n.lower() for o in our_names)),
        None,
    )

    best_of = BEST_OF_RE.search(fragment)

    return UpcomingMatch(
        team_key=team.key,
        team_tag=team.tag,
        opponent=opponent,
        tournament=_extract_tournament(soup),
        best_of=f"BO{best_of.group(1)}" if best_of else "",
        our_logo=logos.get(our_name) if our_name else None,
        opp_logo=logos.get(opponent),
        timestamp=timestamp,
    )


def _extract_teams(soup: BeautifulSoup) -> tuple[list[str], dict[str, str]]:
    """Collect team names and logo URLs from links wrapping an <img>.

    Names keep first-seen order. A darkmode/allmode logo replaces whichever
    logo was seen first for the same team.
    """
    names: list[str] = []
    logos: dict[str, str] = {}

    for link in soup.find_all("a", href=True, title=True):
        if not link["href"].startswith("/dota2/"):
            continue
        img = link.find(True)
        if img is None or img.name != "img" or not img.get("src"):
            continue

        title = link["title"].strip()
        if "/" in title or "#" in title:
            continue
        if not 2 <= len(title) < 40:
            continue

        if title not in names:
            names.append(title)
        src = img["src"]
        if title not in logos or "darkmode" in src or "allmode" in src:
            logos[title] = src if src.startswith("http") else LIQUIPEDIA_BASE + src

    return names, logos


def _find_tracked_team(names: list[str], lookup: dict[str, str]) -> str | None:
    """Return the key of the first tracked team found among the names."""
    for name in names:
        lower = name.lower()
        for pattern, key in lookup.items():
            if pattern in lower or lower in pattern:
                return key
    return None


def _extract_timestamp(soup: BeautifulSoup) -> int | None:
    for el in soup.find_all(attrs={"data-timestamp": True}):
        value = el["data-timestamp"]
        if value.isdigit():
            return int(value)
    return None


def _extract_tournament(soup: BeautifulSoup) -> str:
    """Read the tournament page title following the match-info-tournament element."""
    el = soup.find(class_="match-info-tournament")
    if not isinstance(el, Tag):
        return ""
    titled = el if el.has_attr("title") else el.find_next(attrs={"title": True})
    if not isinstance(titled, Tag):
        return ""
    return format_tournament(titled["title"])


def format_tournament(title: str) -> str:
    """Turn a page path into a display name.

    "DreamLeague/28/Group_Stage_1#February_16-B" -> "DreamLeague Season 28 - Group Stage 1"
    """
    parts = title.replace("_", " ").split("/")
    name = parts[0].strip()
    season = parts[1].strip() if len(parts) > 1 else ""
    stage = parts[2].split("#")[0].strip() if len(parts) > 2 else ""

    tournament = f"{name} Season {season}" if season else name
    if stage:
        tournament += f" - {stage}"
    return tournament
