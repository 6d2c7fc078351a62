"""Derive series, league summaries and ongoing tournaments from team match lists."""

from __future__ import annotations

import time

# Games further apart than this belong to different series
SERIES_GAP = 6 * 3600
ONGOING_WINDOW = 5 * 86400


def did_win(match: dict) -> bool:
    """True if the tracked team won this game."""
    radiant = match.get("radiant")
    radiant_win = match.get("radiant_win")
    return (radiant is True and radiant_win is True) or (
        radiant is False and radiant_win is False
    )


def group_matches_into_series(matches: list[dict]) -> list[dict]:
    """Group a team's matches into series, newest series first."""
    if not matches:
        return []

    ordered = sorted(matches, key=lambda m: m.get("start_time") or 0, reverse=True)
    series: list[dict] = []
    current: dict | None = None

    for match in ordered:
        opponent_id = match.get("opposing_team_id")
        league = match.get("league_name") or ""
        won = did_win(match)

        if (
            current is not None
            and current["opponent_id"] == opponent_id
            and current["league"] == league
        ):
            last_time = current["games"][-1].get("start_time") or 0
            if abs((match.get("start_time") or 0) - last_time) < SERIES_GAP:
                current["games"].append(match)
                if won:
                    current["wins"] += 1
                else:
                    current["losses"] += 1
                continue

        current = {
            "league": league,
            "leagueid": match.get("leagueid"),
            "opponent": match.get("opposing_team_name") or "Unknown",
            "opponent_id": opponent_id,
            "wins": 1 if won else 0,
            "losses": 0 if won else 1,
            "games": [match],
            "latest_time": match.get("start_time") or 0,
        }
        series.append(current)

    for s in series:
        s["bo_type"] = _infer_best_of(s["wins"], s["losses"])
        s["series_won"] = s["wins"] > s["losses"]
        s["games"].sort(key=lambda m: m.get("start_time") or 0)

    return series


def _infer_best_of(wins: int, losses: int) -> str:
    total = wins + losses
    top = max(wins, losses)
    if total == 1:
        return "BO1"
    if top == 2 and total <= 3:
        return "BO3"
    if top == 3 and total <= 5:
        return "BO5"
    return f"{total}G"


def group_series_by_league(series: list[dict]) -> list[dict]:
    """Bucket series by league, most recently active league first."""
    leagues: dict[str, dict] = {}
    for s in series:
        name = s["league"] or "Unknown League"
        league = leagues.setdefault(name, {
            "name": name,
            "series": [],
            "latest_time": 0,
            "total_wins": 0,
            "total_losses": 0,
            "series_wins": 0,
            "series_losses": 0,
        })
        league["series"].append(s)
        league["total_wins"] += s["wins"]
        league["total_losses"] += s["losses"]
        if s["series_won"]:
            league["series_wins"] += 1
        else:
            league["series_losses"] += 1
        league["latest_time"] = max(league["latest_time"], s["latest_time"])

    return sorted(leagues.values(), key=lambda lg: lg["latest_time"], reverse=True)


def recent_form(series: list[dict], limit: int = 5) -> list[dict]:
    """Compact summary of the latest series, for form dots."""
    return [
        {
            "opponent": s["opponent"],
            "wins": s["wins"],
            "losses": s["losses"],
            "series_won": s["series_won"],
        }
        for s in series[:limit]
    ]


def ongoing_tournaments(
    team_series: dict[str, list[dict]], now: float | None = None
) -> list[dict]:
    """Collect leagues where any tracked team played a series in the last 5 days.

    team_series maps team key -> that team's series (newest first).
    """
    if now is None:
        now = time.time()
    cutoff = now - ONGOING_WINDOW

    tournaments: dict[str, dict] = {}
    for key, series in team_series.items():
        for s in series:
            if s["latest_time"] <= cutoff:
                continue
            name = s["league"] or "Unknown"
            tournament = tournaments.setdefault(name, {"name": name, "teams": {}, "latest_time": 0})
            entry = tournament["teams"].setdefault(key, {"series": [], "wins": 0, "losses": 0})
            entry["series"].append({
                "opponent": s["opponent"],
                "wins": s["wins"],
                "losses": s["losses"],
                "series_won": s["series_won"],
                "bo_type": s["bo_type"],
                "latest_time": s["latest_time"],
            })
            if s["series_won"]:
                entry["wins"] += 1
            else:
                entry["losses"] += 1
            tournament["latest_time"] = max(tournament["latest_time"], s["latest_time"])

    return sorted(tournaments.values(), key=lambda t: t["latest_time"], reverse=True)
