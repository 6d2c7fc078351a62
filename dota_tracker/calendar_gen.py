"""ICS calendar of scheduled matches, for subscribing from a calendar app."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from icalendar import Alarm, Calendar, Event

from dota_tracker import TeamConfig, UpcomingMatch

MATCH_LENGTH = timedelta(hours=2)


def create_upcoming_calendar(upcoming: list[UpcomingMatch], teams: list[TeamConfig]) -> Calendar:
    """Build a calendar with one event per scheduled match.

    Matches without a known start time are left out.
    """
    cal = Calendar()
    cal.add("prodid", "-//Dota 2 Team Tracker//liquipedia.net//")
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    cal.add("method", "PUBLISH")
    cal.add("x-wr-calname", f"{', '.join(t.tag for t in teams)} Matches")
    # Matches the full refresh cadence
    cal.add("x-published-ttl", "PT5M")

    teams_by_key = {t.key: t for t in teams}
    for match in upcoming:
        if match.timestamp is None:
            continue
        cal.add_component(_create_event(match, teams_by_key.get(match.team_key)))

    return cal


def _create_event(match: UpcomingMatch, team: TeamConfig | None) -> Event:
    event = Event()
    start = datetime.fromtimestamp(match.timestamp, tz=timezone.utc)

    summary = f"{match.team_tag} vs {match.opponent}"
    if match.best_of:
        summary += f" ({match.best_of})"
    event.add("summary", summary)
    event.add("dtstart", start)
    event.add("dtend", start + MATCH_LENGTH)
    event.add("description", f"Tournament: {match.tournament or 'Unknown'}")
    if team:
        event.add("url", team.liquipedia_url)

    uid = (
        f"{match.team_key}-{match.timestamp}-"
        f"{match.opponent.replace(' ', '-').replace('_', '-').lower()}"
        "@dota-tracker"
    )
    event.add("uid", uid)
    event.add("status", "CONFIRMED")

    alarm = Alarm()
    alarm.add("action", "DISPLAY")
    alarm.add("description", f"{match.team_tag} vs {match.opponent} starts in 30 minutes!")
    alarm.add("trigger", timedelta(minutes=-30))
    event.add_component(alarm)

    return event
