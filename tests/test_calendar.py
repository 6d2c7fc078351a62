"""Tests for the upcoming-match ICS export."""

from __future__ import annotations

from dota_tracker import UpcomingMatch
from dota_tracker.calendar_gen import create_upcoming_calendar
from tests.fakes import TEAMS


def upcoming_match(timestamp: int | None, opponent: str = "Team Falcons", best_of: str = "BO3") -> UpcomingMatch:
    return UpcomingMatch(
        team_key="xg", team_tag="XG", opponent=opponent, tournament="DreamLeague Season 28",
        best_of=best_of, our_logo=None, opp_logo=None, timestamp=timestamp,
    )


class TestUpcomingCalendar:
    def test_creates_valid_ics(self) -> None:
        cal = create_upcoming_calendar([upcoming_match(1_900_000_000)], TEAMS)
        ics = cal.to_ical()
        assert ics.startswith(b"BEGIN:VCALENDAR")
        assert b"END:VCALENDAR" in ics
        assert str(cal["x-wr-calname"]) == "XG, YB, VG Matches"

    def test_skips_matches_without_time(self) -> None:
        cal = create_upcoming_calendar([upcoming_match(1_900_000_000), upcoming_match(None, "Aurora")], TEAMS)
        events = [c for c in cal.walk() if c.name == "VEVENT"]
        assert len(events) == 1

    def test_event_fields(self) -> None:
        cal = create_upcoming_calendar([upcoming_match(1_900_000_000)], TEAMS)
        event = next(c for c in cal.walk() if c.name == "VEVENT")

        assert str(event["summary"]) == "XG vs Team Falcons (BO3)"
        assert str(event["uid"]) == "xg-1900000000-team-falcons@dota-tracker"
        assert str(event["url"]) == "https://liquipedia.net/dota2/Xtreme_Gaming"
        start = event.decoded("dtstart")
        end = event.decoded("dtend")
        assert int(start.timestamp()) == 1_900_000_000
        assert (end - start).total_seconds() == 2 * 3600

    def test_summary_without_best_of(self) -> None:
        cal = create_upcoming_calendar([upcoming_match(1_900_000_000, best_of="")], TEAMS)
        event = next(c for c in cal.walk() if c.name == "VEVENT")
        assert str(event["summary"]) == "XG vs Team Falcons"

    def test_every_event_has_alarm(self) -> None:
        cal = create_upcoming_calendar(
            [upcoming_match(1_900_000_000), upcoming_match(1_900_100_000, "Aurora")], TEAMS
        )
        for event in (c for c in cal.walk() if c.name == "VEVENT"):
            assert len([c for c in event.walk() if c.name == "VALARM"]) == 1

    def test_empty_calendar(self) -> None:
        cal = create_upcoming_calendar([], TEAMS)
        assert [c for c in cal.walk() if c.name == "VEVENT"] == []
