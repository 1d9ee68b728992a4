from datetime import UTC, datetime

from src.events.features.download_ics.ics import event_bounds, generate_ics, ics_filename
from src.events.tests.inmemory_models import make_event

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


def test_generate_ics_contains_event_fields():
    ics = generate_ics(make_event(7), now=NOW)

    lines = ics.split("\r\n")
    assert lines[0] == "BEGIN:VCALENDAR"
    assert "UID:event-7@events-rsvp" in lines
    assert "DTSTAMP:20261019T120000Z" in lines
    assert "DTSTART:20261107T183000" in lines
    assert "DTEND:20261107T210000" in lines
    assert "SUMMARY:Bitcoin Meetup" in lines
    assert "LOCATION:The Crown\\, London" in lines
    assert ics.endswith("END:VEVENT\r\nEND:VCALENDAR\r\n")


def test_special_characters_are_escaped():
    event = make_event(description="Bring: laptop; charger\nand snacks")

    ics = generate_ics(event, now=NOW)

    assert "DESCRIPTION:Bring: laptop\\; charger\\nand snacks" in ics


def test_long_lines_are_folded():
    event = make_event(description="x" * 200)

    ics = generate_ics(event, now=NOW)

    for line in ics.split("\r\n"):
        assert len(line.encode("utf-8")) <= 75
    assert "\r\n x" in ics


def test_end_before_start_rolls_to_next_day():
    start, end = event_bounds(make_event(start_time="22:00", end_time="01:30"))

    assert start == datetime(2026, 11, 7, 22, 0)
    assert end == datetime(2026, 11, 8, 1, 30)


def test_filename_replaces_whitespace_and_drops_unsafe_characters():
    assert ics_filename(make_event(title="Bitcoin  Meetup: London!")) == "Bitcoin_Meetup_London.ics"
    assert ics_filename(make_event(title="???")) == "event.ics"
