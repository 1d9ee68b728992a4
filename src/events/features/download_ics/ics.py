"""Minimal iCalendar (RFC 5545) export for a single event."""

import re
from datetime import UTC, datetime, timedelta

from src.events.dtos import EventDTO

PRODID = "-//events-rsvp//EN"
MAX_LINE_OCTETS = 75


def _escape(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
    )


def _fold(line: str) -> str:
    """Split content lines longer than 75 octets, continuation lines start with a space."""
    encoded = line.encode("utf-8")
    if len(encoded) <= MAX_LINE_OCTETS:
        return line

    parts = []
    current = ""
    limit = MAX_LINE_OCTETS
    for char in line:
        if len((current + char).encode("utf-8")) > limit:
            parts.append(current)
            current = char
            limit = MAX_LINE_OCTETS - 1
        else:
            current += char
    parts.append(current)
    return "\r\n ".join(parts)


def _format_local(value: datetime) -> str:
    return value.strftime("%Y%m%dT%H%M%S")


def event_bounds(event: EventDTO) -> tuple[datetime, datetime]:
    """Start and end as floating local times; an end before the start means the next day."""
    start = datetime.strptime(f"{event.date} {event.start_time}", "%Y-%m-%d %H:%M")
    end = datetime.strptime(f"{event.date} {event.end_time}", "%Y-%m-%d %H:%M")
    if end <= start:
        end += timedelta(days=1)
    return start, end


def generate_ics(event: EventDTO, now: datetime | None = None) -> str:
    start, end = event_bounds(event)
    stamp = (now or datetime.now(UTC)).strftime("%Y%m%dT%H%M%SZ")

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODID}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
        "BEGIN:VEVENT",
        f"UID:event-{event.id}@events-rsvp",
        f"DTSTAMP:{stamp}",
        f"DTSTART:{_format_local(start)}",
        f"DTEND:{_format_local(end)}",
        f"SUMMARY:{_escape(event.title)}",
        f"DESCRIPTION:{_escape(event.description)}",
        f"LOCATION:{_escape(event.location)}",
        "STATUS:CONFIRMED",
        "END:VEVENT",
        "END:VCALENDAR",
    ]
    return "\r\n".join(_fold(line) for line in lines) + "\r\n"


def ics_filename(event: EventDTO) -> str:
    """Title with whitespace runs turned into underscores, limited to header-safe characters."""
    name = re.sub(r"[^A-Za-z0-9_.-]", "", "_".join(event.title.split()))
    return f"{name or 'event'}.ics"
