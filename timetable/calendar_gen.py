"""ICS calendar generation from cached course events."""

from __future__ import annotations

from collections.abc import Iterable

from icalendar import Calendar, Event


def create_course_calendar(key: str, events: Iterable[Event]) -> Calendar:
    """Create an ICS calendar holding a course's events."""
    cal = Calendar()
    cal.add("prodid", f"-//Timetable//{key}//EN")
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    cal.add("method", "PUBLISH")
    cal.add("x-wr-calname", f"Timetable {key}")
    # Matches the cache window so clients don't poll more often than we refresh
    cal.add("x-published-ttl", "PT30M")

    for event in events:
        cal.add_component(event)

    return cal


def render_ics(key: str, events: Iterable[Event]) -> bytes:
    """Render a course's events as iCalendar text."""
    return create_course_calendar(key, events).to_ical()
