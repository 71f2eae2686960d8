"""Conversion between icalendar events and storage records."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from icalendar import Event

from timetable import EventRecord
from timetable.errors import EncodingError, MalformedRecord

REQUIRED_FIELDS = ("uid", "start", "end")


def to_instant(value: date | datetime) -> datetime:
    """Normalize a date or datetime to a naive UTC datetime."""
    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            return value
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    if isinstance(value, date):
        return datetime.combine(value, time())
    raise EncodingError(f"Expected a date or datetime, got {type(value).__name__}")


def _decoded(event: Event, name: str) -> Any:
    if name not in event:
        return None
    try:
        return event.decoded(name)
    except (KeyError, ValueError) as e:
        raise EncodingError(f"Unreadable {name} property: {e}") from e


def _text(event: Event, name: str) -> str | None:
    value = event.get(name)
    if value is None:
        return None
    return str(value)


def encode_event(event: Event) -> EventRecord:
    """Project an event onto its storage record.

    The start and end keep their absolute instant only; the original time
    zone is not stored.
    """
    uid = _text(event, "uid")
    if not uid:
        raise EncodingError("Event has no UID")

    raw_start = _decoded(event, "dtstart")
    if raw_start is None:
        raise EncodingError(f"Event {uid} has no DTSTART")
    start = to_instant(raw_start)

    raw_end = _decoded(event, "dtend")
    if raw_end is not None:
        end = to_instant(raw_end)
    else:
        duration = _decoded(event, "duration")
        if not isinstance(duration, timedelta):
            raise EncodingError(f"Event {uid} has neither DTEND nor DURATION")
        end = start + duration

    if end < start:
        raise EncodingError(f"Event {uid} ends before it starts")

    return EventRecord(
        uid=uid,
        start=start,
        end=end,
        summary=_text(event, "summary"),
        description=_text(event, "description"),
        location=_text(event, "location"),
    )


def _instant(document: Mapping[str, Any], name: str) -> datetime:
    value = document.get(name)
    if not isinstance(value, datetime):
        raise MalformedRecord(f"Record field {name!r} is not a datetime: {value!r}")
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def decode_event(document: Mapping[str, Any] | EventRecord) -> Event:
    """Rebuild an event from a stored record."""
    if isinstance(document, EventRecord):
        document = document.as_document()
    elif not isinstance(document, Mapping):
        raise MalformedRecord(f"Record is not a mapping: {document!r}")

    missing = [name for name in REQUIRED_FIELDS if document.get(name) in (None, "")]
    if missing:
        raise MalformedRecord(f"Record is missing {', '.join(missing)}")

    uid = document["uid"]
    if not isinstance(uid, str):
        raise MalformedRecord(f"Record uid is not a string: {uid!r}")

    event = Event()
    event.add("uid", uid)
    event.add("dtstart", _instant(document, "start"))
    event.add("dtend", _instant(document, "end"))

    summary = document.get("summary")
    if summary:
        event.add("summary", summary)
    description = document.get("description")
    if description:
        event.add("description", description)
    location = document.get("location")
    if location:
        event.add("location", location)

    return event
