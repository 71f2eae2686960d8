"""Timetable — cached course calendar models.

Cache keys are opaque strings; feeds address a course offering as
``course_key(course, year_of_entry)``, e.g. ``"c1/2024"``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


def course_key(course: str, year_of_entry: str | int) -> str:
    """Build the cache key for a course offering."""
    return f"{course}/{year_of_entry}"


@dataclass
class EventRecord:
    """Storage-safe projection of a calendar event.

    ``start`` and ``end`` are naive UTC instants, which is all BSON keeps.
    """

    uid: str
    start: datetime
    end: datetime
    summary: str | None = None
    description: str | None = None
    location: str | None = None

    def as_document(self) -> dict:
        return {
            "uid": self.uid,
            "start": self.start,
            "end": self.end,
            "summary": self.summary,
            "description": self.description,
            "location": self.location,
        }


@dataclass
class CacheRecord:
    """One cached events list for a key."""

    key: str
    created_at: datetime
    events: list[EventRecord] = field(default_factory=list)

    def as_document(self) -> dict:
        return {
            "key": self.key,
            "created_at": self.created_at,
            "events": [e.as_document() for e in self.events],
        }
