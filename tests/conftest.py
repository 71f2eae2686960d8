"""Shared fixtures: an in-process MongoDB and a controllable clock."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import mongomock
import pytest
from icalendar import Event

from timetable.cache import Cache
from timetable.config import CacheConfig
from timetable.database import Database

T0 = datetime(2024, 10, 7, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


def make_event(
    uid: str,
    start: datetime,
    hours: int = 1,
    summary: str | None = None,
    description: str | None = None,
    location: str | None = None,
) -> Event:
    event = Event()
    event.add("uid", uid)
    event.add("dtstart", start)
    event.add("dtend", start + timedelta(hours=hours))
    if summary is not None:
        event.add("summary", summary)
    if description is not None:
        event.add("description", description)
    if location is not None:
        event.add("location", location)
    return event


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(T0)


@pytest.fixture
def mongo_client() -> mongomock.MongoClient:
    return mongomock.MongoClient()


@pytest.fixture
def database(mongo_client: mongomock.MongoClient) -> Database:
    # Every operation gets the same in-process server so data outlives a connection
    return Database("mongodb://test", "timetable_test", client_factory=lambda uri: mongo_client)


@pytest.fixture
def collection(mongo_client: mongomock.MongoClient):
    return mongo_client["timetable_test"]["cache"]


@pytest.fixture
def cache(database: Database, clock: FakeClock) -> Cache:
    return Cache(database, CacheConfig(), clock=clock)


@pytest.fixture
def disabled_cache(database: Database, clock: FakeClock) -> Cache:
    return Cache(database, CacheConfig(disabled=True), clock=clock)


@pytest.fixture
def events() -> list[Event]:
    return [
        make_event("c1-lecture-1@timetable", T0 + timedelta(days=1), summary="Lecture 1"),
        make_event("c1-lab-1@timetable", T0 + timedelta(days=2), hours=2, summary="Lab 1"),
        make_event("c1-lecture-2@timetable", T0 + timedelta(days=3), summary="Lecture 2"),
    ]
