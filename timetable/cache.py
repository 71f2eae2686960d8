"""Time-boxed cache of course calendar events in MongoDB."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timezone

from icalendar import Event

from timetable import CacheRecord
from timetable.codec import decode_event, encode_event, to_instant
from timetable.config import CacheConfig
from timetable.database import Database
from timetable.errors import MalformedRecord, NotFound

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Cache:
    """Events cache keyed by course offering.

    A record is fresh while it is younger than ``config.ttl``. Staleness is
    computed at read time; nothing is ever expired or deleted.
    """

    def __init__(
        self,
        database: Database,
        config: CacheConfig,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.database = database
        self.config = config
        self._clock = clock or _utcnow

    def _now(self) -> datetime:
        return to_instant(self._clock())

    def has(self, key: str) -> bool:
        """Return whether ``key`` has a record no older than the TTL.

        A missing record and a stale one both report ``False``.
        """
        if self.config.disabled:
            return False

        cutoff = self._now() - self.config.ttl
        with self.database.execute(self.config.collection) as db:
            fresh = db.exists({"key": key, "created_at": {"$gte": cutoff}})
        logger.debug("Cache %s for %s", "hit" if fresh else "miss", key)
        return fresh

    def get(self, key: str) -> list[Event]:
        """Return the cached events for ``key`` in stored order, fresh or not.

        Raises NotFound when nothing was ever saved for ``key``.
        """
        with self.database.execute(self.config.collection) as db:
            document = db.find({"key": key})
        if document is None:
            raise NotFound(key)
        events = document.get("events")
        if not isinstance(events, list):
            raise MalformedRecord(f"Record for {key!r} has no events list: {events!r}")
        return [decode_event(e) for e in events]

    def save(self, key: str, events: Iterable[Event]) -> None:
        """Replace the cached events for ``key`` and reset its timestamp."""
        if self.config.disabled:
            return

        record = CacheRecord(
            key=key,
            created_at=self._now(),
            events=[encode_event(e) for e in events],
        )
        with self.database.execute(self.config.collection) as db:
            db.upsert({"key": key}, record.as_document())
        logger.debug("Cached %d events for %s", len(record.events), key)

    def fetch(self, key: str, producer: Callable[[], Iterable[Event]]) -> list[Event]:
        """Return fresh cached events for ``key``, recomputing them when stale.

        If ``producer`` fails, stale events are served when any exist.
        """
        if self.has(key):
            return self.get(key)

        try:
            events = list(producer())
        except Exception:
            stale = self._stale(key)
            if stale is None:
                raise
            logger.warning(
                "Failed to compute events for %s, serving stale cache", key, exc_info=True
            )
            return stale

        self.save(key, events)
        return events

    def _stale(self, key: str) -> list[Event] | None:
        if self.config.disabled:
            return None
        try:
            return self.get(key)
        except NotFound:
            return None

    def ensure_indexes(self) -> None:
        """Create the unique index that keeps one record per key."""
        if self.config.disabled:
            return
        with self.database.execute(self.config.collection) as db:
            db.ensure_unique("key")
