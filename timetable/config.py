"""Cache configuration, built once at startup and passed to the cache."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta

CACHE_TTL = timedelta(minutes=30)
COLLECTION = "cache"

DEFAULT_MONGO_URI = "mongodb://localhost:27017"
DEFAULT_DATABASE = "timetable"


@dataclass(frozen=True)
class CacheConfig:
    """Settings for the events cache.

    ``disabled`` turns ``Cache.has`` into a constant ``False`` and ``Cache.save``
    into a no-op, so a test run never touches the database.
    """

    mongo_uri: str = DEFAULT_MONGO_URI
    database: str = DEFAULT_DATABASE
    collection: str = COLLECTION
    ttl: timedelta = CACHE_TTL
    disabled: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> CacheConfig:
        """Read settings from MONGO_URI, TIMETABLE_DB and TIMETABLE_ENV (or RACK_ENV)."""
        env = os.environ if environ is None else environ
        mode = env.get("TIMETABLE_ENV") or env.get("RACK_ENV", "")
        return cls(
            mongo_uri=env.get("MONGO_URI", DEFAULT_MONGO_URI),
            database=env.get("TIMETABLE_DB", DEFAULT_DATABASE),
            disabled=mode.strip().lower() == "test",
        )
