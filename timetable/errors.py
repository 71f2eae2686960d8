"""Error kinds raised by the cache layer."""

from __future__ import annotations


class CacheError(Exception):
    """Base class for cache layer errors."""


class NotFound(CacheError, KeyError):
    """No cached record exists for a key."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"No cached events for {self.key!r}"


class MalformedRecord(CacheError, ValueError):
    """A stored event record is missing a required field or has the wrong type."""


class EncodingError(CacheError, ValueError):
    """A calendar event cannot be turned into a storage record."""
