"""MongoDB document store with per-operation connections."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection


class DocumentCollection:
    """Thin query/write surface over one MongoDB collection."""

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    @property
    def name(self) -> str:
        return self._collection.name

    def exists(self, query: dict[str, Any]) -> bool:
        return self._collection.count_documents(query, limit=1) > 0

    def find(self, query: dict[str, Any]) -> dict[str, Any] | None:
        return self._collection.find_one(query)

    def count(self, query: dict[str, Any]) -> int:
        return self._collection.count_documents(query)

    def insert(self, document: dict[str, Any]) -> None:
        # insert_one adds _id to the dict it is given
        self._collection.insert_one(dict(document))

    def update(self, old: dict[str, Any], document: dict[str, Any]) -> None:
        """Replace ``old`` (a previously found document) with ``document``."""
        self._collection.replace_one({"_id": old["_id"]}, document)

    def upsert(self, query: dict[str, Any], document: dict[str, Any]) -> None:
        """Replace the document matching ``query``, or insert it, in one operation."""
        self._collection.replace_one(query, document, upsert=True)

    def ensure_unique(self, field: str) -> None:
        self._collection.create_index([(field, ASCENDING)], unique=True)


class Database:
    """Opens a client for each logical operation and closes it afterwards."""

    def __init__(
        self,
        uri: str,
        name: str,
        client_factory: Callable[..., MongoClient] = MongoClient,
    ) -> None:
        self.uri = uri
        self.name = name
        self._client_factory = client_factory

    @contextmanager
    def execute(self, collection: str) -> Iterator[DocumentCollection]:
        """Yield ``collection`` on a fresh connection, closed on every exit path."""
        client = self._client_factory(self.uri)
        try:
            yield DocumentCollection(client[self.name][collection])
        finally:
            client.close()
