"""MongoDB access with a time limit on every operation."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Optional, Sequence, Union

import pymongo
from pymongo import IndexModel, MongoClient, ReturnDocument

__all__ = ["MongoModule", "Session"]

_START_TIMEOUT = 5.0

Duration = Union[float, int, timedelta]


def _seconds(value: Duration) -> float:
    if isinstance(value, timedelta):
        return value.total_seconds()
    return float(value)


class Session:
    """Runs operations on a client, each limited to ``max_operator_timeout``."""

    def __init__(self, client: Any, max_operator_timeout: Duration) -> None:
        self.client = client
        self.max_operator_timeout = _seconds(max_operator_timeout)

    def _limit(self) -> Any:
        return pymongo.timeout(self.max_operator_timeout)

    def collection(self, db: str, collection: str) -> Any:
        """Return the collection ``collection`` of database ``db``."""
        return self.client[db][collection]

    def count_document(self, db: str, collection: str) -> int:
        """Return the number of documents in the collection."""
        with self._limit():
            return self.collection(db, collection).count_documents({})

    def next_seq(self, db: str, collection: str, doc_id: Any) -> int:
        """Increment field ``Seq`` of the document ``doc_id`` and return it.

        Raises LookupError if the document does not exist.
        """
        with self._limit():
            doc = self.collection(db, collection).find_one_and_update(
                {"_id": doc_id},
                {"$inc": {"Seq": 1}},
                return_document=ReturnDocument.AFTER,
            )
        if doc is None:
            raise LookupError(f"document {doc_id!r} not found")
        return int(doc.get("Seq", 0))

    def _ensure_index(
        self,
        db: str,
        collection: str,
        index_keys: Sequence[Sequence[str]],
        background: bool,
        unique: bool,
        sparse: bool,
    ) -> list[str]:
        models = []
        for keys in index_keys:
            options: dict[str, Any] = {"unique": unique, "background": background}
            if sparse:
                options["sparse"] = True
            models.append(IndexModel([(key, 1) for key in keys], **options))
        with self._limit():
            return self.collection(db, collection).create_indexes(models)

    def ensure_index(
        self,
        db: str,
        collection: str,
        index_keys: Sequence[Sequence[str]],
        background: bool,
        sparse: bool,
    ) -> list[str]:
        """Create one ascending index per list of key fields."""
        return self._ensure_index(db, collection, index_keys, background, False, sparse)

    def ensure_unique_index(
        self,
        db: str,
        collection: str,
        index_keys: Sequence[Sequence[str]],
        background: bool,
        sparse: bool,
    ) -> list[str]:
        """Create one ascending unique index per list of key fields."""
        return self._ensure_index(db, collection, index_keys, background, True, sparse)


class MongoModule:
    """Owns a MongoDB client created by :meth:`init` and checked by :meth:`start`."""

    def __init__(self) -> None:
        self.client: Optional[Any] = None
        self.max_operator_timeout = 0.0

    def init(self, uri: str, max_operator_timeout: Duration) -> None:
        """Create the client without connecting yet."""
        self.client = MongoClient(
            uri, connect=False, serverSelectionTimeoutMS=int(_START_TIMEOUT * 1000)
        )
        self.max_operator_timeout = _seconds(max_operator_timeout)

    def _require(self) -> Any:
        if self.client is None:
            raise RuntimeError("Call the init function first")
        return self.client

    def start(self) -> None:
        """Connect and ping the server; raises the driver's error on failure."""
        client = self._require()
        with pymongo.timeout(_START_TIMEOUT):
            client.admin.command("ping")

    def take_session(self) -> Session:
        """Return a session using the module's client and time limit."""
        return Session(self._require(), self.max_operator_timeout)