"""MongoDB sessions handed out from a pool, least used first."""

from __future__ import annotations

import logging
import threading
from datetime import timedelta
from typing import Any, Optional, Sequence, Union

from pymongo import ASCENDING, DESCENDING, MongoClient, ReturnDocument
from pymongo.errors import DuplicateKeyError

__all__ = ["Session", "DialContext", "dial_with_timeout", "MongoModule"]

_log = logging.getLogger(__name__)

_DEFAULT_SESSION_NUM = 100

Duration = Union[float, int, timedelta]


def _seconds(value: Duration) -> float:
    if isinstance(value, timedelta):
        return value.total_seconds()
    return float(value)


def _index_keys(key: Sequence[str]) -> list[tuple[str, int]]:
    keys = []
    for name in key:
        if name.startswith("-"):
            keys.append((name[1:], DESCENDING))
        else:
            keys.append((name.lstrip("+"), ASCENDING))
    return keys


class Session:
    """A client connection with a count of current users."""

    def __init__(self, client: Any) -> None:
        self.client = client
        self.ref = 0
        self.index = -1

    def _collection(self, db: str, collection: str) -> Any:
        return self.client[db][collection]

    def ensure_counter(self, db: str, collection: str, counter_id: str) -> None:
        """Create the counter document with ``seq`` 0 unless it already exists."""
        try:
            self._collection(db, collection).insert_one({"_id": counter_id, "seq": 0})
        except DuplicateKeyError:
            pass

    def next_seq(self, db: str, collection: str, counter_id: str) -> int:
        """Increment the counter and return its new value.

        Raises LookupError if the counter does not exist.
        """
        doc = self._collection(db, collection).find_one_and_update(
            {"_id": counter_id},
            {"$inc": {"seq": 1}},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            raise LookupError(f"counter {counter_id!r} not found")
        return int(doc.get("seq", 0))

    def ensure_index(
        self, db: str, collection: str, key: Sequence[str], background: bool
    ) -> str:
        """Create a sparse index on ``key``; a leading ``-`` makes a key descending."""
        return self._collection(db, collection).create_index(
            _index_keys(key), unique=False, sparse=True, background=background
        )

    def ensure_unique_index(
        self, db: str, collection: str, key: Sequence[str], background: bool
    ) -> str:
        """Create a sparse unique index on ``key``."""
        return self._collection(db, collection).create_index(
            _index_keys(key), unique=True, sparse=True, background=background
        )

    def close(self) -> None:
        self.client.close()


class DialContext:
    """A heap of sessions ordered by how many users each has."""

    def __init__(self, sessions: Sequence[Session]) -> None:
        self._lock = threading.Lock()
        self._sessions = list(sessions)
        for i, session in enumerate(self._sessions):
            session.index = i
        for i in reversed(range(len(self._sessions) // 2)):
            self._down(i)

    def __len__(self) -> int:
        return len(self._sessions)

    def _swap(self, i: int, j: int) -> None:
        s = self._sessions
        s[i], s[j] = s[j], s[i]
        s[i].index = i
        s[j].index = j

    def _up(self, j: int) -> None:
        while j > 0:
            parent = (j - 1) // 2
            if self._sessions[j].ref >= self._sessions[parent].ref:
                break
            self._swap(parent, j)
            j = parent

    def _down(self, i: int) -> bool:
        start = i
        n = len(self._sessions)
        while True:
            child = 2 * i + 1
            if child >= n:
                break
            right = child + 1
            if right < n and self._sessions[right].ref < self._sessions[child].ref:
                child = right
            if self._sessions[child].ref >= self._sessions[i].ref:
                break
            self._swap(i, child)
            i = child
        return i > start

    def _fix(self, i: int) -> None:
        if not self._down(i):
            self._up(i)

    def close(self) -> None:
        """Close every session."""
        with self._lock:
            for session in self._sessions:
                session.close()

    def ref(self) -> Session:
        """Take the least used session and count one more user of it."""
        with self._lock:
            if not self._sessions:
                raise RuntimeError("no sessions available")
            session = self._sessions[0]
            session.ref += 1
            self._fix(0)
            return session

    def unref(self, session: Optional[Session]) -> None:
        """Count one user less of ``session``; None is ignored."""
        if session is None:
            return
        with self._lock:
            session.ref -= 1
            self._fix(session.index)


def dial_with_timeout(
    url: str, session_num: int, dial_timeout: Duration, timeout: Duration
) -> DialContext:
    """Connect to ``url`` and build a pool of ``session_num`` sessions.

    A non-positive ``session_num`` is replaced by 100. Raises the driver's
    error when the server cannot be reached.
    """
    if session_num <= 0:
        session_num = _DEFAULT_SESSION_NUM
        _log.info("invalid sessionNum, reset to %d", session_num)

    dial_ms = int(_seconds(dial_timeout) * 1000)
    op_ms = int(_seconds(timeout) * 1000)
    client = MongoClient(
        url,
        connectTimeoutMS=dial_ms,
        serverSelectionTimeoutMS=dial_ms,
        socketTimeoutMS=op_ms,
        waitQueueTimeoutMS=op_ms,
    )
    client.admin.command("ping")
    return DialContext([Session(client) for _ in range(session_num)])


class MongoModule:
    """Owns a session pool created by :meth:`init`."""

    def __init__(self) -> None:
        self._context: Optional[DialContext] = None

    def init(
        self, url: str, session_num: int, dial_timeout: Duration, timeout: Duration
    ) -> None:
        """Connect and build the session pool."""
        self._context = dial_with_timeout(url, session_num, dial_timeout, timeout)

    def _require(self) -> DialContext:
        if self._context is None:
            raise RuntimeError("Call the init function first")
        return self._context

    def ref(self) -> Session:
        """Take a session from the pool."""
        return self._require().ref()

    def unref(self, session: Optional[Session]) -> None:
        """Give a session back to the pool."""
        self._require().unref(session)