"""Lock-guarded maps: a single dictionary and a map split into hashed shards."""

from __future__ import annotations

import threading
from typing import Any, Callable

from originkit.digest import hash_number

__all__ = ["DEFAULT_SAFE_MAP_MAX_HASH_NUM", "LockedMap", "ShardedMap"]

DEFAULT_SAFE_MAP_MAX_HASH_NUM = 10


class LockedMap:
    """A dictionary whose operations all run under one lock."""

    def __init__(self) -> None:
        self._data: dict[Any, Any] = {}
        self._lock = threading.RLock()

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._data = {}

    def get(self, key: Any) -> Any:
        """Return the value stored under ``key``, or None."""
        with self._lock:
            return self._data.get(key)

    def set(self, key: Any, value: Any) -> None:
        """Store ``value`` under ``key``."""
        with self._lock:
            self._data[key] = value

    def test_and_set(self, key: Any, value: Any) -> Any:
        """Store ``value`` unless ``key`` is present.

        Returns the value already stored, or None when ``value`` was stored.
        """
        with self._lock:
            if key in self._data:
                return self._data[key]
            self._data[key] = value
            return None

    def delete(self, key: Any) -> None:
        """Remove ``key`` if present."""
        with self._lock:
            self._data.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def rlock_range(self, f: Callable[[Any, Any], Any]) -> None:
        """Call ``f(key, value)`` for every entry while holding the lock."""
        with self._lock:
            for key, value in list(self._data.items()):
                f(key, value)

    def lock_range(self, f: Callable[[Any, Any], Any]) -> None:
        """Call ``f(key, value)`` for every entry while holding the lock."""
        self.rlock_range(f)


class ShardedMap:
    """A map split into ``hash_map_num`` shards, each with its own lock.

    A key's shard is the CRC-32 of its string form modulo the shard count.
    With zero shards nothing can be stored.
    """

    def __init__(self, hash_map_num: int = DEFAULT_SAFE_MAP_MAX_HASH_NUM) -> None:
        if hash_map_num < 0:
            raise ValueError("hash_map_num must not be negative")
        self._num = hash_map_num
        self._shards: list[dict[Any, Any]] = [{} for _ in range(hash_map_num)]
        self._locks = [threading.RLock() for _ in range(hash_map_num)]
        self._range_idx = 0
        self._range_lock = threading.Lock()

    def next_rlock_range(self, f: Callable[[Any, Any], Any]) -> None:
        """Call ``f(key, value)`` for the entries of the next shard in turn."""
        if self._num == 0:
            return
        with self._range_lock:
            self._range_idx += 1
            idx = self._range_idx % self._num
        with self._locks[idx]:
            for key, value in list(self._shards[idx].items()):
                f(key, value)

    def clear(self) -> None:
        """Remove every entry from every shard."""
        for idx, lock in enumerate(self._locks):
            with lock:
                self._shards[idx] = {}

    def get_hash_code(self, key: Any) -> int:
        """Return the CRC-32 of the string form of ``key``."""
        return hash_number(str(key))

    def get_array_id_by_key(self, key: Any) -> int:
        """Return the shard index of ``key``, or -1 when there are no shards."""
        if self._num == 0:
            return -1
        return self.get_hash_code(key) % self._num

    def get(self, key: Any) -> Any:
        """Return the value stored under ``key``, or None."""
        idx = self.get_array_id_by_key(key)
        if idx < 0:
            return None
        with self._locks[idx]:
            return self._shards[idx].get(key)

    def set(self, key: Any, value: Any) -> None:
        """Store ``value`` under ``key``."""
        idx = self.get_array_id_by_key(key)
        if idx < 0:
            return
        with self._locks[idx]:
            self._shards[idx][key] = value

    def delete(self, key: Any) -> None:
        """Remove ``key`` if present."""
        idx = self.get_array_id_by_key(key)
        if idx < 0:
            return
        with self._locks[idx]:
            self._shards[idx].pop(key, None)

    def __len__(self) -> int:
        total = 0
        for idx, lock in enumerate(self._locks):
            with lock:
                total += len(self._shards[idx])
        return total

    def rlock_range(self, f: Callable[[Any, Any], Any]) -> None:
        """Call ``f(key, value)`` for every entry, one shard at a time."""
        for idx, lock in enumerate(self._locks):
            with lock:
                for key, value in list(self._shards[idx].items()):
                    f(key, value)

    def lock_range(self, f: Callable[[Any, Any], Any]) -> None:
        """Call ``f(key, value)`` for every entry, one shard at a time."""
        self.rlock_range(f)

    def lock_get(self, key: Any, f: Callable[[Any], Any]) -> None:
        """Call ``f`` with the value under ``key`` (or None) inside its shard lock."""
        idx = self.get_array_id_by_key(key)
        if idx < 0:
            f(None)
            return
        with self._locks[idx]:
            f(self._shards[idx].get(key))

    def lock_set(self, key: Any, f: Callable[[Any], Any]) -> None:
        """Replace the value under ``key`` with ``f(current)`` inside its shard lock.

        ``current`` is None when the key is absent; a None result stores nothing.
        """
        idx = self.get_array_id_by_key(key)
        if idx < 0:
            f(None)
            return
        with self._locks[idx]:
            shard = self._shards[idx]
            result = f(shard.get(key))
            if result is not None:
                shard[key] = result