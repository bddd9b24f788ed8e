"""Object pools that keep a bounded number of released objects for reuse."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Callable, Deque

__all__ = ["PoolData", "Pool", "PoolEx"]


class PoolData:
    """Base for objects handed out by :class:`PoolEx`.

    Tracks whether the object is currently checked out of a pool.
    Subclasses may override :meth:`reset` to clear their state differently.
    """

    def reset(self) -> None:
        """Drop every instance attribute, returning the object to a blank state."""
        state = getattr(self, "__dict__", None)
        if state is not None:
            state.clear()

    def is_ref(self) -> bool:
        """Return True while the object is checked out."""
        return getattr(self, "_ref", False)

    def ref(self) -> None:
        """Mark the object as checked out."""
        self._ref = True

    def unref(self) -> None:
        """Mark the object as returned."""
        self._ref = False


class _BoundedCache:
    """Thread-safe store of at most ``capacity`` objects."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self._capacity = capacity
        self._items: Deque[Any] = deque()
        self._lock = threading.Lock()

    def take(self) -> tuple[bool, Any]:
        with self._lock:
            if self._items:
                return True, self._items.popleft()
        return False, None

    def offer(self, item: Any) -> bool:
        with self._lock:
            if len(self._items) < self._capacity:
                self._items.append(item)
                return True
        return False


class Pool:
    """Hands out cached objects, creating new ones with ``factory`` when empty."""

    def __init__(self, capacity: int, factory: Callable[[], Any]) -> None:
        self._cache = _BoundedCache(capacity)
        self._factory = factory

    def get(self) -> Any:
        """Return a cached object, or a new one if none is cached."""
        found, item = self._cache.take()
        return item if found else self._factory()

    def put(self, data: Any) -> None:
        """Give ``data`` back; it is dropped when the cache is full."""
        self._cache.offer(data)


class PoolEx:
    """A pool of :class:`PoolData` objects that refuses double releases."""

    def __init__(self, capacity: int, factory: Callable[[], PoolData]) -> None:
        self._cache = _BoundedCache(capacity)
        self._factory = factory

    def get(self) -> PoolData:
        """Return an object marked as checked out."""
        found, item = self._cache.take()
        data = item if found else self._factory()
        data.ref()
        return data

    def put(self, data: PoolData) -> None:
        """Reset ``data`` and give it back.

        Raises RuntimeError if the object was already returned.
        """
        if not data.is_ref():
            raise RuntimeError("Repeatedly freeing memory")
        data.reset()
        data.unref()
        self._cache.offer(data)