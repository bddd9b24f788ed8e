"""FIFO queue with indexed access, plus a thread-safe wrapper."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Callable, Iterator

__all__ = ["Queue", "SyncQueue"]


class Queue:
    """A first-in first-out queue that is not thread-safe."""

    def __init__(self) -> None:
        self._items: deque[Any] = deque()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def add(self, elem: Any) -> None:
        """Put ``elem`` at the end of the queue."""
        self._items.append(elem)

    def peek(self) -> Any:
        """Return the element at the head, or None if the queue is empty."""
        return self._items[0] if self._items else None

    def get(self, i: int) -> Any:
        """Return the element at position ``i``; negative counts from the end.

        Returns None when the index is out of range.
        """
        if i < 0:
            i += len(self._items)
        if not 0 <= i < len(self._items):
            return None
        return self._items[i]

    def pop(self) -> Any:
        """Remove and return the head element, or None if the queue is empty."""
        return self._items.popleft() if self._items else None


class SyncQueue:
    """A :class:`Queue` guarded by a lock."""

    def __init__(self) -> None:
        self._queue = Queue()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._queue)

    def add(self, elem: Any) -> None:
        with self._lock:
            self._queue.add(elem)

    def peek(self) -> Any:
        with self._lock:
            return self._queue.peek()

    def get(self, i: int) -> Any:
        with self._lock:
            return self._queue.get(i)

    def pop(self) -> Any:
        with self._lock:
            return self._queue.pop()

    def rlock_range(self, f: Callable[[Any], Any]) -> None:
        """Call ``f`` on every element in order while holding the lock."""
        with self._lock:
            for elem in self._queue:
                f(elem)