"""Max-priority queue whose items know their heap position."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

__all__ = ["Item", "PriorityQueue"]


@dataclass(eq=False)
class Item:
    """An entry of a :class:`PriorityQueue`; ``index`` is kept by the queue."""

    value: Any = None
    priority: int = 0
    index: int = -1


class PriorityQueue:
    """Pops the item with the highest priority first."""

    def __init__(self) -> None:
        self._items: list[Item] = []

    def __len__(self) -> int:
        return len(self._items)

    def _less(self, i: int, j: int) -> bool:
        return self._items[i].priority > self._items[j].priority

    def _swap(self, i: int, j: int) -> None:
        items = self._items
        items[i], items[j] = items[j], items[i]
        items[i].index = i
        items[j].index = j

    def _up(self, j: int) -> None:
        while j > 0:
            parent = (j - 1) // 2
            if not self._less(j, parent):
                break
            self._swap(parent, j)
            j = parent

    def _down(self, start: int, n: int) -> bool:
        i = start
        while True:
            child = 2 * i + 1
            if child >= n:
                break
            right = child + 1
            if right < n and self._less(right, child):
                child = right
            if not self._less(child, i):
                break
            self._swap(i, child)
            i = child
        return i > start

    def _fix(self, i: int) -> None:
        if not self._down(i, len(self._items)):
            self._up(i)

    def _check_member(self, item: Item) -> None:
        i = item.index
        if not 0 <= i < len(self._items) or self._items[i] is not item:
            raise ValueError("item is not in the queue")

    def push(self, item: Item) -> None:
        """Add ``item`` to the queue."""
        item.index = len(self._items)
        self._items.append(item)
        self._up(item.index)

    def pop(self) -> Item | None:
        """Remove and return the highest-priority item, or None if empty."""
        if not self._items:
            return None
        last = len(self._items) - 1
        self._swap(0, last)
        self._down(0, last)
        item = self._items.pop()
        item.index = -1
        return item

    def update(self, item: Item, value: Any, priority: int) -> None:
        """Change the value and priority of an item already in the queue."""
        self._check_member(item)
        item.value = value
        item.priority = priority
        self._fix(item.index)

    def remove(self, item: Item) -> Item:
        """Take ``item`` out of the queue and return it."""
        self._check_member(item)
        i = item.index
        last = len(self._items) - 1
        if i != last:
            self._swap(i, last)
            if not self._down(i, last):
                self._up(i)
        removed = self._items.pop()
        removed.index = -1
        return removed