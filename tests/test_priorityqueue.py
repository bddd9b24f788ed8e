import random

import pytest

from originkit.priorityqueue import Item, PriorityQueue


def _drain(queue):
    result = []
    while (item := queue.pop()) is not None:
        result.append(item)
    return result


def test_priority_queue_simple():
    queue = PriorityQueue()
    item1 = Item(value="xxxx1", priority=100)
    item2 = Item(value="xxxx2", priority=99)
    item3 = Item(value="xxxx3", priority=85)
    item4 = Item(value="xxxx4", priority=10)
    for item in (item1, item2, item3, item4):
        queue.push(item)

    queue.remove(item2)

    assert [item.value for item in _drain(queue)] == ["xxxx1", "xxxx3", "xxxx4"]
    assert queue.pop() is None


def test_pop_empty_returns_none():
    assert PriorityQueue().pop() is None


def test_len_tracks_contents():
    queue = PriorityQueue()
    queue.push(Item("a", 1))
    queue.push(Item("b", 2))
    assert len(queue) == 2
    queue.pop()
    assert len(queue) == 1


def test_indices_stay_consistent():
    queue = PriorityQueue()
    items = [Item(n, random.randint(0, 50)) for n in range(30)]
    for item in items:
        queue.push(item)
    for item in items[::3]:
        queue.remove(item)
    remaining = [item for item in items if item.index != -1]
    assert len(remaining) == len(queue)
    popped = _drain(queue)
    priorities = [item.priority for item in popped]
    assert priorities == sorted(priorities, reverse=True)
    assert all(item.index == -1 for item in items)


def test_update_reorders():
    queue = PriorityQueue()
    low = Item("low", 1)
    high = Item("high", 10)
    queue.push(low)
    queue.push(high)
    queue.update(low, "now highest", 20)
    first = queue.pop()
    assert first is low
    assert first.value == "now highest"
    assert queue.pop() is high


def test_remove_returns_item():
    queue = PriorityQueue()
    item = Item("only", 5)
    queue.push(item)
    assert queue.remove(item) is item
    assert len(queue) == 0
    assert item.index == -1


def test_remove_item_not_in_queue():
    queue = PriorityQueue()
    queue.push(Item("a", 1))
    with pytest.raises(ValueError):
        queue.remove(Item("stranger", 1))