import threading

from originkit.ringqueue import Queue, SyncQueue


def test_empty_queue():
    q = Queue()
    assert len(q) == 0
    assert q.peek() is None
    assert q.pop() is None
    assert q.get(0) is None


def test_fifo_order():
    q = Queue()
    for value in ["a", "b", "c"]:
        q.add(value)
    assert len(q) == 3
    assert q.peek() == "a"
    assert [q.pop(), q.pop(), q.pop()] == ["a", "b", "c"]
    assert q.pop() is None


def test_get_positive_and_negative_index():
    q = Queue()
    for value in range(5):
        q.add(value)
    assert q.get(0) == 0
    assert q.get(4) == 4
    assert q.get(-1) == 4
    assert q.get(-5) == 0


def test_get_out_of_range_returns_none():
    q = Queue()
    q.add(1)
    assert q.get(1) is None
    assert q.get(-2) is None


def test_many_elements_keep_order_through_growth_and_shrink():
    q = Queue()
    values = list(range(1000))
    for value in values[:600]:
        q.add(value)
    popped = [q.pop() for _ in range(500)]
    for value in values[600:]:
        q.add(value)
    popped.extend(q.pop() for _ in range(len(q)))
    assert popped == values
    assert len(q) == 0


def test_peek_does_not_remove():
    q = Queue()
    q.add("x")
    assert q.peek() == "x"
    assert len(q) == 1


def test_sync_queue_basic_operations():
    q = SyncQueue()
    q.add(1)
    q.add(2)
    assert len(q) == 2
    assert q.peek() == 1
    assert q.get(-1) == 2
    assert q.pop() == 1
    assert len(q) == 1


def test_sync_queue_concurrent_adds():
    q = SyncQueue()

    def worker(base):
        for i in range(250):
            q.add(base + i)

    threads = [threading.Thread(target=worker, args=(n * 1000,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(q) == 1000
    seen = {q.pop() for _ in range(1000)}
    assert seen == {n * 1000 + i for n in range(4) for i in range(250)}
    assert q.pop() is None


def test_rlock_range_visits_in_order():
    q = SyncQueue()
    for value in "abc":
        q.add(value)
    visited = []
    q.rlock_range(visited.append)
    assert visited == ["a", "b", "c"]
    assert len(q) == 3