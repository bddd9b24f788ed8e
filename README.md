# originkit

Building blocks for long-running server processes.

## What is in it

- `originkit.cronexpr.CronExpr` – cron expressions of five fields
  (`minutes hours day-of-month month day-of-week`) or six (with leading seconds).
  `next(t)` returns the first matching time after `t`, or `None` if nothing matches
  before the end of the following year. Invalid expressions raise `ValueError`.
- `originkit.timers` – a `TimerHeap` of armed timers ordered by fire time, with a shared
  heap behind `setup_timer`, `start_timer` and `new_timer`. A `Dispatcher` creates
  `Timer` (one-shot), `Ticker` (repeating) and `Cron` (cron-driven) timers; when due they
  are put on the dispatcher's `channel` (a `queue.Queue`) and the owner calls `do()` on
  each to run its callback. Intervals are seconds or `timedelta`.
- `originkit.ringqueue.Queue` / `SyncQueue` – FIFO queues with `add`, `peek`, `get(i)`
  (negative indexes count from the end) and `pop`, returning `None` when empty or out of
  range; `SyncQueue` guards every operation with a lock and adds `rlock_range(f)`.
- `originkit.priorityqueue.PriorityQueue` and `Item` – highest priority first, with
  `update` and `remove` of items already in the queue.
- `originkit.mempool.Pool` / `PoolEx` / `PoolData` – bounded object pools; `PoolEx`
  raises `RuntimeError` when an object is returned twice.
- `originkit.concurrentmap.LockedMap` / `ShardedMap` – thread-safe maps; `ShardedMap`
  spreads keys over shards by the CRC-32 of their string form.
- `originkit.concurrency` – `Semaphore` (also a context manager), `go`, `go_recover` and
  `run_recovering`, which restart a failing callable in a new thread a given number of
  times (`-1` for ever).
- `originkit.deepcopy` – `deep_copy(dst, src)` and `deep_clone(value)` for dicts, lists,
  tuples, sets and dataclasses; dataclass fields with `metadata={"deepcopy": "-"}` are
  not copied.
- `originkit.digest` – `hash_number` (CRC-32) and `md5_v`, `md5_v2`, `md5_v3` (hex MD5).
- `originkit.guid` – `UUID`, `rand_uuid`, `from_str`, `must_from_str`.
- `originkit.aesencrypt.AesEncrypt` – AES-CFB encryption of strings with a text key of at
  least 16 bytes.
- `originkit.randutil` – `rand_group` (weighted index), `rand_interval`,
  `rand_interval_n` (distinct values).
- `originkit.buildinfo.get_build_date_time` – the recorded build date, empty by default.
- `originkit.httpclient.HttpClientModule` – pooled HTTP client (TLS certificates are not
  verified) with `request` and `sync_request`, whose result is fetched with
  `get(timeout_ms)`.
- `originkit.mongodb` – `MongoModule` and `Session` with a time limit on every operation:
  `count_document`, `next_seq`, `ensure_index`, `ensure_unique_index`, `collection`.
- `originkit.mongopool` – `MongoModule`, `DialContext` and `Session`: a pool of sessions
  handed out least used first, with `ensure_counter`, `next_seq`, `ensure_index` and
  `ensure_unique_index`.

Errors are raised as exceptions.

## Install

```
pip install originkit
pip install "originkit[test]"   # with test tools
```

## Examples

```python
from datetime import datetime
from originkit.cronexpr import CronExpr

expr = CronExpr("0 30 8 * * 1-5")      # weekdays at 08:30:00
print(expr.next(datetime(2024, 1, 1)))  # 2024-01-01 08:30:00
```

```python
from originkit.timers import Dispatcher, start_timer

start_timer(0.01)
dispatcher = Dispatcher(100)
dispatcher.after_func(0.5, lambda timer_id, data: print("fired"), None, None, None)
dispatcher.channel.get().do()           # waits for the timer, then runs it
```

```python
from originkit.priorityqueue import Item, PriorityQueue

queue = PriorityQueue()
low, high = Item(value="low", priority=1), Item(value="high", priority=100)
queue.push(low)
queue.push(high)
assert queue.pop() is high
```

```python
from originkit.aesencrypt import AesEncrypt

key = "placeholder" * 2
cipher = AesEncrypt(key)
data = cipher.encrypt("hello")
assert cipher.decrypt(data) == "hello"
```

The MongoDB modules need a running server: construct them, call `init(...)` with your
connection details, then use their methods.

## What it does not do

The package has no MySQL client and no Redis client; only HTTP and MongoDB access are
included. It provides no server, command-line program or service framework of its own:
timers deliver fired timers to a queue, and running them is up to the caller.