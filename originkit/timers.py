"""One-shot timers, tickers and cron timers fired from a shared heap.

A :class:`TimerHeap` holds armed timers ordered by fire time. When a timer
is due it is put on its channel (a :class:`queue.Queue`); the owner of the
channel takes it off and calls :meth:`Timer.do` to run the callback.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import queue
import threading
from datetime import datetime, timedelta
from typing import Any, Callable, Optional, Union

from originkit.cronexpr import CronExpr

__all__ = [
    "TimerHeap",
    "now",
    "setup_timer",
    "start_timer",
    "new_timer",
    "Timer",
    "Ticker",
    "Cron",
    "Dispatcher",
]

_log = logging.getLogger(__name__)

Interval = Union[float, int, timedelta]

_time_offset = timedelta(0)


def now() -> datetime:
    """Return the current local time used by all timers."""
    return datetime.now() + _time_offset


def _to_delta(interval: Interval) -> timedelta:
    if isinstance(interval, timedelta):
        return interval
    return timedelta(seconds=interval)


class TimerHeap:
    """Armed timers ordered by fire time, with an optional ticking thread."""

    def __init__(self) -> None:
        self._entries: list[tuple[datetime, int, Timer]] = []
        self._lock = threading.Lock()
        self._seq = itertools.count()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def setup_timer(self, timer: "Timer") -> Optional["Timer"]:
        """Arm ``timer``; return it, or None if it is already armed."""
        if timer._open:
            return None
        timer._open = True
        timer._heap = self
        with self._lock:
            heapq.heappush(self._entries, (timer.fire_time, next(self._seq), timer))
        return timer

    def tick(self) -> bool:
        """Fire the earliest timer if it is due; return whether one fired."""
        current = now()
        with self._lock:
            if not self._entries or self._entries[0][0] > current:
                return False
            _, _, timer = heapq.heappop(self._entries)
        timer._open = False
        timer.channel.put(timer)
        return True

    def start(self, min_interval: float) -> None:
        """Start a thread that fires due timers, idling ``min_interval`` seconds."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, args=(min_interval,), daemon=True
        )
        self._thread.start()

    def _run(self, min_interval: float) -> None:
        while not self._stop.is_set():
            if not self.tick():
                self._stop.wait(min_interval)

    def stop(self) -> None:
        """Stop the ticking thread, if running."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None


_default_heap = TimerHeap()


def setup_timer(timer: "Timer") -> Optional["Timer"]:
    """Arm ``timer`` on the shared heap; None if it is already armed."""
    return _default_heap.setup_timer(timer)


def start_timer(min_interval: float) -> None:
    """Start firing timers of the shared heap in a background thread."""
    _default_heap.start(min_interval)


def new_timer(interval: Interval) -> "Timer":
    """Create and arm a timer on the shared heap with its own channel."""
    timer = Timer(interval, queue.Queue(maxsize=1), None, None)
    setup_timer(timer)
    return timer


class Timer:
    """A one-shot timer.

    ``cb`` is called as ``cb(id, addition_data)``; otherwise ``cb_ex`` is
    called with the timer. ``on_close`` is called when the timer is done.
    """

    def __init__(
        self,
        interval: Interval,
        channel: "queue.Queue[Timer]",
        callback: Optional[Callable[[int, Any], Any]],
        addition_data: Any,
    ) -> None:
        self.id = 0
        self.interval = _to_delta(interval)
        self.channel = channel
        self.fire_time = now() + self.interval
        self.cb = callback
        self.cb_ex: Optional[Callable[[Any], Any]] = None
        self.on_close: Optional[Callable[[Any], Any]] = None
        self.addition_data = addition_data
        self._cancelled = False
        self._open = False
        self._heap: Optional[TimerHeap] = None

    def cancel(self) -> None:
        """Stop the timer from running its callback again."""
        self._cancelled = True

    def is_active(self) -> bool:
        """Return True until the timer is cancelled."""
        return not self._cancelled

    def get_name(self) -> str:
        """Return the qualified name of the callback, or '' if there is none."""
        fn = self.cb if self.cb is not None else self.cb_ex
        if fn is None:
            return ""
        name = getattr(fn, "__qualname__", None) or repr(fn)
        module = getattr(fn, "__module__", None)
        return f"{module}.{name}" if module else name

    def _arm(self) -> Optional["Timer"]:
        return (self._heap or _default_heap).setup_timer(self)

    def setup(self, now: datetime) -> None:
        """Arm the timer again to fire one interval after ``now``.

        Raises RuntimeError if the timer is already armed.
        """
        self.fire_time = now + self.interval
        if self._arm() is None:
            raise RuntimeError("failed to install timer")

    def _close(self) -> None:
        if self.on_close is not None:
            self.on_close(self)

    def _call(self) -> None:
        if self.cb is not None:
            self.cb(self.id, self.addition_data)
        elif self.cb_ex is not None:
            self.cb_ex(self)

    def do(self) -> None:
        """Run the callback of a fired timer; errors are logged, not raised."""
        try:
            self._do()
        except Exception as exc:
            _log.exception("core dump info[%s]", exc)

    def _do(self) -> None:
        if not self.is_active():
            self._close()
            return
        self._call()
        if not self._open:
            self._close()


class Ticker(Timer):
    """A timer that fires again every interval until cancelled."""

    def do(self) -> None:
        """Run the callback and re-arm, or close if cancelled."""
        try:
            if not self.is_active():
                self._close()
                return
            self._call()
            if self.is_active():
                self.fire_time = now() + self.interval
                self._arm()
            else:
                self._close()
        except Exception as exc:
            _log.exception("core dump info[%s]", exc)


class Cron(Timer):
    """A timer that fires at the times given by a cron expression."""

    cron_expr: CronExpr

    def do(self) -> None:
        """Run the callback and re-arm for the next matching time."""
        try:
            if not self.is_active():
                self._close()
                return
            current = now()
            next_time = self.cron_expr.next(current)
            if next_time is None:
                if self.cb_ex is not None:
                    self.cb_ex(self)
                return
            self._call()
            if self.is_active():
                self.interval = next_time - current
                self.fire_time = current + self.interval
                self._arm()
            else:
                self._close()
        except Exception as exc:
            _log.exception("core dump info[%s]", exc)


class Dispatcher:
    """Creates timers on the shared heap that fire into one channel."""

    def __init__(self, capacity: int) -> None:
        self.channel: "queue.Queue[Timer]" = queue.Queue(maxsize=capacity)

    def after_func(
        self,
        interval: Interval,
        cb: Optional[Callable[[int, Any], Any]],
        cb_ex: Optional[Callable[[Timer], Any]],
        on_close: Optional[Callable[[Timer], Any]],
        on_add: Optional[Callable[[Timer], Any]],
    ) -> Timer:
        """Arm a one-shot timer firing after ``interval``."""
        timer = Timer(interval, self.channel, cb, None)
        timer.cb_ex = cb_ex
        timer.on_close = on_close
        armed = setup_timer(timer)
        if on_add is not None and armed is not None:
            on_add(armed)
        return timer

    def cron_func(
        self,
        cron_expr: CronExpr,
        cb: Optional[Callable[[int, Any], Any]],
        cb_ex: Optional[Callable[[Cron], Any]],
        on_close: Optional[Callable[[Timer], Any]],
        on_add: Optional[Callable[[Timer], Any]],
    ) -> Optional[Cron]:
        """Arm a cron timer; None if the expression never matches."""
        current = now()
        next_time = cron_expr.next(current)
        if next_time is None:
            return None
        cron = Cron(next_time - current, self.channel, cb, None)
        cron.cb_ex = cb_ex
        cron.on_close = on_close
        cron.cron_expr = cron_expr
        cron.fire_time = next_time
        setup_timer(cron)
        if on_add is not None:
            on_add(cron)
        return cron

    def ticker_func(
        self,
        interval: Interval,
        cb: Optional[Callable[[int, Any], Any]],
        cb_ex: Optional[Callable[[Ticker], Any]],
        on_close: Optional[Callable[[Timer], Any]],
        on_add: Optional[Callable[[Timer], Any]],
    ) -> Ticker:
        """Arm a ticker firing every ``interval``."""
        ticker = Ticker(interval, self.channel, cb, None)
        ticker.cb_ex = cb_ex
        ticker.on_close = on_close
        setup_timer(ticker)
        if on_add is not None:
            on_add(ticker)
        return ticker