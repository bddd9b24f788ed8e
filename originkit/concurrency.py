"""Counting semaphore and threads that restart their work after a failure."""

from __future__ import annotations

import sys
import threading
import traceback
from types import TracebackType
from typing import Any, Callable

__all__ = ["Semaphore", "run_recovering", "go", "go_recover"]


class Semaphore:
    """Limits how many holders may be inside at once."""

    def __init__(self, n: int) -> None:
        self._sem = threading.BoundedSemaphore(n)

    def acquire(self) -> None:
        """Take one slot, blocking until one is free."""
        self._sem.acquire()

    def release(self) -> None:
        """Give back one slot."""
        self._sem.release()

    def __enter__(self) -> "Semaphore":
        self.acquire()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()


def run_recovering(callback: Callable[..., Any], recover_num: int, *args: Any) -> None:
    """Call ``callback(*args)``, reporting any exception instead of raising it.

    After a failure the call is started again in a new thread while
    ``recover_num`` allows: each restart uses one, and -1 restarts forever.
    """
    if not callable(callback):
        raise TypeError("not a function")
    try:
        callback(*args)
    except Exception as exc:
        sys.stdout.write(f"{traceback.format_exc()}\nCore information is {exc}\n")
        if recover_num == -1:
            go_recover(callback, -1, *args)
        elif recover_num >= 1:
            go_recover(callback, recover_num - 1, *args)


def go(callback: Callable[..., Any], *args: Any) -> threading.Thread:
    """Run ``callback(*args)`` in a new thread without restarting it on failure."""
    return go_recover(callback, 0, *args)


def go_recover(callback: Callable[..., Any], recover_num: int, *args: Any) -> threading.Thread:
    """Run ``callback(*args)`` in a new thread, restarting it on failure."""
    if not callable(callback):
        raise TypeError("not a function")
    thread = threading.Thread(
        target=run_recovering, args=(callback, recover_num, *args), daemon=True
    )
    thread.start()
    return thread