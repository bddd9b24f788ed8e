"""Random choices: weighted groups, intervals and distinct samples."""

from __future__ import annotations

import bisect
import itertools
import random

__all__ = ["rand_group", "rand_interval", "rand_interval_n"]


def rand_group(*args: int) -> int:
    """Pick an index with probability proportional to its weight.

    Returns 0 when all weights are zero. Raises ValueError when no weights
    are given or a weight is negative.
    """
    if not args:
        raise ValueError("args not found")
    if any(weight < 0 for weight in args):
        raise ValueError("weights must not be negative")

    totals = list(itertools.accumulate(args))
    if totals[-1] == 0:
        return 0
    roll = random.randrange(totals[-1])
    return bisect.bisect_right(totals, roll)


def rand_interval(b1: int, b2: int) -> int:
    """Return a random integer between ``b1`` and ``b2``, both included."""
    if b1 == b2:
        return b1
    low, high = sorted((b1, b2))
    return random.randint(low, high)


def rand_interval_n(b1: int, b2: int, n: int) -> list[int]:
    """Return up to ``n`` distinct random integers between ``b1`` and ``b2``.

    At most as many values as the interval holds are returned.
    """
    if b1 == b2:
        return [b1]
    low, high = sorted((b1, b2))
    span = high - low + 1
    n = min(n, span)

    result: list[int] = []
    moved: dict[int, int] = {}
    for _ in range(n):
        value = random.randrange(span) + low
        result.append(moved.get(value, value))
        last = span - 1 + low
        if value != last:
            moved[value] = moved.get(last, last)
        span -= 1
    return result