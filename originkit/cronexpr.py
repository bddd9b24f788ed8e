"""Cron expressions with an optional seconds field."""

from __future__ import annotations

import calendar
import re
from datetime import datetime, timedelta

__all__ = ["CronExpr"]

_INT = re.compile(r"[+-]?[0-9]+")
_DOM_BLANK = 0xFFFFFFFE
_DOW_BLANK = 0x7F


def _atoi(text: str) -> int:
    if not _INT.fullmatch(text):
        raise ValueError(text)
    return int(text)


def _parse_field(field: str, low: int, high: int) -> int:
    """Parse one cron field into a bit set of allowed values.

    Accepts ``*``, ``n``, ``n-m``, ``*/k``, ``n/k`` (n to max by k) and
    ``n-m/k``, joined by commas.
    """
    bits = 0
    for part in field.split(","):
        range_and_incr = part.split("/")
        if len(range_and_incr) > 2:
            raise ValueError(f"too many slashes: {part}")
        rng = range_and_incr[0]
        start_end = rng.split("-")
        if len(start_end) > 2:
            raise ValueError(f"too many hyphens: {rng}")

        if start_end[0] == "*":
            if len(start_end) != 1:
                raise ValueError(f"invalid range: {rng}")
            start, end = low, high
        else:
            try:
                start = _atoi(start_end[0])
                if len(start_end) == 1:
                    end = high if len(range_and_incr) == 2 else start
                else:
                    end = _atoi(start_end[1])
            except ValueError:
                raise ValueError(f"invalid range: {rng}") from None

        if start > end:
            raise ValueError(f"invalid range: {rng}")
        if start < low or end > high:
            raise ValueError(f"out of range [{low}, {high}]: {rng}")

        if len(range_and_incr) == 1:
            incr = 1
        else:
            try:
                incr = _atoi(range_and_incr[1])
            except ValueError:
                raise ValueError(f"invalid increment: {range_and_incr[1]}") from None
            if incr <= 0:
                raise ValueError(f"invalid increment: {range_and_incr[1]}")

        for value in range(start, end + 1, incr):
            bits |= 1 << value
    return bits


def _weekday(t: datetime) -> int:
    """Day of week with Sunday as 0."""
    return t.isoweekday() % 7


def _add_month(t: datetime) -> datetime:
    year, month = (t.year + 1, 1) if t.month == 12 else (t.year, t.month + 1)
    if t.day <= calendar.monthrange(year, month)[1]:
        return t.replace(year=year, month=month)
    return t.replace(year=year, month=month, day=1) + timedelta(days=t.day - 1)


class CronExpr:
    """A parsed cron expression.

    Fields are ``[seconds] minutes hours day-of-month month day-of-week``;
    with five fields the seconds default to 0. Day of week runs 0-6 from
    Sunday. Raises ValueError for an invalid expression.
    """

    def __init__(self, expr: str) -> None:
        fields = expr.split()
        if len(fields) not in (5, 6):
            raise ValueError(
                f"invalid expr {expr}: expected 5 or 6 fields, got {len(fields)}"
            )
        if len(fields) == 5:
            fields.insert(0, "0")
        limits = ((0, 59), (0, 59), (0, 23), (1, 31), (1, 12), (0, 6))
        try:
            parsed = [_parse_field(f, lo, hi) for f, (lo, hi) in zip(fields, limits)]
        except ValueError as exc:
            raise ValueError(f"invalid expr {expr}: {exc}") from None
        self.expr = expr
        self._sec, self._min, self._hour, self._dom, self._month, self._dow = parsed

    def __repr__(self) -> str:
        return f"CronExpr({self.expr!r})"

    def _match_day(self, t: datetime) -> bool:
        dow_hit = bool((1 << _weekday(t)) & self._dow)
        dom_hit = bool((1 << t.day) & self._dom)
        if self._dom == _DOM_BLANK:
            return dow_hit
        if self._dow == _DOW_BLANK:
            return dom_hit
        return dow_hit or dom_hit

    def next(self, t: datetime) -> datetime | None:
        """Return the first matching time strictly after ``t``.

        Returns None when nothing matches before the end of the next year.
        """
        t = t.replace(microsecond=0) + timedelta(seconds=1)
        year = t.year
        init = False

        while True:
            if t.year > year + 1:
                return None

            retry = False
            while not (1 << t.month) & self._month:
                if not init:
                    init = True
                    t = t.replace(day=1, hour=0, minute=0, second=0)
                t = _add_month(t)
                if t.month == 1:
                    retry = True
                    break
            if retry:
                continue

            while not self._match_day(t):
                if not init:
                    init = True
                    t = t.replace(hour=0, minute=0, second=0)
                t += timedelta(days=1)
                if t.day == 1:
                    retry = True
                    break
            if retry:
                continue

            while not (1 << t.hour) & self._hour:
                if not init:
                    init = True
                    t = t.replace(minute=0, second=0)
                t += timedelta(hours=1)
                if t.hour == 0:
                    retry = True
                    break
            if retry:
                continue

            while not (1 << t.minute) & self._min:
                if not init:
                    init = True
                    t = t.replace(second=0)
                t += timedelta(minutes=1)
                if t.minute == 0:
                    retry = True
                    break
            if retry:
                continue

            while not (1 << t.second) & self._sec:
                init = True
                t += timedelta(seconds=1)
                if t.second == 0:
                    retry = True
                    break
            if retry:
                continue

            return t