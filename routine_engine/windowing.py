"""Trailing calendar-day windows and clock arithmetic shared by all analyzers."""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime, time, timedelta
from typing import Iterable, TypeVar

MINUTES_PER_DAY = 24 * 60

_R = TypeVar("_R")


def window_days(now: datetime, days: int) -> list[date]:
    """Calendar days ``today, today-1, ..., today-(days-1)``; empty when days <= 0."""

    today = now.date()
    return [today - timedelta(days=offset) for offset in range(max(0, days))]


def group_by_day(records: Iterable[_R]) -> dict[date, list[_R]]:
    """Bucket timestamped records by calendar date, each bucket in time order."""

    by_day: dict[date, list[_R]] = defaultdict(list)
    for record in sorted(records, key=lambda r: r.timestamp):
        by_day[record.timestamp.date()].append(record)
    return by_day


def rolling_window(records: Iterable[_R], now: datetime, days: int) -> list[_R]:
    """Records stamped within the last ``days`` days; empty when days <= 0."""

    if days <= 0:
        return []
    cutoff = now - timedelta(days=days)
    return [record for record in records if record.timestamp >= cutoff]


def minutes_since_midnight(value: time | datetime) -> int:
    return value.hour * 60 + value.minute


def time_from_minutes(minutes: int) -> time:
    minutes %= MINUTES_PER_DAY
    return time(hour=minutes // 60, minute=minutes % 60)


def wrapped_deviation(candidate_minutes: int, baseline_minutes: int) -> int:
    """Signed clock difference folded across midnight into [-720, 720]."""

    deviation = candidate_minutes - baseline_minutes
    if deviation > MINUTES_PER_DAY // 2:
        deviation -= MINUTES_PER_DAY
    elif deviation < -(MINUTES_PER_DAY // 2):
        deviation += MINUTES_PER_DAY
    return deviation


def shift(value: datetime | time, minutes: int) -> datetime | time:
    """Move a timestamp or clock value by ``minutes``; clock values wrap at midnight."""

    if isinstance(value, datetime):
        return value + timedelta(minutes=minutes)
    return time_from_minutes(minutes_since_midnight(value) + minutes)
