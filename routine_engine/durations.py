"""Elapsed time between pairs of events logged on the same calendar day."""

from __future__ import annotations

from datetime import datetime

import numpy as np

from routine_engine.schema import DurationInsight, EventRecord, EventType
from routine_engine.windowing import group_by_day, window_days

COMMUTE_PAIRS: tuple[tuple[EventType, EventType], ...] = (
    (EventType.LEAVING_HOME, EventType.BOARDING_BUS),
    (EventType.LEAVING_HOME, EventType.BOARDING_SUBWAY),
    (EventType.BOARDING_BUS, EventType.ARRIVING_AT_WORK),
    (EventType.BOARDING_SUBWAY, EventType.ARRIVING_AT_WORK),
    (EventType.LEAVING_WORK, EventType.ARRIVING_HOME),
)

# Same-day pairing only: a bedtime before midnight never pairs with the next
# morning's wake-up, so this yields a sample only when both are logged on one date.
SLEEP_PAIR = (EventType.BED_TIME, EventType.WAKE_UP)


def _first(day_logs: list[EventRecord], event_type: EventType) -> EventRecord | None:
    return next((log for log in day_logs if log.event_type == event_type), None)


def duration_insight(
    events: list[EventRecord],
    from_event: EventType,
    to_event: EventType,
    now: datetime,
    days: int = 5,
) -> DurationInsight | None:
    """Statistics of ``to_event - from_event`` in seconds across valid days."""

    by_day = group_by_day(events)
    durations = []
    for day in window_days(now, days):
        day_logs = by_day.get(day, [])
        start = _first(day_logs, from_event)
        end = _first(day_logs, to_event)
        if start is not None and end is not None and end.timestamp > start.timestamp:
            durations.append((end.timestamp - start.timestamp).total_seconds())

    if not durations:
        return None

    samples = np.asarray(durations, dtype=float)
    return DurationInsight(
        from_event=from_event,
        to_event=to_event,
        average_duration=float(samples.mean()),
        min_duration=float(samples.min()),
        max_duration=float(samples.max()),
        samples=len(durations),
    )


def commute_insights(events: list[EventRecord], now: datetime, days: int = 5) -> list[DurationInsight]:
    insights = (duration_insight(events, start, end, now, days) for start, end in COMMUTE_PAIRS)
    return [insight for insight in insights if insight is not None]


def sleep_insight(events: list[EventRecord], now: datetime, days: int = 5) -> DurationInsight | None:
    return duration_insight(events, *SLEEP_PAIR, now=now, days=days)
