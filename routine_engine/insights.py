"""Time-of-day aggregation per event type."""

from __future__ import annotations

import logging
from datetime import datetime

import numpy as np

from routine_engine.schema import DailySummary, EventInsight, EventRecord, EventType
from routine_engine.windowing import group_by_day, minutes_since_midnight, time_from_minutes, window_days

logger = logging.getLogger(__name__)

# Spread (in minutes of standard deviation) at which consistency reaches zero.
CONSISTENCY_SPREAD_MINUTES = 60.0


def consistency_score(minutes: np.ndarray) -> float:
    """Map the population standard deviation of clock minutes to a 0..1 score."""

    if minutes.size == 0:
        return 0.0
    return max(0.0, 1.0 - float(np.std(minutes)) / CONSISTENCY_SPREAD_MINUTES)


def daily_summaries(events: list[EventRecord], now: datetime, days: int = 5) -> list[DailySummary]:
    """One summary per calendar day in the window, most recent first."""

    by_day = group_by_day(events)
    total_kinds = len(EventType)
    summaries = []
    for day in window_days(now, days):
        logs = tuple(by_day.get(day, ()))
        summaries.append(DailySummary(date=day, logs=logs, completion_rate=len(logs) / total_kinds))
    return sorted(summaries, key=lambda s: s.date, reverse=True)


def _first_per_day(events: list[EventRecord], event_type: EventType, now: datetime, days: int) -> list[EventRecord]:
    by_day = group_by_day(e for e in events if e.event_type == event_type)
    return [by_day[day][0] for day in window_days(now, days) if by_day.get(day)]


def event_insight(
    events: list[EventRecord], event_type: EventType, now: datetime, days: int = 5
) -> EventInsight | None:
    """Aggregate the first daily occurrence of ``event_type`` over the trailing window.

    Times are compared as clock minutes with the calendar date discarded, so an
    event logged at 23:55 and one at 00:05 are 1430 minutes apart here.
    """

    selected = _first_per_day(events, event_type, now, days)
    if not selected:
        logger.debug("no %s logs in the last %d days", event_type.label, days)
        return None

    minutes = np.array([minutes_since_midnight(e.timestamp) for e in selected], dtype=float)
    average_minutes = int(minutes.sum()) // len(selected)
    ordered = sorted(e.timestamp for e in selected)

    return EventInsight(
        event_type=event_type,
        average_time=time_from_minutes(average_minutes),
        earliest_time=ordered[0],
        latest_time=ordered[-1],
        consistency=consistency_score(minutes),
        occurrence_count=len(selected),
    )


def all_event_insights(events: list[EventRecord], now: datetime, days: int = 5) -> list[EventInsight]:
    insights = (event_insight(events, event_type, now, days) for event_type in EventType)
    return [insight for insight in insights if insight is not None]
