"""Outlier detection against the personal time-of-day baseline."""

from __future__ import annotations

import logging
from datetime import datetime

from routine_engine.insights import event_insight
from routine_engine.schema import EventRecord, EventType, OutlierInfo
from routine_engine.windowing import minutes_since_midnight, wrapped_deviation

logger = logging.getLogger(__name__)

MIN_BASELINE_OCCURRENCES = 3


def check_outlier(
    events: list[EventRecord],
    event_type: EventType,
    timestamp: datetime,
    threshold_minutes: int,
    now: datetime,
    baseline_days: int = 7,
) -> OutlierInfo:
    """Compare ``timestamp`` with the baseline average clock time for ``event_type``.

    Fewer than three baseline occurrences is reported as "not an outlier" with
    no deviation and no baseline.
    """

    baseline = event_insight(events, event_type, now, baseline_days)
    if baseline is None or baseline.average_time is None or baseline.occurrence_count < MIN_BASELINE_OCCURRENCES:
        logger.debug("insufficient baseline for %s outlier check", event_type.label)
        return OutlierInfo(
            is_outlier=False,
            deviation_minutes=0,
            baseline_average_time=None,
            threshold_minutes=threshold_minutes,
        )

    deviation = abs(
        wrapped_deviation(minutes_since_midnight(timestamp), minutes_since_midnight(baseline.average_time))
    )
    return OutlierInfo(
        is_outlier=deviation >= threshold_minutes,
        deviation_minutes=deviation,
        baseline_average_time=baseline.average_time,
        threshold_minutes=threshold_minutes,
    )
