"""Adaptive adjustment of suggested times from reminder feedback."""

from __future__ import annotations

import logging
from datetime import datetime, time, timedelta

from routine_engine.schema import AdaptiveAdjustment, EventType, FeedbackRecord, FeedbackSummary
from routine_engine.windowing import rolling_window, shift

logger = logging.getLogger(__name__)

MIN_ATTEMPTS = 3
OPTIMIZE_MIN_ATTEMPTS = 10
RECENT_WINDOW = timedelta(hours=24)
RECENT_MISS_ADJUSTMENT = -5

BOARDING_EVENTS: tuple[EventType, ...] = (
    EventType.BOARDING_SUBWAY,
    EventType.BOARDING_BUS,
    EventType.BOARDING_RETURN_BUS,
    EventType.BOARDING_RETURN_SUBWAY,
)


def _recent(feedback: list[FeedbackRecord], event_type: EventType, now: datetime, days: int) -> list[FeedbackRecord]:
    return [f for f in rolling_window(feedback, now, days) if f.event_type == event_type]


def feedback_summary(
    feedback: list[FeedbackRecord], event_type: EventType, now: datetime, days: int = 30
) -> FeedbackSummary | None:
    entries = _recent(feedback, event_type, now, days)
    if not entries:
        return None

    success_count = sum(1 for f in entries if f.was_successful)
    total = len(entries)
    return FeedbackSummary(
        event_type=event_type,
        total_attempts=total,
        success_count=success_count,
        failure_count=total - success_count,
        success_rate=success_count / total,
        average_adjustment=int(sum(f.adjustment_applied_minutes for f in entries) / total),
        last_feedback=max(entries, key=lambda f: f.timestamp),
    )


def all_feedback_summaries(feedback: list[FeedbackRecord], now: datetime, days: int = 30) -> list[FeedbackSummary]:
    summaries = (feedback_summary(feedback, event_type, now, days) for event_type in BOARDING_EVENTS)
    return [summary for summary in summaries if summary is not None]


def adjustment_policy(success_rate: float, total_attempts: int) -> tuple[int, float, str]:
    """Return (minutes, confidence, reason) for a success rate over ``total_attempts``."""

    if success_rate < 0.5:
        return -10, 0.8, "Low success rate. Leaving 10 min earlier to catch your connection."
    if success_rate < 0.7:
        return -5, 0.6, "Recent misses. Fine-tuning 5 min earlier."
    if success_rate < 0.9:
        return 0, 0.8, "Current schedule is working well."
    if total_attempts >= OPTIMIZE_MIN_ATTEMPTS:
        return 2, 0.5, "Consistently on time. Optimizing 2 min later."
    return 0, 0.9, "Excellent timing. Maintaining current schedule."


def adaptive_adjustment(
    feedback: list[FeedbackRecord],
    event_type: EventType,
    base_time: datetime | time,
    now: datetime,
    days: int = 7,
) -> AdaptiveAdjustment | None:
    """Shift ``base_time`` according to the feedback success rate over ``days``.

    Needs at least three attempts in the window, otherwise ``None``.
    """

    summary = feedback_summary(feedback, event_type, now, days)
    if summary is None or summary.total_attempts < MIN_ATTEMPTS:
        logger.debug("not enough %s feedback to adjust", event_type.label)
        return None

    minutes, confidence, reason = adjustment_policy(summary.success_rate, summary.total_attempts)
    return AdaptiveAdjustment(
        event_type=event_type,
        original_time=base_time,
        adjusted_time=shift(base_time, minutes),
        adjustment_minutes=minutes,
        reason=reason,
        confidence=confidence,
    )


def recent_adjustment(feedback: list[FeedbackRecord], event_type: EventType, now: datetime) -> AdaptiveAdjustment | None:
    """Nudge 5 minutes earlier when the last feedback, within 24 hours, was a miss."""

    entries = [f for f in feedback if f.event_type == event_type]
    if not entries:
        return None

    latest = max(entries, key=lambda f: f.timestamp)
    if now - latest.timestamp > RECENT_WINDOW or latest.was_successful:
        return None

    return AdaptiveAdjustment(
        event_type=event_type,
        original_time=now,
        adjusted_time=shift(now, RECENT_MISS_ADJUSTMENT),
        adjustment_minutes=RECENT_MISS_ADJUSTMENT,
        reason="Based on yesterday's feedback, leaving 5 min earlier.",
        confidence=0.7,
    )
