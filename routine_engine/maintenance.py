"""Daily maintenance pass: feedback-driven adjustments and retention."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, TypeVar

from routine_engine.engine import RoutineAnalyticsEngine
from routine_engine.feedback import MIN_ATTEMPTS, adjustment_policy
from routine_engine.schema import EventRecord, EventType, FeedbackRecord, RoutineSuggestion
from routine_engine.windowing import rolling_window, shift

logger = logging.getLogger(__name__)

_R = TypeVar("_R")


@dataclass(frozen=True)
class MaintenanceReport:
    yesterday_logs: int
    yesterday_event_types: int
    adjustments: dict[EventType, int]
    suggestions: list[RoutineSuggestion]
    expired_events: int
    expired_feedback: int


def yesterday_stats(events: list[EventRecord], now: datetime) -> tuple[int, int]:
    """Return (log count, distinct event types) for the previous calendar day."""

    yesterday = now.date() - timedelta(days=1)
    logs = [e for e in events if e.timestamp.date() == yesterday]
    return len(logs), len({e.event_type for e in logs})


def calculate_adjustments(feedback: list[FeedbackRecord], now: datetime, days: int = 7) -> dict[EventType, int]:
    """Minute offsets for each event type with enough recent feedback."""

    grouped: dict[EventType, list[FeedbackRecord]] = defaultdict(list)
    for entry in rolling_window(feedback, now, days):
        grouped[entry.event_type].append(entry)

    adjustments = {}
    for event_type in EventType:
        entries = grouped.get(event_type, [])
        if len(entries) < MIN_ATTEMPTS:
            continue
        success_rate = sum(1 for f in entries if f.was_successful) / len(entries)
        minutes, _, _ = adjustment_policy(success_rate, len(entries))
        adjustments[event_type] = minutes
        logger.info("%s: %d%% -> %+d min", event_type.label, int(success_rate * 100), minutes)
    return adjustments


def apply_adjustments(
    suggestions: list[RoutineSuggestion], adjustments: dict[EventType, int]
) -> list[RoutineSuggestion]:
    adjusted = []
    for suggestion in suggestions:
        minutes = adjustments.get(suggestion.event_type, 0)
        if minutes == 0:
            adjusted.append(suggestion)
            continue
        adjusted.append(
            RoutineSuggestion(
                event_type=suggestion.event_type,
                suggested_time=shift(suggestion.suggested_time, minutes),
                confidence=suggestion.confidence,
                reasoning=f"Adjusted by {abs(minutes)} min based on feedback",
            )
        )
    return adjusted


def prune_expired(records: Iterable[_R], now: datetime, retention_days: int = 90) -> list[_R]:
    """Keep records newer than the retention cutoff; persisting the result is up to the caller."""

    cutoff = now - timedelta(days=retention_days)
    return [record for record in records if record.timestamp >= cutoff]


def run_maintenance(engine: RoutineAnalyticsEngine) -> MaintenanceReport:
    """Run the daily pass against an engine's current snapshots."""

    now = engine.now()
    settings = engine.settings
    events = engine.events
    feedback = engine.feedback

    log_count, type_count = yesterday_stats(events, now)
    logger.info("yesterday: %d logs, %d unique events", log_count, type_count)

    adjustments = calculate_adjustments(feedback, now, settings.adjustment_days)
    suggestions = apply_adjustments(engine.routine_suggestions(days=settings.adjustment_days), adjustments)

    kept_events = prune_expired(events, now, settings.retention_days)
    kept_feedback = prune_expired(feedback, now, settings.retention_days)
    report = MaintenanceReport(
        yesterday_logs=log_count,
        yesterday_event_types=type_count,
        adjustments=adjustments,
        suggestions=suggestions,
        expired_events=len(events) - len(kept_events),
        expired_feedback=len(feedback) - len(kept_feedback),
    )
    logger.info(
        "maintenance done: %d adjustments, %d expired logs, %d expired feedback",
        len(adjustments),
        report.expired_events,
        report.expired_feedback,
    )
    return report
