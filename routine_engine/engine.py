"""Routine analytics engine: the query surface over event and feedback snapshots."""

from __future__ import annotations

import logging
from datetime import datetime, time
from typing import Callable, Iterable, Optional

from routine_engine import durations, feedback, insights, outliers, suggestions
from routine_engine.config import RoutineSettings
from routine_engine.schema import (
    AdaptiveAdjustment,
    DailySummary,
    DurationInsight,
    EventInsight,
    EventRecord,
    EventType,
    FeedbackRecord,
    FeedbackSummary,
    OutlierInfo,
    RoutineSuggestion,
)

logger = logging.getLogger(__name__)


class RoutineAnalyticsEngine:
    """Recomputes every insight on demand from the current snapshots.

    Snapshots are copied on assignment, so a caller mutating its own list does
    not affect queries. No results are cached between calls.
    """

    def __init__(
        self,
        events: Iterable[EventRecord] = (),
        feedback: Iterable[FeedbackRecord] = (),
        settings: Optional[RoutineSettings] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.settings = settings or RoutineSettings()
        self._clock = clock or datetime.now
        self._events: list[EventRecord] = list(events)
        self._feedback: list[FeedbackRecord] = list(feedback)

    @property
    def events(self) -> list[EventRecord]:
        return list(self._events)

    @property
    def feedback(self) -> list[FeedbackRecord]:
        return list(self._feedback)

    def now(self) -> datetime:
        return self._clock()

    def set_events(self, events: Iterable[EventRecord]) -> None:
        self._events = list(events)
        logger.debug("event snapshot replaced (%d records)", len(self._events))

    def set_feedback(self, feedback_records: Iterable[FeedbackRecord]) -> None:
        self._feedback = list(feedback_records)
        logger.debug("feedback snapshot replaced (%d records)", len(self._feedback))

    def _days(self, days: Optional[int]) -> int:
        return self.settings.analysis_days if days is None else days

    # Time-of-day aggregation

    def daily_summaries(self, days: Optional[int] = None) -> list[DailySummary]:
        return insights.daily_summaries(self._events, self.now(), self._days(days))

    def event_insight(self, event_type: EventType, days: Optional[int] = None) -> Optional[EventInsight]:
        return insights.event_insight(self._events, event_type, self.now(), self._days(days))

    def all_event_insights(self, days: Optional[int] = None) -> list[EventInsight]:
        return insights.all_event_insights(self._events, self.now(), self._days(days))

    # Durations

    def duration_insight(
        self, from_event: EventType, to_event: EventType, days: Optional[int] = None
    ) -> Optional[DurationInsight]:
        return durations.duration_insight(self._events, from_event, to_event, self.now(), self._days(days))

    def commute_insights(self, days: Optional[int] = None) -> list[DurationInsight]:
        return durations.commute_insights(self._events, self.now(), self._days(days))

    def sleep_insight(self, days: Optional[int] = None) -> Optional[DurationInsight]:
        return durations.sleep_insight(self._events, self.now(), self._days(days))

    # Suggestions and outliers

    def overall_consistency_score(self, days: Optional[int] = None) -> float:
        return suggestions.overall_consistency_score(self._events, self.now(), self._days(days))

    def routine_suggestions(self, days: Optional[int] = None) -> list[RoutineSuggestion]:
        return suggestions.routine_suggestions(self._events, self.now(), self._days(days))

    def check_outlier(
        self,
        event_type: EventType,
        timestamp: datetime,
        threshold_minutes: Optional[int] = None,
        baseline_days: Optional[int] = None,
    ) -> OutlierInfo:
        return outliers.check_outlier(
            self._events,
            event_type,
            timestamp,
            self.settings.outlier_threshold_minutes if threshold_minutes is None else threshold_minutes,
            self.now(),
            self.settings.baseline_days if baseline_days is None else baseline_days,
        )

    # Feedback learning

    def feedback_summary(self, event_type: EventType, days: Optional[int] = None) -> Optional[FeedbackSummary]:
        window = self.settings.feedback_days if days is None else days
        return feedback.feedback_summary(self._feedback, event_type, self.now(), window)

    def all_feedback_summaries(self, days: Optional[int] = None) -> list[FeedbackSummary]:
        window = self.settings.feedback_days if days is None else days
        return feedback.all_feedback_summaries(self._feedback, self.now(), window)

    def adaptive_adjustment(
        self, event_type: EventType, base_time: datetime | time, days: Optional[int] = None
    ) -> Optional[AdaptiveAdjustment]:
        window = self.settings.adjustment_days if days is None else days
        return feedback.adaptive_adjustment(self._feedback, event_type, base_time, self.now(), window)

    def recent_adjustment(self, event_type: EventType) -> Optional[AdaptiveAdjustment]:
        return feedback.recent_adjustment(self._feedback, event_type, self.now())
