"""Forward-looking routine suggestions and the overall consistency score."""

from __future__ import annotations

from datetime import datetime

from routine_engine.durations import duration_insight
from routine_engine.formatting import format_clock
from routine_engine.insights import all_event_insights, event_insight
from routine_engine.schema import EventRecord, EventType, RoutineSuggestion

WAKE_UP_MIN_CONSISTENCY = 0.6
BED_TIME_MIN_CONSISTENCY = 0.5
MIN_COMMUTE_SAMPLES = 2


def routine_suggestions(events: list[EventRecord], now: datetime, days: int = 5) -> list[RoutineSuggestion]:
    """Suggest wake-up, leaving-home and bedtime times, in that order, where the data supports it."""

    suggestions: list[RoutineSuggestion] = []

    wake_up = event_insight(events, EventType.WAKE_UP, now, days)
    if wake_up and wake_up.average_time and wake_up.consistency > WAKE_UP_MIN_CONSISTENCY:
        suggestions.append(
            RoutineSuggestion(
                event_type=EventType.WAKE_UP,
                suggested_time=wake_up.average_time,
                confidence=wake_up.consistency,
                reasoning=(
                    f"Based on your routine, waking up at {format_clock(wake_up.average_time)} "
                    "keeps you on schedule."
                ),
            )
        )

    leaving = event_insight(events, EventType.LEAVING_HOME, now, days)
    commute = duration_insight(events, EventType.LEAVING_HOME, EventType.ARRIVING_AT_WORK, now, days)
    if leaving and leaving.average_time and commute and commute.samples >= MIN_COMMUTE_SAMPLES:
        commute_minutes = int(commute.average_duration / 60)
        suggestions.append(
            RoutineSuggestion(
                event_type=EventType.LEAVING_HOME,
                suggested_time=leaving.average_time,
                confidence=leaving.consistency,
                reasoning=(
                    f"Your commute typically takes {commute_minutes} minutes. "
                    "Leaving at your usual time ensures you arrive on schedule."
                ),
            )
        )

    bed_time = event_insight(events, EventType.BED_TIME, now, days)
    if bed_time and bed_time.average_time and bed_time.consistency > BED_TIME_MIN_CONSISTENCY:
        suggestions.append(
            RoutineSuggestion(
                event_type=EventType.BED_TIME,
                suggested_time=bed_time.average_time,
                confidence=bed_time.consistency,
                reasoning=(
                    f"You typically sleep at {format_clock(bed_time.average_time)}. "
                    "Maintaining this schedule supports healthy sleep habits."
                ),
            )
        )

    return suggestions


def overall_consistency_score(events: list[EventRecord], now: datetime, days: int = 5) -> float:
    """Mean consistency across every event type with data; 0.0 for an empty window."""

    insights = all_event_insights(events, now, days)
    if not insights:
        return 0.0
    return sum(insight.consistency for insight in insights) / len(insights)
