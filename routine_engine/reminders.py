"""Reminder planning from routine suggestions.

Plans are plain values; delivering them through an OS scheduler is left to
the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from routine_engine.feedback import BOARDING_EVENTS
from routine_engine.formatting import format_clock
from routine_engine.schema import EventType, OutlierInfo, RoutineSuggestion
from routine_engine.windowing import shift

ROUTINE_REMINDER = "routine_reminder"
FEEDBACK_REQUEST = "feedback_request"


@dataclass(frozen=True)
class ReminderPlan:
    event_type: EventType
    fire_time: time
    suggested_time: time
    title: str
    body: str
    category: str


def is_boarding_event(event_type: EventType) -> bool:
    return event_type in BOARDING_EVENTS


def reminder_body(event_type: EventType, reasoning: str, buffer_minutes: int) -> str:
    if event_type == EventType.WAKE_UP:
        return f"Time to start your day! {reasoning}"
    if event_type == EventType.LEAVING_HOME:
        if buffer_minutes > 0:
            return f"Time to leave! Including {buffer_minutes} min buffer for a stress-free commute."
        return f"Time to leave! {reasoning}"
    if event_type == EventType.BED_TIME:
        return f"Consider winding down. {reasoning}"
    return reasoning


def plan_reminders(
    suggestions: list[RoutineSuggestion],
    buffer_minutes: int = 10,
    lead_minutes: int = 5,
    min_confidence: float = 0.6,
) -> list[ReminderPlan]:
    """Daily reminders ``lead_minutes`` before each confident suggestion."""

    plans = []
    for suggestion in suggestions:
        if suggestion.confidence <= min_confidence:
            continue
        plans.append(
            ReminderPlan(
                event_type=suggestion.event_type,
                fire_time=shift(suggestion.suggested_time, -lead_minutes),
                suggested_time=suggestion.suggested_time,
                title=f"Time for {suggestion.event_type.label}",
                body=reminder_body(suggestion.event_type, suggestion.reasoning, buffer_minutes),
                category=FEEDBACK_REQUEST if is_boarding_event(suggestion.event_type) else ROUTINE_REMINDER,
            )
        )
    return plans


def outlier_alert(event_type: EventType, outlier: OutlierInfo) -> str | None:
    if not outlier.is_outlier or outlier.baseline_average_time is None:
        return None
    return (
        f"You usually {event_type.label.lower()} around {format_clock(outlier.baseline_average_time)}, "
        f"but today you're ±{outlier.deviation_minutes} minutes off pattern."
    )
