"""Core data schema for routine events, feedback and derived insights."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Optional

from routine_engine import formatting


class EventType(Enum):
    """Closed set of routine milestones, in display order."""

    WAKE_UP = "Wake Up"
    LEAVING_HOME = "Leaving Home"
    BOARDING_SUBWAY = "Boarding Subway"
    BOARDING_BUS = "Boarding Bus"
    ARRIVING_AT_WORK = "Arriving at Work"
    LUNCH_TIME = "Lunch Time"
    LEAVING_WORK = "Leaving Work"
    BOARDING_RETURN_BUS = "Boarding Return Bus"
    BOARDING_RETURN_SUBWAY = "Boarding Return Subway"
    ARRIVING_HOME = "Arriving Home"
    DINNER_TIME = "Dinner Time"
    HOBBY_TIME = "Hobby/Study Time"
    BED_TIME = "Bed Time"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def parse(cls, raw: str) -> "EventType":
        """Resolve a display label ("Wake Up") or member name ("wake_up")."""

        text = str(raw).strip()
        for member in cls:
            if text == member.value or text.upper() == member.name:
                return member
        raise ValueError(f"unknown event type '{raw}'")


@dataclass
class EventRecord:
    """A single logged routine event."""

    id: str
    event_type: EventType
    timestamp: datetime


@dataclass
class FeedbackRecord:
    """User response to a reminder ("caught it" / "missed it")."""

    id: str
    event_type: EventType
    timestamp: datetime
    was_successful: bool
    target_event_type: Optional[EventType] = None
    adjustment_applied_minutes: int = 0
    notes: Optional[str] = None


@dataclass(frozen=True)
class EventInsight:
    event_type: EventType
    average_time: Optional[time]
    earliest_time: Optional[datetime]
    latest_time: Optional[datetime]
    consistency: float
    occurrence_count: int


@dataclass(frozen=True)
class DurationInsight:
    from_event: EventType
    to_event: EventType
    average_duration: float
    min_duration: float
    max_duration: float
    samples: int


@dataclass(frozen=True)
class DailySummary:
    date: date
    logs: tuple[EventRecord, ...]
    completion_rate: float


@dataclass(frozen=True)
class RoutineSuggestion:
    event_type: EventType
    suggested_time: time
    confidence: float
    reasoning: str


@dataclass(frozen=True)
class OutlierInfo:
    is_outlier: bool
    deviation_minutes: int
    baseline_average_time: Optional[time]
    threshold_minutes: int


@dataclass(frozen=True)
class FeedbackSummary:
    event_type: EventType
    total_attempts: int
    success_count: int
    failure_count: int
    success_rate: float
    average_adjustment: int
    last_feedback: Optional[FeedbackRecord]

    @property
    def success_percentage(self) -> int:
        return int(self.success_rate * 100)

    @property
    def status_message(self) -> str:
        return formatting.feedback_status(self.success_rate)[1]


@dataclass(frozen=True)
class AdaptiveAdjustment:
    """Signed minute offset for a suggested time (negative means earlier)."""

    event_type: EventType
    original_time: datetime | time
    adjusted_time: datetime | time
    adjustment_minutes: int
    reason: str
    confidence: float

    @property
    def adjustment_description(self) -> str:
        return formatting.adjustment_description(self.adjustment_minutes)
