"""JSON-ready dashboard report."""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Optional

from routine_engine import outliers
from routine_engine.engine import RoutineAnalyticsEngine
from routine_engine.formatting import consistency_message
from routine_engine.reminders import outlier_alert, plan_reminders


def to_jsonable(value: Any) -> Any:
    """Convert schema values (dataclasses, enums, datetimes) to JSON primitives."""

    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, time):
        return value.strftime("%H:%M")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {to_jsonable(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def build_report(engine: RoutineAnalyticsEngine, days: Optional[int] = None) -> dict:
    """Collect every dashboard query for one analysis window.

    Each of today's logs is checked for outliers against a baseline that
    excludes that log.
    """

    window = engine.settings.analysis_days if days is None else days
    score = engine.overall_consistency_score(window)
    suggestions = engine.routine_suggestions(window)
    settings = engine.settings

    alerts = []
    if settings.highlight_outliers:
        now = engine.now()
        events = engine.events
        for log in engine.daily_summaries(1)[0].logs:
            baseline = [e for e in events if e is not log]
            result = outliers.check_outlier(
                baseline,
                log.event_type,
                log.timestamp,
                settings.outlier_threshold_minutes,
                now,
                settings.baseline_days,
            )
            message = outlier_alert(log.event_type, result)
            if message:
                alerts.append({"event_type": log.event_type, "timestamp": log.timestamp, "message": message})

    report = {
        "generated_at": engine.now(),
        "days": window,
        "consistency": {"score": score, "message": consistency_message(score)},
        "daily_summaries": engine.daily_summaries(window),
        "event_insights": engine.all_event_insights(window),
        "commute_insights": engine.commute_insights(window),
        "sleep_insight": engine.sleep_insight(window),
        "suggestions": suggestions,
        "reminders": plan_reminders(
            suggestions,
            buffer_minutes=settings.buffer_minutes,
            lead_minutes=settings.reminder_lead_minutes,
            min_confidence=settings.reminder_min_confidence,
        ),
        "feedback_summaries": engine.all_feedback_summaries(),
        "outlier_alerts": alerts,
    }
    return to_jsonable(report)
