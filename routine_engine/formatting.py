"""Human-readable rendering helpers for insight values."""

from __future__ import annotations

from datetime import datetime, time


def format_clock(value: time | datetime) -> str:
    """Render a clock value as ``H:MM`` (hour unpadded)."""

    return f"{value.hour}:{value.minute:02d}"


def minutes_formatted(seconds: float) -> str:
    return f"{int(seconds / 60)} min"


def hours_minutes_formatted(seconds: float) -> str:
    hours = int(seconds / 3600)
    minutes = int((seconds % 3600) / 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def adjustment_description(minutes: int) -> str:
    if minutes < 0:
        return f"{abs(minutes)} min earlier"
    if minutes > 0:
        return f"{minutes} min later"
    return "No change"


def consistency_message(score: float) -> str:
    if score >= 0.8:
        return "Excellent! Your routine is very consistent. Keep up the great work!"
    if score >= 0.5:
        return "Good progress! Try to maintain similar times each day for better consistency."
    return "Your routine varies significantly. Consider setting more regular times."


def feedback_status(success_rate: float) -> tuple[str, str]:
    """Return an (emoji, message) pair for a feedback success rate."""

    if success_rate >= 0.9:
        return "🎯", "Excellent timing!"
    if success_rate >= 0.7:
        return "👍", "Good consistency"
    if success_rate >= 0.5:
        return "🤔", "Room for improvement"
    return "⚠️", "Needs adjustment"
