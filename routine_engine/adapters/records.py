"""Field coercion shared by the CSV and JSON adapters."""

from __future__ import annotations

import uuid
from datetime import datetime

from routine_engine.schema import EventRecord, EventType, FeedbackRecord

_EVENT_FIELDS = {"event_type", "timestamp"}
_FEEDBACK_FIELDS = {"event_type", "timestamp", "was_successful"}
_TRUE = {"true", "1", "yes", "y"}
_FALSE = {"false", "0", "no", "n"}


def _missing(item: dict, required: set[str]) -> list[str]:
    return sorted(name for name in required if item.get(name) in (None, ""))


def _timestamp(raw, where: str) -> datetime:
    try:
        timestamp = datetime.fromisoformat(str(raw).strip())
    except ValueError as exc:
        raise ValueError(f"{where}: malformed timestamp") from exc
    # Records carry naive local times.
    if timestamp.tzinfo is not None:
        raise ValueError(f"{where}: timestamp must not carry a UTC offset")
    return timestamp


def _event_type(raw, where: str) -> EventType:
    try:
        return EventType.parse(raw)
    except ValueError as exc:
        raise ValueError(f"{where}: invalid event_type '{raw}'") from exc


def _bool(raw, where: str) -> bool:
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"{where}: invalid was_successful '{raw}'")


def _identifier(raw) -> str:
    return str(raw).strip() if raw not in (None, "") else str(uuid.uuid4())


def to_event(item: dict, where: str) -> EventRecord:
    missing = _missing(item, _EVENT_FIELDS)
    if missing:
        raise ValueError(f"{where}: missing required fields {missing}")

    return EventRecord(
        id=_identifier(item.get("id")),
        event_type=_event_type(item["event_type"], where),
        timestamp=_timestamp(item["timestamp"], where),
    )


def to_feedback(item: dict, where: str) -> FeedbackRecord:
    missing = _missing(item, _FEEDBACK_FIELDS)
    if missing:
        raise ValueError(f"{where}: missing required fields {missing}")

    target_raw = item.get("target_event_type")
    target = _event_type(target_raw, where) if target_raw not in (None, "") else None

    adjustment_raw = item.get("adjustment_applied_minutes")
    adjustment = 0
    if adjustment_raw not in (None, ""):
        try:
            adjustment = int(adjustment_raw)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{where}: invalid adjustment_applied_minutes") from exc

    notes_raw = item.get("notes")
    notes = str(notes_raw).strip() if notes_raw else None

    return FeedbackRecord(
        id=_identifier(item.get("id")),
        event_type=_event_type(item["event_type"], where),
        timestamp=_timestamp(item["timestamp"], where),
        was_successful=_bool(item["was_successful"], where),
        target_event_type=target,
        adjustment_applied_minutes=adjustment,
        notes=notes,
    )
