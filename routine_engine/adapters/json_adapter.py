"""JSON adapter for routine events and feedback."""

from __future__ import annotations

import json
import logging
from typing import Callable, TypeVar

from routine_engine.adapters.records import to_event, to_feedback
from routine_engine.schema import EventRecord, FeedbackRecord

logger = logging.getLogger(__name__)

_R = TypeVar("_R")


def _parse(file_path: str, convert: Callable[[dict, str], _R]) -> list[_R]:
    with open(file_path, encoding="utf-8") as handle:
        try:
            payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"{file_path}: malformed JSON") from exc

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    records = []
    for index, item in enumerate(payload, start=1):
        if not isinstance(item, dict):
            raise ValueError(f"Item {index}: expected an object")
        records.append(convert(item, f"Item {index}"))
    logger.debug("parsed %d items from %s", len(records), file_path)
    return records


def parse_events(file_path: str) -> list[EventRecord]:
    """Parse a JSON list of event objects."""

    return _parse(file_path, to_event)


def parse_feedback(file_path: str) -> list[FeedbackRecord]:
    """Parse a JSON list of feedback objects."""

    return _parse(file_path, to_feedback)
