"""CSV adapter for routine events and feedback."""

from __future__ import annotations

import csv
import logging
from typing import Callable, TypeVar

from routine_engine.adapters.records import to_event, to_feedback
from routine_engine.schema import EventRecord, FeedbackRecord

logger = logging.getLogger(__name__)

_R = TypeVar("_R")


def _parse(file_path: str, convert: Callable[[dict, str], _R]) -> list[_R]:
    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        records = [convert(row, f"Row {row_number}") for row_number, row in enumerate(reader, start=2)]
    logger.debug("parsed %d rows from %s", len(records), file_path)
    return records


def parse_events(file_path: str) -> list[EventRecord]:
    """Parse a CSV file of ``event_type,timestamp[,id]`` rows."""

    return _parse(file_path, to_event)


def parse_feedback(file_path: str) -> list[FeedbackRecord]:
    """Parse a CSV file of reminder feedback rows."""

    return _parse(file_path, to_feedback)
