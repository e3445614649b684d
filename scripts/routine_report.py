"""Build a routine analytics report from CSV/JSON event and feedback logs."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from routine_engine.adapters import csv_adapter, json_adapter
from routine_engine.config import load_settings
from routine_engine.engine import RoutineAnalyticsEngine
from routine_engine.report import build_report

logger = logging.getLogger("routine_report")


def _adapter(path: Path):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return csv_adapter
    if suffix == ".json":
        return json_adapter
    raise ValueError("Unsupported input format, expected .csv or .json")


def main() -> None:
    parser = argparse.ArgumentParser(description="Run routine-engine analytics")
    parser.add_argument("--events", required=True, help="Path to CSV/JSON event log")
    parser.add_argument("--feedback", help="Path to CSV/JSON feedback log")
    parser.add_argument("--days", type=int, help="Analysis window in days")
    parser.add_argument("--config", help="YAML settings file")
    parser.add_argument("--now", help="ISO timestamp to treat as the current time")
    parser.add_argument("--out", help="Write the JSON report to this path")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    events_path = Path(args.events)
    events = _adapter(events_path).parse_events(str(events_path))
    feedback = []
    if args.feedback:
        feedback_path = Path(args.feedback)
        feedback = _adapter(feedback_path).parse_feedback(str(feedback_path))
    logger.info("loaded %d events, %d feedback records", len(events), len(feedback))

    now = datetime.fromisoformat(args.now) if args.now else None
    engine = RoutineAnalyticsEngine(
        events,
        feedback,
        settings=load_settings(args.config),
        clock=(lambda: now) if now else None,
    )
    report = build_report(engine, args.days)

    print(json.dumps(report, indent=2, ensure_ascii=False))

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(json.dumps(report, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info("saved report to %s", out_path)


if __name__ == "__main__":
    main()
