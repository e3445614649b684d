"""Demo script for routine-engine."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from routine_engine.adapters.csv_adapter import parse_events, parse_feedback
from routine_engine.engine import RoutineAnalyticsEngine
from routine_engine.maintenance import run_maintenance
from routine_engine.schema import EventType

HERE = Path(__file__).resolve().parent


def main() -> None:
    events = parse_events(str(HERE / "sample_events.csv"))
    feedback = parse_feedback(str(HERE / "sample_feedback.csv"))
    now = max(e.timestamp for e in events)
    engine = RoutineAnalyticsEngine(events, feedback, clock=lambda: now)

    print("Consistency:", round(engine.overall_consistency_score(), 3))
    for suggestion in engine.routine_suggestions():
        print("Suggestion:", suggestion.event_type.label, suggestion.suggested_time, "-", suggestion.reasoning)
    for insight in engine.commute_insights():
        print("Commute:", insight.from_event.label, "->", insight.to_event.label, insight.average_duration / 60, "min")
    print("Bus feedback:", engine.feedback_summary(EventType.BOARDING_BUS))
    print("Maintenance:", run_maintenance(engine))


if __name__ == "__main__":
    main()
