from datetime import datetime, time, timedelta

from routine_engine.feedback import (
    adaptive_adjustment,
    adjustment_policy,
    all_feedback_summaries,
    feedback_summary,
    recent_adjustment,
)
from routine_engine.schema import EventType, FeedbackRecord

NOW = datetime.fromisoformat("2026-10-19T18:00:00")


def feedback(results, event_type=EventType.BOARDING_BUS, start=None, adjustment=0):
    start = start or NOW - timedelta(days=len(results))
    return [
        FeedbackRecord(
            id=f"f{i}",
            event_type=event_type,
            timestamp=start + timedelta(days=i),
            was_successful=ok,
            adjustment_applied_minutes=adjustment,
        )
        for i, ok in enumerate(results)
    ]


def test_low_success_rate_moves_ten_minutes_earlier():
    records = feedback([True, True, False, False, False])
    result = adaptive_adjustment(records, EventType.BOARDING_BUS, time(8, 0), NOW)
    assert result.adjustment_minutes == -10
    assert result.confidence == 0.8
    assert result.original_time == time(8, 0)
    assert result.adjusted_time == time(7, 50)
    assert result.adjustment_description == "10 min earlier"


def test_policy_bands():
    cases = [
        ([True, True, True, False, False], -5, 0.6),
        ([True, True, True, True, False], 0, 0.8),
        ([True] * 5, 0, 0.9),
    ]
    for results, minutes, confidence in cases:
        result = adaptive_adjustment(feedback(results), EventType.BOARDING_BUS, time(8, 0), NOW)
        assert (result.adjustment_minutes, result.confidence) == (minutes, confidence)


def test_many_successes_optimise_later():
    records = [
        FeedbackRecord(f"f{i}", EventType.BOARDING_BUS, NOW - timedelta(hours=6 * i + 1), True)
        for i in range(10)
    ]
    base = datetime.fromisoformat("2026-10-20T08:00:00")
    result = adaptive_adjustment(records, EventType.BOARDING_BUS, base, NOW)
    assert result.adjustment_minutes == 2
    assert result.confidence == 0.5
    assert result.adjusted_time == datetime.fromisoformat("2026-10-20T08:02:00")


def test_adjustment_requires_three_attempts():
    assert adaptive_adjustment(feedback([False, False]), EventType.BOARDING_BUS, time(8, 0), NOW) is None
    assert adaptive_adjustment([], EventType.BOARDING_BUS, time(8, 0), NOW) is None


def test_adjustment_ignores_feedback_outside_window():
    old = feedback([False, False, False], start=NOW - timedelta(days=20))
    assert adaptive_adjustment(old, EventType.BOARDING_BUS, time(8, 0), NOW, days=7) is None


def test_adjusted_clock_time_wraps_midnight():
    records = feedback([False, False, False])
    result = adaptive_adjustment(records, EventType.BOARDING_BUS, time(0, 5), NOW)
    assert result.adjusted_time == time(23, 55)


def test_feedback_summary_counts():
    records = feedback([True, False, True, True], adjustment=-5)
    summary = feedback_summary(records, EventType.BOARDING_BUS, NOW)
    assert summary.total_attempts == 4
    assert summary.success_count == 3
    assert summary.failure_count == 1
    assert summary.success_rate == 0.75
    assert summary.success_percentage == 75
    assert summary.average_adjustment == -5
    assert summary.last_feedback.id == "f3"
    assert summary.status_message == "Good consistency"


def test_feedback_summary_absent_without_records():
    assert feedback_summary([], EventType.BOARDING_BUS, NOW) is None
    records = feedback([True], event_type=EventType.BOARDING_SUBWAY)
    assert feedback_summary(records, EventType.BOARDING_BUS, NOW) is None


def test_all_feedback_summaries_cover_boarding_events():
    records = (
        feedback([True], event_type=EventType.BOARDING_RETURN_BUS)
        + feedback([False], event_type=EventType.BOARDING_SUBWAY)
        + feedback([True], event_type=EventType.LEAVING_HOME)
    )
    summaries = all_feedback_summaries(records, NOW)
    assert [s.event_type for s in summaries] == [EventType.BOARDING_SUBWAY, EventType.BOARDING_RETURN_BUS]


def test_recent_miss_moves_five_minutes_earlier():
    records = [
        FeedbackRecord("a", EventType.BOARDING_BUS, NOW - timedelta(hours=30), True),
        FeedbackRecord("b", EventType.BOARDING_BUS, NOW - timedelta(hours=10), False),
    ]
    result = recent_adjustment(records, EventType.BOARDING_BUS, NOW)
    assert result.adjustment_minutes == -5
    assert result.confidence == 0.7
    assert result.original_time == NOW
    assert result.adjusted_time == NOW - timedelta(minutes=5)


def test_recent_adjustment_absent_when_stale_or_successful():
    stale = [FeedbackRecord("a", EventType.BOARDING_BUS, NOW - timedelta(hours=30), False)]
    assert recent_adjustment(stale, EventType.BOARDING_BUS, NOW) is None

    caught = [
        FeedbackRecord("a", EventType.BOARDING_BUS, NOW - timedelta(hours=12), False),
        FeedbackRecord("b", EventType.BOARDING_BUS, NOW - timedelta(hours=2), True),
    ]
    assert recent_adjustment(caught, EventType.BOARDING_BUS, NOW) is None
    assert recent_adjustment([], EventType.BOARDING_BUS, NOW) is None


def hourly(results, event_type=EventType.BOARDING_BUS):
    return [
        FeedbackRecord(f"h{i}", event_type, NOW - timedelta(hours=i + 1), ok)
        for i, ok in enumerate(results)
    ]


def test_non_positive_window_yields_nothing():
    records = [FeedbackRecord("a", EventType.BOARDING_BUS, NOW, False)] + hourly([False] * 4)
    for days in (0, -1):
        assert feedback_summary(records, EventType.BOARDING_BUS, NOW, days=days) is None
        assert adaptive_adjustment(records, EventType.BOARDING_BUS, time(8, 0), NOW, days=days) is None
        assert all_feedback_summaries(records, NOW, days=days) == []


def test_policy_band_boundaries():
    assert adjustment_policy(0.5, 4)[:2] == (-5, 0.6)
    assert adjustment_policy(0.7, 10)[:2] == (0, 0.8)
    assert adjustment_policy(0.9, 10)[:2] == (2, 0.5)
    assert adjustment_policy(0.9, 9)[:2] == (0, 0.9)


def test_boundary_rates_from_feedback():
    half = adaptive_adjustment(hourly([True, True, False, False]), EventType.BOARDING_BUS, time(8, 0), NOW)
    assert half.adjustment_minutes == -5

    seventy = adaptive_adjustment(hourly([True] * 7 + [False] * 3), EventType.BOARDING_BUS, time(8, 0), NOW)
    assert (seventy.adjustment_minutes, seventy.confidence) == (0, 0.8)

    ninety = adaptive_adjustment(hourly([True] * 9 + [False]), EventType.BOARDING_BUS, time(8, 0), NOW)
    assert (ninety.adjustment_minutes, ninety.confidence) == (2, 0.5)

    nine_perfect = adaptive_adjustment(hourly([True] * 9), EventType.BOARDING_BUS, time(8, 0), NOW)
    assert (nine_perfect.adjustment_minutes, nine_perfect.confidence) == (0, 0.9)

    ten_perfect = adaptive_adjustment(hourly([True] * 10), EventType.BOARDING_BUS, time(8, 0), NOW)
    assert (ten_perfect.adjustment_minutes, ten_perfect.confidence) == (2, 0.5)
