from datetime import datetime, time

from routine_engine.outliers import check_outlier
from routine_engine.schema import EventRecord, EventType

NOW = datetime.fromisoformat("2026-10-19T12:00:00")


def log(event_type, stamp):
    return EventRecord(f"{event_type.name}@{stamp}", event_type, datetime.fromisoformat(stamp))


def late_bedtimes():
    return [log(EventType.BED_TIME, f"2026-10-{day}T23:50:00") for day in (16, 17, 18)]


def test_midnight_wrap():
    candidate = datetime.fromisoformat("2026-10-19T00:05:00")
    result = check_outlier(late_bedtimes(), EventType.BED_TIME, candidate, 30, NOW)
    assert result.deviation_minutes == 15
    assert result.baseline_average_time == time(23, 50)
    assert result.is_outlier is False


def test_threshold_is_inclusive():
    candidate = datetime.fromisoformat("2026-10-19T00:10:00")
    result = check_outlier(late_bedtimes(), EventType.BED_TIME, candidate, 20, NOW)
    assert result.deviation_minutes == 20
    assert result.is_outlier is True


def test_large_deviation_is_outlier():
    events = [log(EventType.WAKE_UP, f"2026-10-{day}T07:00:00") for day in (17, 18, 19)]
    candidate = datetime.fromisoformat("2026-10-20T08:00:00")
    result = check_outlier(events, EventType.WAKE_UP, candidate, 30, NOW)
    assert result.deviation_minutes == 60
    assert result.is_outlier is True
    assert result.threshold_minutes == 30


def test_insufficient_baseline_is_not_outlier():
    events = late_bedtimes()[:2]
    candidate = datetime.fromisoformat("2026-10-19T04:00:00")
    result = check_outlier(events, EventType.BED_TIME, candidate, 15, NOW)
    assert result.is_outlier is False
    assert result.deviation_minutes == 0
    assert result.baseline_average_time is None


def test_baseline_window_limits_history():
    candidate = datetime.fromisoformat("2026-10-19T03:00:00")
    result = check_outlier(late_bedtimes(), EventType.BED_TIME, candidate, 15, NOW, baseline_days=2)
    assert result.is_outlier is False
    assert result.baseline_average_time is None


def baseline_at(clock):
    return [log(EventType.LUNCH_TIME, f"2026-10-{day}T{clock}:00") for day in (16, 17, 18)]


def test_half_day_deviation_is_not_folded():
    later = check_outlier(baseline_at("06:00"), EventType.LUNCH_TIME, datetime(2026, 10, 19, 18, 0), 30, NOW)
    earlier = check_outlier(baseline_at("18:00"), EventType.LUNCH_TIME, datetime(2026, 10, 19, 6, 0), 30, NOW)
    assert later.deviation_minutes == 720
    assert earlier.deviation_minutes == 720


def test_just_past_half_day_folds_across_midnight():
    result = check_outlier(baseline_at("06:00"), EventType.LUNCH_TIME, datetime(2026, 10, 19, 18, 1), 30, NOW)
    assert result.deviation_minutes == 719
    result = check_outlier(baseline_at("18:01"), EventType.LUNCH_TIME, datetime(2026, 10, 19, 6, 0), 30, NOW)
    assert result.deviation_minutes == 719
