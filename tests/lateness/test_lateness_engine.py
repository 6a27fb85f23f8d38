from __future__ import annotations

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from src.lateness_system.lateness_system.core.enums import LatenessCategory
from src.lateness_system.lateness_system.core.exceptions import ValidationError
from src.lateness_system.lateness_system.lateness.engine import classify

START = datetime(2026, 3, 10, 10, 0, tzinfo=timezone.utc)
LATEST = datetime(2026, 3, 10, 10, 10, tzinfo=timezone.utc)


def at(hour: int, minute: int, second: int = 0) -> datetime:
    return datetime(2026, 3, 10, hour, minute, second, tzinfo=timezone.utc)


def test_early_check_in_is_on_time_with_zero_counters():
    result = classify(at(9, 55), START, LATEST, 60)

    assert result.category == LatenessCategory.ON_TIME
    assert (result.lateness_minutes, result.allowance_used, result.excess_minutes) == (0, 0, 0)
    assert result.is_violation is False
    assert result.violation_reason is None


def test_seconds_past_start_floor_to_on_time():
    result = classify(at(10, 0, 59), START, LATEST, 0)

    assert result.category == LatenessCategory.ON_TIME


def test_lateness_within_window_uses_allowance():
    result = classify(at(10, 5), START, LATEST, 60)

    assert result.category == LatenessCategory.ALLOWANCE_USED
    assert result.lateness_minutes == 5
    assert result.allowance_used == 5
    assert result.excess_minutes == 0
    assert result.is_violation is False


def test_after_latest_allowed_is_direct_violation_even_with_allowance_left():
    result = classify(at(10, 15), START, LATEST, 60)

    assert result.category == LatenessCategory.DIRECT_VIOLATION
    assert result.lateness_minutes == 15
    assert result.allowance_used == 0
    assert result.excess_minutes == 15
    assert result.is_violation is True
    assert result.violation_reason == "Check-in at 10:15 AM exceeds latest allowed time (10:10 AM)"


def test_seconds_past_latest_allowed_is_already_a_violation():
    result = classify(at(10, 10, 30), START, LATEST, 60)

    assert result.category == LatenessCategory.DIRECT_VIOLATION
    assert result.lateness_minutes == 10
    assert result.excess_minutes == 10


def test_exactly_latest_allowed_with_partial_allowance_splits_minutes():
    result = classify(at(10, 10), START, LATEST, 5)

    assert result.category == LatenessCategory.ALLOWANCE_USED
    assert result.lateness_minutes == 10
    assert result.allowance_used == 5
    assert result.excess_minutes == 5
    assert result.is_violation is False


def test_exhausted_allowance_is_grace_period_with_full_excess():
    result = classify(at(10, 3), START, LATEST, 0)

    assert result.category == LatenessCategory.GRACE_PERIOD
    assert result.lateness_minutes == 3
    assert result.allowance_used == 0
    assert result.excess_minutes == 3
    assert result.is_violation is False


@pytest.mark.parametrize("remaining", [0, 1, 4, 7, 10, 60])
def test_used_plus_excess_equals_lateness_inside_window(remaining):
    for minute in range(1, 11):
        result = classify(at(10, minute), START, LATEST, remaining)

        assert result.allowance_used + result.excess_minutes == result.lateness_minutes
        assert result.allowance_used <= remaining


def test_direct_violation_never_touches_allowance():
    for minute in (11, 30, 59):
        result = classify(at(10, minute), START, LATEST, 600)

        assert result.allowance_used == 0
        assert result.excess_minutes == result.lateness_minutes


def test_check_in_in_another_zone_is_compared_as_an_instant():
    riyadh = ZoneInfo("Asia/Riyadh")
    start = datetime(2026, 3, 10, 10, 0, tzinfo=riyadh)
    latest = datetime(2026, 3, 10, 10, 10, tzinfo=riyadh)
    # 07:04 UTC == 10:04 in Riyadh (UTC+3)
    result = classify(datetime(2026, 3, 10, 7, 4, tzinfo=timezone.utc), start, latest, 60)

    assert result.category == LatenessCategory.ALLOWANCE_USED
    assert result.lateness_minutes == 4


def test_violation_reason_uses_the_company_wall_clock():
    riyadh = ZoneInfo("Asia/Riyadh")
    start = datetime(2026, 3, 10, 10, 0, tzinfo=riyadh)
    latest = start + timedelta(minutes=10)

    result = classify(datetime(2026, 3, 10, 7, 45, tzinfo=timezone.utc), start, latest, 0)

    assert result.violation_reason.startswith("Check-in at 10:45 AM")


def test_naive_check_in_is_rejected():
    with pytest.raises(ValidationError):
        classify(datetime(2026, 3, 10, 10, 5), START, LATEST, 60)


def test_missing_check_in_is_rejected():
    with pytest.raises(ValidationError):
        classify(None, START, LATEST, 60)


def test_negative_allowance_is_rejected():
    with pytest.raises(ValidationError):
        classify(at(10, 5), START, LATEST, -1)
