from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.datetime_utils import whole_minutes_between
from ..common.validators import require_aware_datetime
from ..core.exceptions import ValidationError
from .factory import LatenessStrategyFactory
from .model import Classification

_default_factory = LatenessStrategyFactory()


def classify(
    check_in_time: datetime,
    expected_start_time: datetime,
    latest_allowed_time: datetime,
    remaining_allowance_minutes: int,
    *,
    factory: Optional[LatenessStrategyFactory] = None,
) -> Classification:
    """Classify a check-in. Pure: no I/O, no clock.

    All three timestamps must be timezone-aware; lateness is floored to whole
    minutes from the expected start.
    """
    require_aware_datetime(check_in_time, "check_in_time")
    require_aware_datetime(expected_start_time, "expected_start_time")
    require_aware_datetime(latest_allowed_time, "latest_allowed_time")
    remaining = int(remaining_allowance_minutes)
    if remaining < 0:
        raise ValidationError("remaining allowance cannot be negative")

    lateness_minutes = whole_minutes_between(expected_start_time, check_in_time)
    strategy = (factory or _default_factory).for_checkin(
        lateness_minutes=lateness_minutes,
        check_in_time=check_in_time,
        latest_allowed_time=latest_allowed_time,
        remaining_allowance=remaining,
    )
    return strategy.classify(
        lateness_minutes=lateness_minutes,
        check_in_time=check_in_time,
        latest_allowed_time=latest_allowed_time,
        remaining_allowance=remaining,
    )
