from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import format_12h
from ...core.enums import LatenessCategory
from ..model import Classification
from .base import LatenessStrategy


class DirectViolationStrategy(LatenessStrategy):
    """Check-in after the latest allowed time. The allowance is never touched."""

    def classify(self, *, lateness_minutes: int, check_in_time: datetime, latest_allowed_time: datetime, remaining_allowance: int) -> Classification:
        local_check_in = check_in_time.astimezone(latest_allowed_time.tzinfo)
        reason = (
            f"Check-in at {format_12h(local_check_in)} exceeds latest allowed time "
            f"({format_12h(latest_allowed_time)})"
        )
        return Classification(
            lateness_minutes=lateness_minutes,
            category=LatenessCategory.DIRECT_VIOLATION,
            is_violation=True,
            allowance_used=0,
            excess_minutes=lateness_minutes,
            violation_reason=reason,
        )
