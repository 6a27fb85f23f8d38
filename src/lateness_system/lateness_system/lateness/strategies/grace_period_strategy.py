from __future__ import annotations

from datetime import datetime

from ...core.enums import LatenessCategory
from ..model import Classification
from .base import LatenessStrategy


class GracePeriodStrategy(LatenessStrategy):
    """Late within the window with the allowance exhausted: all minutes are excess."""

    def classify(self, *, lateness_minutes: int, check_in_time: datetime, latest_allowed_time: datetime, remaining_allowance: int) -> Classification:
        return Classification(
            lateness_minutes=lateness_minutes,
            category=LatenessCategory.GRACE_PERIOD,
            is_violation=False,
            allowance_used=0,
            excess_minutes=lateness_minutes,
        )
