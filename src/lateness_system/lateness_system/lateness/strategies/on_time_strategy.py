from __future__ import annotations

from datetime import datetime

from ...core.enums import LatenessCategory
from ..model import Classification
from .base import LatenessStrategy


class OnTimeStrategy(LatenessStrategy):
    """Check-in at or before work start; early arrival earns nothing."""

    def classify(self, *, lateness_minutes: int, check_in_time: datetime, latest_allowed_time: datetime, remaining_allowance: int) -> Classification:
        return Classification(
            lateness_minutes=0,
            category=LatenessCategory.ON_TIME,
            is_violation=False,
            allowance_used=0,
            excess_minutes=0,
        )
