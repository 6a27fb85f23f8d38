from __future__ import annotations

from datetime import datetime

from ...core.enums import LatenessCategory
from ..model import Classification
from .base import LatenessStrategy


class AllowanceStrategy(LatenessStrategy):
    """Late within the window and some allowance left.

    Consumes up to the remaining balance; whatever it cannot cover is excess.
    """

    def classify(self, *, lateness_minutes: int, check_in_time: datetime, latest_allowed_time: datetime, remaining_allowance: int) -> Classification:
        used = min(lateness_minutes, remaining_allowance)
        return Classification(
            lateness_minutes=lateness_minutes,
            category=LatenessCategory.ALLOWANCE_USED,
            is_violation=False,
            allowance_used=used,
            excess_minutes=lateness_minutes - used,
        )
