from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .strategies.allowance_strategy import AllowanceStrategy
from .strategies.base import LatenessStrategy
from .strategies.direct_violation_strategy import DirectViolationStrategy
from .strategies.grace_period_strategy import GracePeriodStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class LatenessStrategyFactory:
    """Factory Pattern: choose the strategy for a check-in.

    Branches are evaluated in order and the first match wins.
    """

    def for_checkin(
        self,
        *,
        lateness_minutes: int,
        check_in_time: datetime,
        latest_allowed_time: datetime,
        remaining_allowance: int,
    ) -> LatenessStrategy:
        if lateness_minutes <= 0:
            return OnTimeStrategy()
        if check_in_time > latest_allowed_time:
            return DirectViolationStrategy()
        if remaining_allowance > 0:
            return AllowanceStrategy()
        return GracePeriodStrategy()
