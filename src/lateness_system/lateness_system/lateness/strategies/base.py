from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ..model import Classification


class LatenessStrategy(ABC):
    """Strategy Pattern: encapsulate how one lateness category is computed."""

    @abstractmethod
    def classify(
        self,
        *,
        lateness_minutes: int,
        check_in_time: datetime,
        latest_allowed_time: datetime,
        remaining_allowance: int,
    ) -> Classification:
        raise NotImplementedError
