from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from ..core.enums import DeductionReason
from .model import LatenessDeduction


class DeductionRepository(Protocol):
    def create(self, deduction: LatenessDeduction) -> int:
        raise NotImplementedError

    def list_for_user_between(
        self,
        *,
        company_id: int,
        user_id: int,
        start_date: date,
        end_date: date,
    ) -> Sequence[LatenessDeduction]:
        raise NotImplementedError

    def exists_for_reason(self, *, user_id: int, reason: DeductionReason, violation_date: date) -> bool:
        raise NotImplementedError
