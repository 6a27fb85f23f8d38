from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AttendanceDay


class AttendanceRepository(Protocol):
    def exists_for_user_and_date(self, *, company_id: int, user_id: int, work_date: date) -> bool:
        raise NotImplementedError

    def list_for_user_between(
        self,
        *,
        company_id: int,
        user_id: int,
        start_date: date,
        end_date: date,
    ) -> Sequence[AttendanceDay]:
        raise NotImplementedError
