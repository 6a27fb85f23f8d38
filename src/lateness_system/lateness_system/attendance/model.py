from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class AttendanceDay:
    """Read-model of a raw attendance row (written by the check-in handler)."""

    attendance_id: int
    company_id: int
    user_id: int
    work_date: date
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime] = None

    @property
    def is_present(self) -> bool:
        return self.check_in_time is not None
