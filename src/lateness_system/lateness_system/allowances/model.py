from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class MonthlyAllowance:
    """Grace-minute balance of one employee for one calendar month.

    remaining_minutes == total_allowance_minutes - used_minutes, never negative.
    """

    company_id: int
    user_id: int
    year: int
    month: int
    total_allowance_minutes: int
    used_minutes: int
    remaining_minutes: int
    reset_date: date
    is_active: bool = True
    allowance_id: Optional[int] = None


@dataclass(frozen=True)
class ResetResult:
    deactivated: int
    created: int
