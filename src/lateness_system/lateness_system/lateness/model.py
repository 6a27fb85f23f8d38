from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LatenessCategory


@dataclass(frozen=True)
class Classification:
    """Pure result of classifying one check-in."""

    lateness_minutes: int
    category: LatenessCategory
    is_violation: bool
    allowance_used: int
    excess_minutes: int
    violation_reason: Optional[str] = None


@dataclass(frozen=True)
class LatenessRecord:
    """Snapshot of one check-in evaluated against the company rules.

    Created once per check-in; only the processing fields change afterwards.
    """

    company_id: int
    user_id: int
    attendance_id: Optional[int]
    work_date: date
    check_in_time: datetime
    expected_start_time: datetime
    latest_allowed_time: datetime
    lateness_minutes: int
    category: LatenessCategory
    allowance_used_minutes: int
    allowance_remaining_before: int
    allowance_remaining_after: int
    excess_minutes: int
    is_violation: bool
    violation_reason: Optional[str] = None
    is_processed: bool = False
    processed_at: Optional[datetime] = None
    processed_by: Optional[str] = None
    deduction_applied: bool = False
    record_id: Optional[int] = None


@dataclass(frozen=True)
class LatenessReportRow:
    """Read-model for the daily report (record joined with employee data)."""

    record: LatenessRecord
    full_name: str
    employee_number: Optional[str]
    dept_name: Optional[str]
