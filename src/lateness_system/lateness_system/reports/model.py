from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..deductions.model import LatenessDeduction
from ..lateness.model import LatenessRecord, LatenessReportRow


@dataclass(frozen=True)
class EmployeeLatenessSummary:
    """Counts and totals of one employee over a date range."""

    user_id: int
    start_date: date
    end_date: date
    total_late_days: int
    total_lateness_minutes: int
    on_time_days: int
    grace_period_days: int
    violation_days: int
    total_allowance_used: int
    total_excess_minutes: int
    total_financial_deductions: Decimal
    total_time_deductions: int
    total_warnings: int
    records: tuple[LatenessRecord, ...] = ()
    deductions: tuple[LatenessDeduction, ...] = ()


@dataclass(frozen=True)
class MonthlySummary:
    """Persisted monthly roll-up, fully derived and safe to recompute."""

    company_id: int
    user_id: int
    year: int
    month: int
    total_allowance_minutes: int
    used_allowance_minutes: int
    remaining_allowance_minutes: int
    total_late_days: int
    total_lateness_minutes: int
    grace_period_days: int
    violation_days: int
    total_financial_deductions: Decimal
    total_time_deductions: int
    total_warnings: int
    total_work_days: int
    present_days: int
    absent_days: int
    report_generated: bool = True
    report_generated_at: Optional[datetime] = None
    summary_id: Optional[int] = None


@dataclass(frozen=True)
class DailyReport:
    """Live snapshot of one company's check-ins on one day (not persisted)."""

    report_date: date
    total_employees: int
    on_time: int
    late_within_grace: int
    violations: int
    total_lateness_minutes: int
    total_allowance_used: int
    by_category: dict[str, int] = field(default_factory=dict)
    rows: tuple[LatenessReportRow, ...] = ()
