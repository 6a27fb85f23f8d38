from __future__ import annotations

from collections import Counter
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Sequence

from ..allowances.repository import AllowanceRepository
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds, now_utc
from ..common.validators import require_date_range, require_month
from ..core.enums import DeductionType, LatenessCategory
from ..database.unit_of_work import UnitOfWork
from ..deductions.model import LatenessDeduction
from ..deductions.repository import DeductionRepository
from ..lateness.model import LatenessRecord
from ..lateness.repository import LatenessRecordRepository
from ..logging_config import get_logger
from .model import DailyReport, EmployeeLatenessSummary, MonthlySummary
from .repository import MonthlySummaryRepository

logger = get_logger("reports")

_WITHIN_GRACE = (LatenessCategory.GRACE_PERIOD, LatenessCategory.ALLOWANCE_USED)


def _count_within_grace(records: Sequence[LatenessRecord]) -> int:
    return sum(1 for r in records if r.category in _WITHIN_GRACE)


def _sum_financial(deductions: Sequence[LatenessDeduction]) -> Decimal:
    total = Decimal("0")
    for d in deductions:
        if d.financial_amount is not None:
            total += Decimal(str(d.financial_amount))
    return total


class ReportAggregator:
    def __init__(
        self,
        records: LatenessRecordRepository,
        deductions: DeductionRepository,
        allowances: AllowanceRepository,
        attendance: AttendanceRepository,
        summaries: MonthlySummaryRepository,
        uow: UnitOfWork,
        *,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._records = records
        self._deductions = deductions
        self._allowances = allowances
        self._attendance = attendance
        self._summaries = summaries
        self._uow = uow
        self._clock = clock

    def get_employee_lateness_summary(self, company_id: int, user_id: int, start_date: date, end_date: date) -> EmployeeLatenessSummary:
        start_date, end_date = require_date_range(start_date, end_date)
        try:
            records = self._records.list_for_user_between(
                company_id=company_id, user_id=user_id, start_date=start_date, end_date=end_date
            )
            deductions = self._deductions.list_for_user_between(
                company_id=company_id, user_id=user_id, start_date=start_date, end_date=end_date
            )
        except Exception:
            logger.exception("Failed to load lateness summary for user %s", user_id)
            raise

        return EmployeeLatenessSummary(
            user_id=int(user_id),
            start_date=start_date,
            end_date=end_date,
            total_late_days=sum(1 for r in records if r.lateness_minutes > 0),
            total_lateness_minutes=sum(r.lateness_minutes for r in records),
            on_time_days=sum(1 for r in records if r.category == LatenessCategory.ON_TIME),
            grace_period_days=_count_within_grace(records),
            violation_days=sum(1 for r in records if r.is_violation),
            total_allowance_used=sum(r.allowance_used_minutes for r in records),
            total_excess_minutes=sum(r.excess_minutes for r in records),
            total_financial_deductions=_sum_financial(deductions),
            total_time_deductions=sum(d.time_deduction_minutes or 0 for d in deductions),
            total_warnings=sum(1 for d in deductions if d.deduction_type == DeductionType.WARNING),
            records=tuple(records),
            deductions=tuple(deductions),
        )

    def generate_monthly_summary(self, company_id: int, user_id: int, year: int, month: int) -> MonthlySummary:
        """Recompute and upsert the (user, year, month) summary from current rows."""
        year, month = require_month(year, month)
        start_date, end_date = month_bounds(year, month)
        try:
            with self._uow.atomic():
                summary = self.get_employee_lateness_summary(company_id, user_id, start_date, end_date)
                allowance = self._allowances.get_for_month(user_id=user_id, year=year, month=month)
                days = self._attendance.list_for_user_between(
                    company_id=company_id, user_id=user_id, start_date=start_date, end_date=end_date
                )
                present = sum(1 for d in days if d.is_present)

                stored = self._summaries.upsert(
                    MonthlySummary(
                        company_id=int(company_id),
                        user_id=int(user_id),
                        year=year,
                        month=month,
                        total_allowance_minutes=allowance.total_allowance_minutes if allowance else 0,
                        used_allowance_minutes=allowance.used_minutes if allowance else 0,
                        remaining_allowance_minutes=allowance.remaining_minutes if allowance else 0,
                        total_late_days=summary.total_late_days,
                        total_lateness_minutes=summary.total_lateness_minutes,
                        grace_period_days=summary.grace_period_days,
                        violation_days=summary.violation_days,
                        total_financial_deductions=summary.total_financial_deductions,
                        total_time_deductions=summary.total_time_deductions,
                        total_warnings=summary.total_warnings,
                        total_work_days=len(days),
                        present_days=present,
                        absent_days=len(days) - present,
                        report_generated=True,
                        report_generated_at=self._clock(),
                    )
                )
            logger.info("Monthly summary %s/%s generated for user %s", month, year, user_id)
            return stored
        except Exception:
            logger.exception("Failed to generate %s/%s summary for user %s", month, year, user_id)
            raise

    def get_daily_report(self, company_id: int, on_date: date) -> DailyReport:
        try:
            rows = self._records.get_daily_rows(company_id=company_id, work_date=on_date)
        except Exception:
            logger.exception("Failed to load daily report for company %s on %s", company_id, on_date)
            raise

        records = [row.record for row in rows]
        counts = Counter(r.category for r in records)
        return DailyReport(
            report_date=on_date,
            total_employees=len(records),
            on_time=counts[LatenessCategory.ON_TIME],
            late_within_grace=_count_within_grace(records),
            violations=sum(1 for r in records if r.is_violation),
            total_lateness_minutes=sum(r.lateness_minutes for r in records),
            total_allowance_used=sum(r.allowance_used_minutes for r in records),
            by_category={category.value: counts[category] for category in LatenessCategory},
            rows=tuple(rows),
        )
