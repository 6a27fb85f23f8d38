from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import from_utc_naive, to_utc_naive
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import MonthlySummary
from .repository import MonthlySummaryRepository

_VALUE_COLUMNS = (
    "total_allowance_minutes",
    "used_allowance_minutes",
    "remaining_allowance_minutes",
    "total_late_days",
    "total_lateness_minutes",
    "grace_period_days",
    "violation_days",
    "total_financial_deductions",
    "total_time_deductions",
    "total_warnings",
    "total_work_days",
    "present_days",
    "absent_days",
    "report_generated",
    "report_generated_at",
)


class MySQLMonthlySummaryRepository(MonthlySummaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(self, summary: MonthlySummary) -> MonthlySummary:
        values = [
            int(summary.total_allowance_minutes),
            int(summary.used_allowance_minutes),
            int(summary.remaining_allowance_minutes),
            int(summary.total_late_days),
            int(summary.total_lateness_minutes),
            int(summary.grace_period_days),
            int(summary.violation_days),
            summary.total_financial_deductions,
            int(summary.total_time_deductions),
            int(summary.total_warnings),
            int(summary.total_work_days),
            int(summary.present_days),
            int(summary.absent_days),
            int(summary.report_generated),
            to_utc_naive(summary.report_generated_at) if summary.report_generated_at else None,
        ]
        columns = ", ".join(_VALUE_COLUMNS)
        updates = ", ".join(f"{col}=VALUES({col})" for col in _VALUE_COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO lateness_monthly_summaries(company_id, user_id, year, month, {columns})
                VALUES({", ".join(["%s"] * (4 + len(values)))})
                ON DUPLICATE KEY UPDATE {updates}
                """,
                (int(summary.company_id), int(summary.user_id), int(summary.year), int(summary.month), *values),
            )
        return self.get_for_month(user_id=summary.user_id, year=summary.year, month=summary.month)

    def get_for_month(self, *, user_id: int, year: int, month: int) -> Optional[MonthlySummary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT * FROM lateness_monthly_summaries WHERE user_id=%s AND year=%s AND month=%s",
                (int(user_id), int(year), int(month)),
            )
            r = fetchone(cur)
            if not r:
                return None
            return MonthlySummary(
                summary_id=int(r["summary_id"]),
                company_id=int(r["company_id"]),
                user_id=int(r["user_id"]),
                year=int(r["year"]),
                month=int(r["month"]),
                total_allowance_minutes=int(r["total_allowance_minutes"]),
                used_allowance_minutes=int(r["used_allowance_minutes"]),
                remaining_allowance_minutes=int(r["remaining_allowance_minutes"]),
                total_late_days=int(r["total_late_days"]),
                total_lateness_minutes=int(r["total_lateness_minutes"]),
                grace_period_days=int(r["grace_period_days"]),
                violation_days=int(r["violation_days"]),
                total_financial_deductions=Decimal(str(r["total_financial_deductions"])),
                total_time_deductions=int(r["total_time_deductions"]),
                total_warnings=int(r["total_warnings"]),
                total_work_days=int(r["total_work_days"]),
                present_days=int(r["present_days"]),
                absent_days=int(r["absent_days"]),
                report_generated=bool(r["report_generated"]),
                report_generated_at=from_utc_naive(r.get("report_generated_at")),
            )
