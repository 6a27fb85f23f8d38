from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import from_utc_naive, to_utc_naive
from ..core.enums import LatenessCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LatenessRecord, LatenessReportRow
from .repository import LatenessRecordRepository

_COLUMNS = """
    lr.record_id, lr.company_id, lr.user_id, lr.attendance_id, lr.work_date,
    lr.check_in_time, lr.expected_start_time, lr.latest_allowed_time,
    lr.lateness_minutes, lr.lateness_category, lr.allowance_used_minutes,
    lr.allowance_remaining_before, lr.allowance_remaining_after, lr.excess_minutes,
    lr.is_violation, lr.violation_reason, lr.is_processed, lr.processed_at,
    lr.processed_by, lr.deduction_applied
"""


def _to_record(r: dict) -> LatenessRecord:
    return LatenessRecord(
        record_id=int(r["record_id"]),
        company_id=int(r["company_id"]),
        user_id=int(r["user_id"]),
        attendance_id=int(r["attendance_id"]) if r.get("attendance_id") is not None else None,
        work_date=r["work_date"],
        check_in_time=from_utc_naive(r["check_in_time"]),
        expected_start_time=from_utc_naive(r["expected_start_time"]),
        latest_allowed_time=from_utc_naive(r["latest_allowed_time"]),
        lateness_minutes=int(r["lateness_minutes"]),
        category=LatenessCategory(r["lateness_category"]),
        allowance_used_minutes=int(r["allowance_used_minutes"]),
        allowance_remaining_before=int(r["allowance_remaining_before"]),
        allowance_remaining_after=int(r["allowance_remaining_after"]),
        excess_minutes=int(r["excess_minutes"]),
        is_violation=bool(r["is_violation"]),
        violation_reason=r.get("violation_reason"),
        is_processed=bool(r["is_processed"]),
        processed_at=from_utc_naive(r.get("processed_at")),
        processed_by=r.get("processed_by"),
        deduction_applied=bool(r["deduction_applied"]),
    )


class MySQLLatenessRecordRepository(LatenessRecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, record: LatenessRecord) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO lateness_records(
                    company_id, user_id, attendance_id, work_date, check_in_time,
                    expected_start_time, latest_allowed_time, lateness_minutes, lateness_category,
                    allowance_used_minutes, allowance_remaining_before, allowance_remaining_after,
                    excess_minutes, is_violation, violation_reason, is_processed
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(record.company_id),
                    int(record.user_id),
                    record.attendance_id,
                    record.work_date,
                    to_utc_naive(record.check_in_time),
                    to_utc_naive(record.expected_start_time),
                    to_utc_naive(record.latest_allowed_time),
                    int(record.lateness_minutes),
                    record.category.value,
                    int(record.allowance_used_minutes),
                    int(record.allowance_remaining_before),
                    int(record.allowance_remaining_after),
                    int(record.excess_minutes),
                    int(record.is_violation),
                    record.violation_reason,
                    int(record.is_processed),
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, record_id: int) -> Optional[LatenessRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM lateness_records lr WHERE lr.record_id=%s", (int(record_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_by_attendance_id(self, attendance_id: int) -> Optional[LatenessRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM lateness_records lr WHERE lr.attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def mark_processed(self, *, record_id: int, processed_at: datetime, processed_by: str, deduction_applied: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE lateness_records
                SET is_processed=1, processed_at=%s, processed_by=%s, deduction_applied=%s
                WHERE record_id=%s
                """,
                (to_utc_naive(processed_at), processed_by, int(bool(deduction_applied)), int(record_id)),
            )
            return cur.rowcount > 0

    def list_for_user_between(self, *, company_id: int, user_id: int, start_date: date, end_date: date) -> Sequence[LatenessRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM lateness_records lr
                WHERE lr.company_id=%s AND lr.user_id=%s AND lr.work_date BETWEEN %s AND %s
                ORDER BY lr.work_date DESC, lr.check_in_time DESC
                """,
                (int(company_id), int(user_id), start_date, end_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_daily_rows(self, *, company_id: int, work_date: date) -> Sequence[LatenessReportRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}, u.full_name, u.employee_number, d.dept_name
                FROM lateness_records lr
                JOIN users u ON u.user_id = lr.user_id
                LEFT JOIN departments d ON d.dept_id = u.dept_id
                WHERE lr.company_id=%s AND lr.work_date=%s
                ORDER BY lr.check_in_time ASC
                """,
                (int(company_id), work_date),
            )
            return [
                LatenessReportRow(
                    record=_to_record(r),
                    full_name=r["full_name"],
                    employee_number=r.get("employee_number"),
                    dept_name=r.get("dept_name"),
                )
                for r in fetchall(cur)
            ]
