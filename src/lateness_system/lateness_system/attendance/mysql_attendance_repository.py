from __future__ import annotations

from datetime import date
from typing import Sequence

from ..common.datetime_utils import from_utc_naive
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceDay
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def exists_for_user_and_date(self, *, company_id: int, user_id: int, work_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id
                FROM attendance_records
                WHERE company_id=%s AND user_id=%s AND work_date=%s
                LIMIT 1
                """,
                (int(company_id), int(user_id), work_date),
            )
            return fetchone(cur) is not None

    def list_for_user_between(self, *, company_id: int, user_id: int, start_date: date, end_date: date) -> Sequence[AttendanceDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, company_id, user_id, work_date, check_in_time, check_out_time
                FROM attendance_records
                WHERE company_id=%s AND user_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date
                """,
                (int(company_id), int(user_id), start_date, end_date),
            )
            return [
                AttendanceDay(
                    attendance_id=int(r["attendance_id"]),
                    company_id=int(r["company_id"]),
                    user_id=int(r["user_id"]),
                    work_date=r["work_date"],
                    check_in_time=from_utc_naive(r.get("check_in_time")),
                    check_out_time=from_utc_naive(r.get("check_out_time")),
                )
                for r in fetchall(cur)
            ]
