from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import MonthlyAllowance
from .repository import AllowanceRepository

_SELECT = """
    SELECT allowance_id, company_id, user_id, year, month, total_allowance_minutes,
           used_minutes, remaining_minutes, reset_date, is_active
    FROM lateness_allowances
"""


def _to_allowance(r: dict) -> MonthlyAllowance:
    return MonthlyAllowance(
        allowance_id=int(r["allowance_id"]),
        company_id=int(r["company_id"]),
        user_id=int(r["user_id"]),
        year=int(r["year"]),
        month=int(r["month"]),
        total_allowance_minutes=int(r["total_allowance_minutes"]),
        used_minutes=int(r["used_minutes"]),
        remaining_minutes=int(r["remaining_minutes"]),
        reset_date=r["reset_date"],
        is_active=bool(r["is_active"]),
    )


class MySQLAllowanceRepository(AllowanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, allowance_id: int) -> Optional[MonthlyAllowance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE allowance_id=%s", (int(allowance_id),))
            r = fetchone(cur)
            return _to_allowance(r) if r else None

    def get_for_month(self, *, user_id: int, year: int, month: int, for_update: bool = False) -> Optional[MonthlyAllowance]:
        sql = _SELECT + " WHERE user_id=%s AND year=%s AND month=%s"
        if for_update:
            sql += " FOR UPDATE"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, (int(user_id), int(year), int(month)))
            r = fetchone(cur)
            return _to_allowance(r) if r else None

    def insert_if_absent(self, allowance: MonthlyAllowance) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO lateness_allowances(
                    company_id, user_id, year, month, total_allowance_minutes,
                    used_minutes, remaining_minutes, reset_date, is_active
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE allowance_id=allowance_id
                """,
                (
                    int(allowance.company_id),
                    int(allowance.user_id),
                    int(allowance.year),
                    int(allowance.month),
                    int(allowance.total_allowance_minutes),
                    int(allowance.used_minutes),
                    int(allowance.remaining_minutes),
                    allowance.reset_date,
                    int(allowance.is_active),
                ),
            )
            # MySQL reports 1 for an insert and 0 for an unchanged duplicate.
            return cur.rowcount == 1

    def consume(self, *, allowance_id: int, minutes: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE lateness_allowances
                SET used_minutes = used_minutes + %s, remaining_minutes = remaining_minutes - %s
                WHERE allowance_id=%s AND remaining_minutes >= %s
                """,
                (int(minutes), int(minutes), int(allowance_id), int(minutes)),
            )
            return cur.rowcount > 0

    def has_later(self, *, user_id: int, year: int, month: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT 1 AS found FROM lateness_allowances
                WHERE user_id=%s AND (year > %s OR (year = %s AND month > %s))
                LIMIT 1
                """,
                (int(user_id), int(year), int(year), int(month)),
            )
            return fetchone(cur) is not None

    def deactivate_before(
        self,
        *,
        year: int,
        month: int,
        company_id: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> int:
        sql = """
            UPDATE lateness_allowances
            SET is_active=0
            WHERE is_active=1 AND (year < %s OR (year = %s AND month < %s))
        """
        params: list = [int(year), int(year), int(month)]
        if company_id is not None:
            sql += " AND company_id=%s"
            params.append(int(company_id))
        if user_id is not None:
            sql += " AND user_id=%s"
            params.append(int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return int(cur.rowcount)
