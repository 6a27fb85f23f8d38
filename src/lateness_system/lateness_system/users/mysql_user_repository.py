from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import UserRepository

_SELECT = """
    SELECT user_id, company_id, full_name, employee_number, dept_id, is_active
    FROM users
"""


def _to_employee(row: dict) -> Employee:
    return Employee(
        user_id=int(row["user_id"]),
        company_id=int(row["company_id"]),
        full_name=row["full_name"],
        employee_number=row.get("employee_number"),
        dept_id=row.get("dept_id"),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_active(self, *, company_id: Optional[int] = None, with_employee_number: bool = False) -> Sequence[Employee]:
        sql = _SELECT + " WHERE is_active=1"
        params: list = []
        if company_id is not None:
            sql += " AND company_id=%s"
            params.append(int(company_id))
        if with_employee_number:
            sql += " AND employee_number IS NOT NULL"
        sql += " ORDER BY company_id, user_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_employee(r) for r in fetchall(cur)]
