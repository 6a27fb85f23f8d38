from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Sequence

from ..common.datetime_utils import from_utc_naive, to_utc_naive
from ..core.enums import DeductionReason, DeductionType, WarningLevel
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LatenessDeduction
from .repository import DeductionRepository


def _decimal(value) -> Decimal | None:
    return Decimal(str(value)) if value is not None else None


def _to_deduction(r: dict) -> LatenessDeduction:
    return LatenessDeduction(
        deduction_id=int(r["deduction_id"]),
        company_id=int(r["company_id"]),
        user_id=int(r["user_id"]),
        lateness_record_id=int(r["lateness_record_id"]) if r.get("lateness_record_id") is not None else None,
        deduction_type=DeductionType(r["deduction_type"]),
        deduction_reason=DeductionReason(r["deduction_reason"]),
        violation_date=r["violation_date"],
        violation_description=r.get("violation_description") or "",
        lateness_minutes=r.get("lateness_minutes"),
        financial_amount=_decimal(r.get("financial_amount")),
        time_deduction_minutes=r.get("time_deduction_minutes"),
        time_deduction_hours=_decimal(r.get("time_deduction_hours")),
        warning_level=WarningLevel(r["warning_level"]) if r.get("warning_level") else None,
        warning_message=r["warning_message"],
        is_applied_to_payroll=bool(r["is_applied_to_payroll"]),
        requires_approval=bool(r["requires_approval"]),
        created_at=from_utc_naive(r.get("created_at")),
    )


class MySQLDeductionRepository(DeductionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, deduction: LatenessDeduction) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO lateness_deductions(
                    company_id, user_id, lateness_record_id, deduction_type, deduction_reason,
                    violation_date, violation_description, lateness_minutes, financial_amount,
                    time_deduction_minutes, time_deduction_hours, warning_level, warning_message,
                    is_applied_to_payroll, requires_approval, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(deduction.company_id),
                    int(deduction.user_id),
                    deduction.lateness_record_id,
                    deduction.deduction_type.value,
                    deduction.deduction_reason.value,
                    deduction.violation_date,
                    deduction.violation_description,
                    deduction.lateness_minutes,
                    deduction.financial_amount,
                    deduction.time_deduction_minutes,
                    deduction.time_deduction_hours,
                    deduction.warning_level.value if deduction.warning_level else None,
                    deduction.warning_message,
                    int(deduction.is_applied_to_payroll),
                    int(deduction.requires_approval),
                    to_utc_naive(deduction.created_at) if deduction.created_at else None,
                ),
            )
            return int(cur.lastrowid)

    def list_for_user_between(self, *, company_id: int, user_id: int, start_date: date, end_date: date) -> Sequence[LatenessDeduction]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT *
                FROM lateness_deductions
                WHERE company_id=%s AND user_id=%s AND violation_date BETWEEN %s AND %s
                ORDER BY violation_date DESC, deduction_id DESC
                """,
                (int(company_id), int(user_id), start_date, end_date),
            )
            return [_to_deduction(r) for r in fetchall(cur)]

    def exists_for_reason(self, *, user_id: int, reason: DeductionReason, violation_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT deduction_id FROM lateness_deductions
                WHERE user_id=%s AND deduction_reason=%s AND violation_date=%s
                LIMIT 1
                """,
                (int(user_id), reason.value, violation_date),
            )
            return fetchone(cur) is not None
