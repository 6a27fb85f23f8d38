from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from ..core.enums import DeductionType, WarningLevel
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import CompanyLatenessRules, DeductionPolicy
from .repository import RulesRepository

_POLICY_PREFIXES = ("violation", "allowance_exceeded", "missing_attendance")


def _policy_from_row(r: dict, prefix: str) -> DeductionPolicy:
    amount = r.get(f"{prefix}_financial_amount")
    minutes = r.get(f"{prefix}_time_minutes")
    level = r.get(f"{prefix}_warning_level")
    return DeductionPolicy(
        deduction_type=DeductionType(r[f"{prefix}_deduction_type"]),
        financial_amount=Decimal(str(amount)) if amount is not None else None,
        time_minutes=int(minutes) if minutes is not None else None,
        warning_level=WarningLevel(level) if level else None,
    )


def _policy_params(policy: DeductionPolicy) -> tuple[Any, ...]:
    return (
        policy.deduction_type.value,
        policy.financial_amount,
        policy.time_minutes,
        policy.warning_level.value if policy.warning_level else None,
    )


class MySQLRulesRepository(RulesRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_company(self, company_id: int) -> Optional[CompanyLatenessRules]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT * FROM lateness_rules WHERE company_id=%s", (int(company_id),))
            r = fetchone(cur)
            if not r:
                return None
            return CompanyLatenessRules(
                rules_id=int(r["rules_id"]),
                company_id=int(r["company_id"]),
                work_start_time=normalize_mysql_time(r["work_start_time"]),
                latest_allowed_time=normalize_mysql_time(r["latest_allowed_time"]),
                monthly_allowance_minutes=int(r["monthly_allowance_minutes"]),
                allowance_reset_day=int(r["allowance_reset_day"]),
                auto_apply_deductions=bool(r["auto_apply_deductions"]),
                timezone=str(r["timezone"]),
                violation=_policy_from_row(r, "violation"),
                allowance_exceeded=_policy_from_row(r, "allowance_exceeded"),
                missing_attendance=_policy_from_row(r, "missing_attendance"),
            )

    def create_if_missing(self, rules: CompanyLatenessRules) -> CompanyLatenessRules:
        policy_cols = ", ".join(
            f"{p}_deduction_type, {p}_financial_amount, {p}_time_minutes, {p}_warning_level" for p in _POLICY_PREFIXES
        )
        params = (
            int(rules.company_id),
            rules.work_start_time,
            rules.latest_allowed_time,
            int(rules.monthly_allowance_minutes),
            int(rules.allowance_reset_day),
            int(bool(rules.auto_apply_deductions)),
            rules.timezone,
            *_policy_params(rules.violation),
            *_policy_params(rules.allowance_exceeded),
            *_policy_params(rules.missing_attendance),
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO lateness_rules(
                    company_id, work_start_time, latest_allowed_time, monthly_allowance_minutes,
                    allowance_reset_day, auto_apply_deductions, timezone, {policy_cols}
                )
                VALUES({", ".join(["%s"] * len(params))})
                ON DUPLICATE KEY UPDATE rules_id=rules_id
                """,
                params,
            )
        return self.get_for_company(rules.company_id)
