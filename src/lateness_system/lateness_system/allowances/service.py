from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import clamp_day, now_utc, today_in
from ..core.exceptions import AllowanceConflictError
from ..database.unit_of_work import UnitOfWork
from ..logging_config import get_logger
from ..rules.model import CompanyLatenessRules
from ..rules.service import RulesService
from ..users.model import Employee
from ..users.repository import UserRepository
from .model import MonthlyAllowance, ResetResult
from .repository import AllowanceRepository

logger = get_logger("allowances")


def _fresh_allowance(rules: CompanyLatenessRules, *, user_id: int, year: int, month: int, is_active: bool = True) -> MonthlyAllowance:
    return MonthlyAllowance(
        company_id=rules.company_id,
        user_id=int(user_id),
        year=year,
        month=month,
        total_allowance_minutes=rules.monthly_allowance_minutes,
        used_minutes=0,
        remaining_minutes=rules.monthly_allowance_minutes,
        reset_date=clamp_day(year, month, rules.allowance_reset_day),
        is_active=is_active,
    )


class AllowanceLedger:
    """Owns every read and write of monthly allowance balances."""

    def __init__(
        self,
        allowances: AllowanceRepository,
        rules: RulesService,
        users: UserRepository,
        uow: UnitOfWork,
        *,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._allowances = allowances
        self._rules = rules
        self._users = users
        self._uow = uow
        self._clock = clock

    def get_or_create_monthly_allowance(self, company_id: int, user_id: int, on_date: date) -> MonthlyAllowance:
        """Allowance for the month of on_date, created with a full balance when absent.

        The returned row is locked for the rest of the caller's transaction.
        The locking read runs only once the row exists, so concurrent first
        check-ins never hold gap locks on a missing key.
        """
        year, month = on_date.year, on_date.month
        with self._uow.atomic():
            if self._allowances.get_for_month(user_id=user_id, year=year, month=month) is None:
                rules = self._rules.get_company_rules(company_id)
                is_active = not self._allowances.has_later(user_id=user_id, year=year, month=month)
                fresh = _fresh_allowance(rules, user_id=user_id, year=year, month=month, is_active=is_active)
                if self._allowances.insert_if_absent(fresh):
                    logger.info(
                        "Created %s/%s allowance for user %s: %s minutes",
                        month, year, user_id, rules.monthly_allowance_minutes,
                    )
                    if is_active:
                        self._allowances.deactivate_before(year=year, month=month, user_id=user_id)

            return self._allowances.get_for_month(user_id=user_id, year=year, month=month, for_update=True)

    def consume(self, allowance_id: int, minutes: int) -> Optional[MonthlyAllowance]:
        """Move minutes from remaining to used. No-op for minutes <= 0."""
        if minutes <= 0:
            return self._allowances.get_by_id(allowance_id)

        with self._uow.atomic():
            if not self._allowances.consume(allowance_id=allowance_id, minutes=minutes):
                raise AllowanceConflictError(f"Allowance {allowance_id} cannot cover {minutes} minutes")
            updated = self._allowances.get_by_id(allowance_id)

        logger.info(
            "Allowance %s: %s minutes used, %s remaining",
            allowance_id, minutes, updated.remaining_minutes if updated else "?",
        )
        return updated

    def get_current_allowance(self, company_id: int, user_id: int) -> MonthlyAllowance:
        rules = self._rules.get_company_rules(company_id)
        return self.get_or_create_monthly_allowance(company_id, user_id, today_in(rules.timezone, now=self._clock()))

    def reset_monthly_allowances(self, company_id: Optional[int] = None, *, today: Optional[date] = None) -> ResetResult:
        """Deactivate earlier months and give every active employee a current-month allowance.

        Each company is reset for the month it is in by its own timezone unless
        today is given. Safe to re-run within a month: the second run changes nothing.
        """
        try:
            logger.info("Starting allowance reset (company=%s, today=%s)", company_id or "all", today or "per company")
            deactivated = 0
            created = 0
            with self._uow.atomic():
                employees_by_company: dict[int, list[Employee]] = {}
                for employee in self._users.list_active(company_id=company_id):
                    employees_by_company.setdefault(employee.company_id, []).append(employee)
                if company_id is not None:
                    employees_by_company.setdefault(int(company_id), [])

                for cid, employees in sorted(employees_by_company.items()):
                    rules = self._rules.get_company_rules(cid)
                    current = today or today_in(rules.timezone, now=self._clock())
                    year, month = current.year, current.month

                    deactivated += self._allowances.deactivate_before(year=year, month=month, company_id=cid)
                    for employee in employees:
                        if self._allowances.get_for_month(user_id=employee.user_id, year=year, month=month):
                            continue
                        fresh = _fresh_allowance(rules, user_id=employee.user_id, year=year, month=month)
                        if self._allowances.insert_if_absent(fresh):
                            created += 1
                    logger.info("Company %s reset to %s/%s", cid, month, year)

            logger.info("Allowance reset done: deactivated=%s created=%s", deactivated, created)
            return ResetResult(deactivated=deactivated, created=created)
        except Exception:
            logger.exception("Failed to reset monthly allowances (company=%s)", company_id)
            raise
