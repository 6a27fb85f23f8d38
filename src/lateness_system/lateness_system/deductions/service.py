from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_utc
from ..core.constants import PROCESSED_BY_SYSTEM
from ..core.enums import DeductionReason
from ..database.unit_of_work import UnitOfWork
from ..lateness.model import LatenessRecord
from ..lateness.repository import LatenessRecordRepository
from ..logging_config import get_logger
from ..rules.model import CompanyLatenessRules
from ..rules.service import RulesService
from ..users.repository import UserRepository
from .messages import generate_warning_message
from .model import LatenessDeduction
from .repository import DeductionRepository

logger = get_logger("deductions")


class DeductionIssuer:
    def __init__(
        self,
        deductions: DeductionRepository,
        records: LatenessRecordRepository,
        rules: RulesService,
        users: UserRepository,
        attendance: AttendanceRepository,
        uow: UnitOfWork,
        *,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._deductions = deductions
        self._records = records
        self._rules = rules
        self._users = users
        self._attendance = attendance
        self._uow = uow
        self._clock = clock

    generate_warning_message = staticmethod(generate_warning_message)

    def create_deduction(
        self,
        *,
        rules: CompanyLatenessRules,
        user_id: int,
        reason: DeductionReason,
        violation_date: date,
        description: str,
        lateness_minutes: Optional[int],
        lateness_record_id: Optional[int] = None,
    ) -> LatenessDeduction:
        policy = rules.policy_for(reason)
        minutes = policy.time_minutes
        deduction = LatenessDeduction(
            company_id=rules.company_id,
            user_id=int(user_id),
            lateness_record_id=lateness_record_id,
            deduction_type=policy.deduction_type,
            deduction_reason=reason,
            violation_date=violation_date,
            violation_description=description,
            lateness_minutes=lateness_minutes,
            financial_amount=policy.financial_amount,
            time_deduction_minutes=minutes,
            time_deduction_hours=(Decimal(minutes) / Decimal(60)).quantize(Decimal("0.01")) if minutes else None,
            warning_level=policy.warning_level,
            warning_message=generate_warning_message(reason, lateness_minutes),
            is_applied_to_payroll=False,
            requires_approval=False,
            created_at=self._clock(),
        )
        deduction_id = self._deductions.create(deduction)
        return replace(deduction, deduction_id=deduction_id)

    def apply_automatic_deductions(self, record: LatenessRecord, rules: CompanyLatenessRules) -> list[LatenessDeduction]:
        """Issue at most one deduction for a record and mark it processed.

        Direct violations are charged on the full lateness; otherwise only the
        excess over the allowance is charged. Nothing happens when the company
        disabled automatic deductions or the record was already processed.
        """
        if not rules.auto_apply_deductions or record.is_processed:
            return []

        try:
            deductions: list[LatenessDeduction] = []
            with self._uow.atomic():
                if record.is_violation:
                    deductions.append(
                        self.create_deduction(
                            rules=rules,
                            user_id=record.user_id,
                            reason=DeductionReason.DIRECT_VIOLATION,
                            violation_date=record.work_date,
                            description=(
                                f"Direct violation: check-in after latest allowed time "
                                f"({record.lateness_minutes} minutes late)"
                            ),
                            lateness_minutes=record.lateness_minutes,
                            lateness_record_id=record.record_id,
                        )
                    )
                    logger.info("Direct violation deduction for user %s: %s minutes", record.user_id, record.lateness_minutes)
                elif record.excess_minutes > 0:
                    deductions.append(
                        self.create_deduction(
                            rules=rules,
                            user_id=record.user_id,
                            reason=DeductionReason.ALLOWANCE_EXCEEDED,
                            violation_date=record.work_date,
                            description=f"Allowance exceeded: {record.excess_minutes} minutes beyond monthly allowance",
                            lateness_minutes=record.excess_minutes,
                            lateness_record_id=record.record_id,
                        )
                    )
                    logger.info("Allowance exceeded deduction for user %s: %s minutes", record.user_id, record.excess_minutes)

                self._records.mark_processed(
                    record_id=record.record_id,
                    processed_at=self._clock(),
                    processed_by=PROCESSED_BY_SYSTEM,
                    deduction_applied=bool(deductions),
                )
            return deductions
        except Exception:
            logger.exception("Failed to apply deductions for lateness record %s", record.record_id)
            raise

    def detect_missing_attendance(self, company_id: int, on_date: date) -> list[LatenessDeduction]:
        """Issue a MISSING_ATTENDANCE deduction for every active numbered employee without attendance.

        Employees already charged for that date are skipped, so re-running is safe.
        """
        try:
            rules = self._rules.get_company_rules(company_id)
            violations: list[LatenessDeduction] = []
            with self._uow.atomic():
                for employee in self._users.list_active(company_id=company_id, with_employee_number=True):
                    if self._attendance.exists_for_user_and_date(company_id=company_id, user_id=employee.user_id, work_date=on_date):
                        continue
                    if self._deductions.exists_for_reason(
                        user_id=employee.user_id,
                        reason=DeductionReason.MISSING_ATTENDANCE,
                        violation_date=on_date,
                    ):
                        continue
                    violations.append(
                        self.create_deduction(
                            rules=rules,
                            user_id=employee.user_id,
                            reason=DeductionReason.MISSING_ATTENDANCE,
                            violation_date=on_date,
                            description="No attendance record found for scheduled work day",
                            lateness_minutes=None,
                        )
                    )

            logger.info("Detected %s missing attendance violations for company %s on %s", len(violations), company_id, on_date)
            return violations
        except Exception:
            logger.exception("Failed to detect missing attendance for company %s on %s", company_id, on_date)
            raise
