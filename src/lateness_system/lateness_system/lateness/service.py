from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ..allowances.service import AllowanceLedger
from ..common.datetime_utils import at_local_time
from ..common.validators import require_aware_datetime, require_date
from ..database.unit_of_work import UnitOfWork
from ..deductions.service import DeductionIssuer
from ..logging_config import get_logger
from ..rules.service import RulesService
from .engine import classify
from .factory import LatenessStrategyFactory
from .model import LatenessRecord
from .repository import LatenessRecordRepository

logger = get_logger("lateness")


class LatenessService:
    """Entry point called by the attendance check-in handler."""

    def __init__(
        self,
        records: LatenessRecordRepository,
        rules: RulesService,
        ledger: AllowanceLedger,
        issuer: DeductionIssuer,
        uow: UnitOfWork,
        *,
        strategy_factory: Optional[LatenessStrategyFactory] = None,
    ):
        self._records = records
        self._rules = rules
        self._ledger = ledger
        self._issuer = issuer
        self._uow = uow
        self._factory = strategy_factory or LatenessStrategyFactory()

    def process_attendance_check_in(
        self,
        attendance_id: Optional[int],
        company_id: int,
        user_id: int,
        check_in_time: datetime,
        work_date: date,
    ) -> LatenessRecord:
        """Classify a check-in, spend allowance and issue deductions in one transaction.

        Any failure rolls the whole check-in back, so the caller can simply retry.
        """
        check_in_time = require_aware_datetime(check_in_time, "check_in_time")
        work_date = require_date(work_date, "date")
        logger.info("Processing check-in for user %s at %s", user_id, check_in_time.isoformat())

        try:
            with self._uow.atomic():
                if attendance_id is not None:
                    existing = self._records.get_by_attendance_id(attendance_id)
                    if existing:
                        logger.info("Attendance %s already evaluated as record %s", attendance_id, existing.record_id)
                        return existing

                rules = self._rules.get_company_rules(company_id)
                allowance = self._ledger.get_or_create_monthly_allowance(company_id, user_id, work_date)

                expected_start = at_local_time(work_date, rules.work_start_time, rules.timezone)
                latest_allowed = at_local_time(work_date, rules.latest_allowed_time, rules.timezone)
                result = classify(
                    check_in_time,
                    expected_start,
                    latest_allowed,
                    allowance.remaining_minutes,
                    factory=self._factory,
                )
                logger.info(
                    "User %s classified %s (late=%s used=%s excess=%s)",
                    user_id, result.category.value, result.lateness_minutes,
                    result.allowance_used, result.excess_minutes,
                )

                record = LatenessRecord(
                    company_id=int(company_id),
                    user_id=int(user_id),
                    attendance_id=attendance_id,
                    work_date=work_date,
                    check_in_time=check_in_time,
                    expected_start_time=expected_start,
                    latest_allowed_time=latest_allowed,
                    lateness_minutes=result.lateness_minutes,
                    category=result.category,
                    allowance_used_minutes=result.allowance_used,
                    allowance_remaining_before=allowance.remaining_minutes,
                    allowance_remaining_after=allowance.remaining_minutes - result.allowance_used,
                    excess_minutes=result.excess_minutes,
                    is_violation=result.is_violation,
                    violation_reason=result.violation_reason,
                )
                record = replace(record, record_id=self._records.create(record))

                if result.allowance_used > 0:
                    self._ledger.consume(allowance.allowance_id, result.allowance_used)

                if rules.auto_apply_deductions:
                    self._issuer.apply_automatic_deductions(record, rules)

                return self._records.get_by_id(record.record_id) or record
        except Exception:
            logger.exception("Failed to process check-in for user %s (attendance %s)", user_id, attendance_id)
            raise
