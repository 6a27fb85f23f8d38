from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from decimal import Decimal
from typing import Optional

from ..core import constants as c
from ..core.enums import DeductionReason, DeductionType, WarningLevel


@dataclass(frozen=True)
class DeductionPolicy:
    """Penalty parameters applied for one deduction reason."""

    deduction_type: DeductionType
    financial_amount: Optional[Decimal] = None
    time_minutes: Optional[int] = None
    warning_level: Optional[WarningLevel] = None


@dataclass(frozen=True)
class CompanyLatenessRules:
    """Per-tenant lateness configuration (one row per company)."""

    company_id: int
    work_start_time: time = c.DEFAULT_WORK_START_TIME
    latest_allowed_time: time = c.DEFAULT_LATEST_ALLOWED_TIME
    monthly_allowance_minutes: int = c.DEFAULT_MONTHLY_ALLOWANCE_MINUTES
    allowance_reset_day: int = c.DEFAULT_ALLOWANCE_RESET_DAY
    auto_apply_deductions: bool = True
    timezone: str = c.DEFAULT_TIMEZONE
    violation: DeductionPolicy = field(
        default_factory=lambda: DeductionPolicy(
            deduction_type=DeductionType.TIME,
            financial_amount=c.DEFAULT_FINANCIAL_AMOUNT,
            time_minutes=c.DEFAULT_VIOLATION_TIME_MINUTES,
            warning_level=WarningLevel.FIRST_WARNING,
        )
    )
    allowance_exceeded: DeductionPolicy = field(
        default_factory=lambda: DeductionPolicy(
            deduction_type=DeductionType.TIME,
            financial_amount=c.DEFAULT_FINANCIAL_AMOUNT,
            time_minutes=c.DEFAULT_ALLOWANCE_EXCEEDED_TIME_MINUTES,
        )
    )
    missing_attendance: DeductionPolicy = field(
        default_factory=lambda: DeductionPolicy(
            deduction_type=DeductionType.TIME,
            financial_amount=c.DEFAULT_FINANCIAL_AMOUNT,
            time_minutes=c.DEFAULT_MISSING_ATTENDANCE_TIME_MINUTES,
            warning_level=WarningLevel.SECOND_WARNING,
        )
    )
    rules_id: Optional[int] = None

    def policy_for(self, reason: DeductionReason) -> DeductionPolicy:
        policies = {
            DeductionReason.DIRECT_VIOLATION: self.violation,
            DeductionReason.ALLOWANCE_EXCEEDED: self.allowance_exceeded,
            DeductionReason.MISSING_ATTENDANCE: self.missing_attendance,
        }
        if reason not in policies:
            raise KeyError(f"No deduction policy configured for {reason.value}")
        return policies[reason]
