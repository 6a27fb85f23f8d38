from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import DeductionReason, DeductionType, WarningLevel


@dataclass(frozen=True)
class LatenessDeduction:
    """Penalty issued automatically (append-only, never needs approval)."""

    company_id: int
    user_id: int
    lateness_record_id: Optional[int]
    deduction_type: DeductionType
    deduction_reason: DeductionReason
    violation_date: date
    violation_description: str
    lateness_minutes: Optional[int]
    financial_amount: Optional[Decimal]
    time_deduction_minutes: Optional[int]
    time_deduction_hours: Optional[Decimal]
    warning_level: Optional[WarningLevel]
    warning_message: str
    is_applied_to_payroll: bool = False
    requires_approval: bool = False
    created_at: Optional[datetime] = None
    deduction_id: Optional[int] = None
