from __future__ import annotations

from enum import Enum


class LatenessCategory(str, Enum):
    """Classification of a single check-in against company rules."""

    ON_TIME = "ON_TIME"
    ALLOWANCE_USED = "ALLOWANCE_USED"
    GRACE_PERIOD = "GRACE_PERIOD"
    DIRECT_VIOLATION = "DIRECT_VIOLATION"


class DeductionReason(str, Enum):
    """Why a deduction was issued."""

    DIRECT_VIOLATION = "DIRECT_VIOLATION"
    ALLOWANCE_EXCEEDED = "ALLOWANCE_EXCEEDED"
    MISSING_ATTENDANCE = "MISSING_ATTENDANCE"
    MANIPULATION = "MANIPULATION"
    EXCESSIVE_LATENESS = "EXCESSIVE_LATENESS"


class DeductionType(str, Enum):
    FINANCIAL = "FINANCIAL"
    TIME = "TIME"
    FINANCIAL_AND_TIME = "FINANCIAL_AND_TIME"
    WARNING = "WARNING"


class WarningLevel(str, Enum):
    FIRST_WARNING = "FIRST_WARNING"
    SECOND_WARNING = "SECOND_WARNING"
    FINAL_WARNING = "FINAL_WARNING"
