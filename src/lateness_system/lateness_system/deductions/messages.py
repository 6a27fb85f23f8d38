from __future__ import annotations

from typing import Optional

from ..core.enums import DeductionReason

_FALLBACK = "Lateness deduction applied."

_TEMPLATES = {
    DeductionReason.DIRECT_VIOLATION: (
        "Direct violation: You checked in {minutes} minutes late (after the latest allowed time). "
        "This is an automatic deduction."
    ),
    DeductionReason.ALLOWANCE_EXCEEDED: (
        "Your monthly lateness allowance has been exceeded by {minutes} minutes. "
        "This results in an automatic deduction."
    ),
    DeductionReason.MISSING_ATTENDANCE: "Missing attendance record for a scheduled work day.",
    DeductionReason.MANIPULATION: "Attendance data manipulation detected.",
    DeductionReason.EXCESSIVE_LATENESS: "Excessive lateness violations threshold exceeded.",
}


def generate_warning_message(reason, minutes: Optional[int] = None) -> str:
    """Employee-facing text for a deduction reason; unknown reasons get a generic line."""
    try:
        template = _TEMPLATES[DeductionReason(reason)]
    except ValueError:
        return _FALLBACK
    return template.format(minutes=minutes if minutes is not None else 0)
