from src.lateness_system.lateness_system.core.enums import DeductionReason
from src.lateness_system.lateness_system.deductions.messages import generate_warning_message


def test_direct_violation_message_mentions_minutes():
    message = generate_warning_message(DeductionReason.DIRECT_VIOLATION, 15)

    assert "15 minutes late" in message
    assert "automatic deduction" in message


def test_allowance_exceeded_message_mentions_excess():
    message = generate_warning_message("ALLOWANCE_EXCEEDED", 5)

    assert "exceeded by 5 minutes" in message


def test_reasons_without_automatic_path_still_have_templates():
    assert generate_warning_message(DeductionReason.MANIPULATION, None) == "Attendance data manipulation detected."
    assert generate_warning_message(DeductionReason.EXCESSIVE_LATENESS, None) == (
        "Excessive lateness violations threshold exceeded."
    )
    assert generate_warning_message(DeductionReason.MISSING_ATTENDANCE, None) == (
        "Missing attendance record for a scheduled work day."
    )


def test_unknown_reason_falls_back_to_generic_message():
    assert generate_warning_message("SOMETHING_ELSE", 3) == "Lateness deduction applied."
    assert generate_warning_message(None) == "Lateness deduction applied."
