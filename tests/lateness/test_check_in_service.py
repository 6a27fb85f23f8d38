from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from src.lateness_system.lateness_system.allowances.model import MonthlyAllowance
from src.lateness_system.lateness_system.core.enums import DeductionReason, LatenessCategory
from src.lateness_system.lateness_system.core.exceptions import ValidationError
from src.lateness_system.lateness_system.rules.model import CompanyLatenessRules
from tests.fakes import build_stack

COMPANY = 1
USER = 7
WORK_DATE = date(2026, 3, 10)


def at(hour: int, minute: int) -> datetime:
    return datetime(2026, 3, 10, hour, minute, tzinfo=timezone.utc)


def seed_allowance(stack, remaining: int) -> None:
    stack.allowances_repo.add(
        MonthlyAllowance(
            company_id=COMPANY,
            user_id=USER,
            year=2026,
            month=3,
            total_allowance_minutes=60,
            used_minutes=60 - remaining,
            remaining_minutes=remaining,
            reset_date=date(2026, 3, 5),
        )
    )


def test_on_time_check_in_creates_processed_record_without_deduction():
    stack = build_stack(CompanyLatenessRules(company_id=COMPANY))

    record = stack.lateness_service.process_attendance_check_in(11, COMPANY, USER, at(9, 55), WORK_DATE)

    assert record.category == LatenessCategory.ON_TIME
    assert record.attendance_id == 11
    assert record.is_processed is True
    assert record.processed_by == "SYSTEM"
    assert record.deduction_applied is False
    assert stack.deductions_repo.all() == []


def test_first_check_in_of_month_creates_allowance_and_consumes_it():
    stack = build_stack(CompanyLatenessRules(company_id=COMPANY))

    record = stack.lateness_service.process_attendance_check_in(1, COMPANY, USER, at(10, 5), WORK_DATE)

    assert record.category == LatenessCategory.ALLOWANCE_USED
    assert record.allowance_remaining_before == 60
    assert record.allowance_remaining_after == 55
    allowance = stack.allowances_repo.get_for_month(user_id=USER, year=2026, month=3)
    assert allowance.used_minutes == 5
    assert allowance.remaining_minutes == 55
    assert stack.deductions_repo.all() == []


def test_direct_violation_leaves_allowance_untouched_and_issues_one_deduction():
    stack = build_stack(CompanyLatenessRules(company_id=COMPANY))

    record = stack.lateness_service.process_attendance_check_in(1, COMPANY, USER, at(10, 15), WORK_DATE)

    assert record.category == LatenessCategory.DIRECT_VIOLATION
    assert record.is_violation is True
    assert record.excess_minutes == 15
    assert record.deduction_applied is True
    assert stack.allowances_repo.get_for_month(user_id=USER, year=2026, month=3).remaining_minutes == 60

    [deduction] = stack.deductions_repo.all()
    assert deduction.deduction_reason == DeductionReason.DIRECT_VIOLATION
    assert deduction.lateness_minutes == 15
    assert deduction.lateness_record_id == record.record_id


def test_partial_allowance_charges_only_the_excess():
    stack = build_stack(CompanyLatenessRules(company_id=COMPANY))
    seed_allowance(stack, remaining=5)

    record = stack.lateness_service.process_attendance_check_in(1, COMPANY, USER, at(10, 10), WORK_DATE)

    assert record.allowance_used_minutes == 5
    assert record.excess_minutes == 5
    assert stack.allowances_repo.get_for_month(user_id=USER, year=2026, month=3).remaining_minutes == 0

    [deduction] = stack.deductions_repo.all()
    assert deduction.deduction_reason == DeductionReason.ALLOWANCE_EXCEEDED
    assert deduction.lateness_minutes == 5


def test_exhausted_allowance_is_grace_period_with_excess_deduction():
    stack = build_stack(CompanyLatenessRules(company_id=COMPANY))
    seed_allowance(stack, remaining=0)

    record = stack.lateness_service.process_attendance_check_in(1, COMPANY, USER, at(10, 3), WORK_DATE)

    assert record.category == LatenessCategory.GRACE_PERIOD
    [deduction] = stack.deductions_repo.all()
    assert deduction.deduction_reason == DeductionReason.ALLOWANCE_EXCEEDED
    assert deduction.lateness_minutes == 3


def test_repeated_check_ins_drain_the_allowance_without_going_negative():
    stack = build_stack(CompanyLatenessRules(company_id=COMPANY, monthly_allowance_minutes=12))

    for day in range(2, 6):
        stack.lateness_service.process_attendance_check_in(
            day, COMPANY, USER, datetime(2026, 3, day, 10, 5, tzinfo=timezone.utc), date(2026, 3, day)
        )

    allowance = stack.allowances_repo.get_for_month(user_id=USER, year=2026, month=3)
    assert allowance.remaining_minutes == 0
    assert allowance.used_minutes == 12
    assert [r.allowance_used_minutes for r in stack.records_repo.all()] == [5, 5, 2, 0]


def test_expected_start_follows_company_timezone():
    rules = CompanyLatenessRules(company_id=COMPANY, timezone="Asia/Riyadh")
    stack = build_stack(rules)

    # 07:05 UTC is 10:05 in Riyadh
    record = stack.lateness_service.process_attendance_check_in(
        1, COMPANY, USER, datetime(2026, 3, 10, 7, 5, tzinfo=timezone.utc), WORK_DATE
    )

    assert record.lateness_minutes == 5
    assert record.expected_start_time == datetime(2026, 3, 10, 7, 0, tzinfo=timezone.utc)


def test_auto_apply_disabled_leaves_record_unprocessed():
    stack = build_stack(CompanyLatenessRules(company_id=COMPANY, auto_apply_deductions=False))

    record = stack.lateness_service.process_attendance_check_in(1, COMPANY, USER, at(10, 20), WORK_DATE)

    assert record.is_processed is False
    assert stack.deductions_repo.all() == []


def test_rules_are_created_lazily_with_defaults():
    stack = build_stack()

    record = stack.lateness_service.process_attendance_check_in(1, COMPANY, USER, at(10, 5), WORK_DATE)

    assert stack.rules_repo.created == 1
    assert record.allowance_remaining_before == 60


def test_deduction_failure_propagates_and_record_stays_unprocessed():
    stack = build_stack(CompanyLatenessRules(company_id=COMPANY))
    stack.deductions_repo.fail_on_create = True

    with pytest.raises(RuntimeError):
        stack.lateness_service.process_attendance_check_in(1, COMPANY, USER, at(10, 30), WORK_DATE)

    [record] = stack.records_repo.all()
    assert record.is_processed is False


def test_check_in_runs_inside_a_transaction():
    stack = build_stack(CompanyLatenessRules(company_id=COMPANY))

    stack.lateness_service.process_attendance_check_in(1, COMPANY, USER, at(10, 5), WORK_DATE)

    assert stack.uow.blocks >= 1


def test_naive_check_in_time_is_rejected_before_any_write():
    stack = build_stack(CompanyLatenessRules(company_id=COMPANY))

    with pytest.raises(ValidationError):
        stack.lateness_service.process_attendance_check_in(1, COMPANY, USER, datetime(2026, 3, 10, 10, 5), WORK_DATE)

    assert stack.records_repo.all() == []
    assert stack.allowances_repo.all() == []


def test_same_attendance_row_is_evaluated_once():
    stack = build_stack(CompanyLatenessRules(company_id=COMPANY))

    first = stack.lateness_service.process_attendance_check_in(4, COMPANY, USER, at(10, 5), WORK_DATE)
    second = stack.lateness_service.process_attendance_check_in(4, COMPANY, USER, at(10, 5), WORK_DATE)

    assert second.record_id == first.record_id
    assert len(stack.records_repo.all()) == 1
    allowance = stack.allowances_repo.get_for_month(user_id=USER, year=2026, month=3)
    assert allowance.used_minutes == 5


def test_check_ins_without_attendance_row_are_not_deduplicated():
    stack = build_stack(CompanyLatenessRules(company_id=COMPANY))

    stack.lateness_service.process_attendance_check_in(None, COMPANY, USER, at(10, 5), WORK_DATE)
    stack.lateness_service.process_attendance_check_in(None, COMPANY, USER, at(10, 5), WORK_DATE)

    assert len(stack.records_repo.all()) == 2
