from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from src.lateness_system.lateness_system.allowances.model import MonthlyAllowance
from src.lateness_system.lateness_system.core.exceptions import AllowanceConflictError
from src.lateness_system.lateness_system.rules.model import CompanyLatenessRules
from src.lateness_system.lateness_system.users.model import Employee
from tests.fakes import build_stack


def employee(user_id: int, company_id: int = 1, *, is_active: bool = True) -> Employee:
    return Employee(
        user_id=user_id,
        company_id=company_id,
        full_name=f"Employee {user_id}",
        employee_number=f"E{user_id:03d}",
        dept_id=10,
        is_active=is_active,
    )


def old_allowance(user_id: int, year: int, month: int, company_id: int = 1) -> MonthlyAllowance:
    return MonthlyAllowance(
        company_id=company_id,
        user_id=user_id,
        year=year,
        month=month,
        total_allowance_minutes=60,
        used_minutes=20,
        remaining_minutes=40,
        reset_date=date(year, month, 5),
    )


def test_allowance_is_created_once_per_month():
    stack = build_stack(CompanyLatenessRules(company_id=1, monthly_allowance_minutes=45, allowance_reset_day=31))
    ledger = stack.allowance_ledger

    first = ledger.get_or_create_monthly_allowance(1, 7, date(2026, 2, 3))
    second = ledger.get_or_create_monthly_allowance(1, 7, date(2026, 2, 27))

    assert first.allowance_id == second.allowance_id
    assert (first.total_allowance_minutes, first.used_minutes, first.remaining_minutes) == (45, 0, 45)
    # reset day clamps to the month length
    assert first.reset_date == date(2026, 2, 28)
    assert len(stack.allowances_repo.all()) == 1


def test_new_month_deactivates_earlier_allowance_of_that_employee():
    stack = build_stack(CompanyLatenessRules(company_id=1))
    stack.allowances_repo.add(old_allowance(7, 2026, 2))
    stack.allowances_repo.add(old_allowance(8, 2026, 2))

    current = stack.allowance_ledger.get_or_create_monthly_allowance(1, 7, date(2026, 3, 1))

    assert current.is_active is True
    active = {(a.user_id, a.month) for a in stack.allowances_repo.all() if a.is_active}
    assert active == {(7, 3), (8, 2)}


def test_back_dated_allowance_is_created_inactive():
    stack = build_stack(CompanyLatenessRules(company_id=1))
    stack.allowances_repo.add(old_allowance(7, 2026, 3))

    back_dated = stack.allowance_ledger.get_or_create_monthly_allowance(1, 7, date(2026, 2, 20))

    assert back_dated.is_active is False
    assert stack.allowances_repo.get_for_month(user_id=7, year=2026, month=3).is_active is True


def test_consume_moves_minutes_from_remaining_to_used():
    stack = build_stack(CompanyLatenessRules(company_id=1))
    allowance = stack.allowance_ledger.get_or_create_monthly_allowance(1, 7, date(2026, 3, 10))

    updated = stack.allowance_ledger.consume(allowance.allowance_id, 15)

    assert updated.used_minutes == 15
    assert updated.remaining_minutes == 45
    assert updated.used_minutes + updated.remaining_minutes == updated.total_allowance_minutes


def test_consume_zero_minutes_is_a_no_op():
    stack = build_stack(CompanyLatenessRules(company_id=1))
    allowance = stack.allowance_ledger.get_or_create_monthly_allowance(1, 7, date(2026, 3, 10))

    assert stack.allowance_ledger.consume(allowance.allowance_id, 0) == allowance


def test_consume_beyond_balance_raises_conflict():
    stack = build_stack(CompanyLatenessRules(company_id=1, monthly_allowance_minutes=10))
    allowance = stack.allowance_ledger.get_or_create_monthly_allowance(1, 7, date(2026, 3, 10))

    with pytest.raises(AllowanceConflictError):
        stack.allowance_ledger.consume(allowance.allowance_id, 11)

    assert stack.allowances_repo.get_by_id(allowance.allowance_id).remaining_minutes == 10


def test_current_allowance_uses_the_clock_month():
    stack = build_stack(CompanyLatenessRules(company_id=1))

    allowance = stack.allowance_ledger.get_current_allowance(1, 7)

    assert (allowance.year, allowance.month) == (2026, 3)


def test_reset_deactivates_old_rows_and_creates_current_month():
    stack = build_stack(
        CompanyLatenessRules(company_id=1),
        CompanyLatenessRules(company_id=2, monthly_allowance_minutes=30),
        employees=[employee(7), employee(8), employee(9, company_id=2), employee(10, is_active=False)],
    )
    stack.allowances_repo.add(old_allowance(7, 2026, 2))
    stack.allowances_repo.add(old_allowance(9, 2025, 12, company_id=2))

    result = stack.allowance_ledger.reset_monthly_allowances(today=date(2026, 3, 5))

    assert (result.deactivated, result.created) == (2, 3)
    current = {a.user_id: a for a in stack.allowances_repo.all() if (a.year, a.month) == (2026, 3)}
    assert set(current) == {7, 8, 9}
    assert current[9].total_allowance_minutes == 30
    assert all(a.is_active == ((a.year, a.month) == (2026, 3)) for a in stack.allowances_repo.all())


def test_reset_twice_in_the_same_month_changes_nothing():
    stack = build_stack(CompanyLatenessRules(company_id=1), employees=[employee(7), employee(8)])
    stack.allowances_repo.add(old_allowance(7, 2026, 2))

    stack.allowance_ledger.reset_monthly_allowances(1, today=date(2026, 3, 5))
    snapshot = stack.allowances_repo.all()
    second = stack.allowance_ledger.reset_monthly_allowances(1, today=date(2026, 3, 20))

    assert (second.deactivated, second.created) == (0, 0)
    assert stack.allowances_repo.all() == snapshot


def test_reset_scoped_to_company_leaves_other_tenants_alone():
    stack = build_stack(
        CompanyLatenessRules(company_id=1),
        CompanyLatenessRules(company_id=2),
        employees=[employee(7), employee(9, company_id=2)],
    )
    stack.allowances_repo.add(old_allowance(9, 2026, 2, company_id=2))

    result = stack.allowance_ledger.reset_monthly_allowances(1, today=date(2026, 3, 5))

    assert (result.deactivated, result.created) == (0, 1)
    assert stack.allowances_repo.get_for_month(user_id=9, year=2026, month=2).is_active is True
    assert stack.allowances_repo.get_for_month(user_id=9, year=2026, month=3) is None


def test_reset_without_date_uses_the_clock():
    stack = build_stack(CompanyLatenessRules(company_id=1), employees=[employee(7)])

    stack.allowance_ledger.reset_monthly_allowances(1)

    assert stack.allowances_repo.get_for_month(user_id=7, year=2026, month=3) is not None


def test_first_allowance_of_month_is_locked_only_after_insert():
    stack = build_stack(CompanyLatenessRules(company_id=1))

    allowance = stack.allowance_ledger.get_or_create_monthly_allowance(1, 7, date(2026, 3, 2))
    again = stack.allowance_ledger.get_or_create_monthly_allowance(1, 7, date(2026, 3, 9))

    assert allowance.allowance_id == again.allowance_id
    assert stack.allowances_repo.missing_row_locks == 0


def test_reset_for_all_companies_follows_each_company_timezone():
    # 01:00 UTC on 1 April is still 31 March, 21:00 in New York
    stack = build_stack(
        CompanyLatenessRules(company_id=1, timezone="America/New_York"),
        CompanyLatenessRules(company_id=2),
        employees=[employee(7), employee(9, company_id=2)],
        now=datetime(2026, 4, 1, 1, 0, tzinfo=timezone.utc),
    )
    stack.allowances_repo.add(old_allowance(7, 2026, 3))
    stack.allowances_repo.add(old_allowance(9, 2026, 3, company_id=2))

    result = stack.allowance_ledger.reset_monthly_allowances()

    assert (result.deactivated, result.created) == (1, 1)
    assert stack.allowances_repo.get_for_month(user_id=7, year=2026, month=3).is_active is True
    assert stack.allowances_repo.get_for_month(user_id=7, year=2026, month=4) is None
    assert stack.allowances_repo.get_for_month(user_id=9, year=2026, month=3).is_active is False
    assert stack.allowances_repo.get_for_month(user_id=9, year=2026, month=4).is_active is True
    assert stack.allowance_ledger.get_current_allowance(1, 7).month == 3
