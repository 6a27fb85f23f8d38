from __future__ import annotations

import calendar
from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_hhmm(value: str) -> time:
    """Parse HH:MM string into time."""
    return datetime.strptime(value.strip(), "%H:%M").time()


def now_utc() -> datetime:
    """Current time in UTC.

    Note: Wrapped so services can take a clock and tests can pin it.
    """
    return datetime.now(timezone.utc)


def zone(name: str) -> ZoneInfo:
    return ZoneInfo(name)


def at_local_time(work_date: date, clock_time: time, tz_name: str) -> datetime:
    """Wall-clock time on a work date in the tenant's zone (aware)."""
    return datetime.combine(work_date, clock_time, tzinfo=zone(tz_name))


def today_in(tz_name: str, *, now: datetime | None = None) -> date:
    now = now or now_utc()
    return now.astimezone(zone(tz_name)).date()


def whole_minutes_between(start: datetime, end: datetime) -> int:
    """Floored minutes from start to end (negative when end is earlier)."""
    return int((end - start).total_seconds() // 60)


def format_12h(value: datetime | time) -> str:
    return value.strftime("%I:%M %p")


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def clamp_day(year: int, month: int, day: int) -> date:
    """date(year, month, day) with day clamped to the month length."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last_day))


def to_utc_naive(value: datetime) -> datetime:
    """Normalize an aware datetime for a MySQL DATETIME column (stored as UTC)."""
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def from_utc_naive(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    return value.replace(tzinfo=timezone.utc)
