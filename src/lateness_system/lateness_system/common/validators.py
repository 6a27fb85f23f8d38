from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional
from zoneinfo import ZoneInfoNotFoundError

from ..core.exceptions import ValidationError
from .datetime_utils import parse_hhmm, zone


def require_aware_datetime(value: Optional[datetime], field_name: str) -> datetime:
    if value is None:
        raise ValidationError(f"{field_name} is required")
    if not isinstance(value, datetime):
        raise ValidationError(f"{field_name} must be a datetime")
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValidationError(f"{field_name} must be timezone-aware")
    return value


def require_date(value: Optional[date], field_name: str) -> date:
    if value is None or not isinstance(value, date):
        raise ValidationError(f"{field_name} is required")
    if isinstance(value, datetime):
        return value.date()
    return value


def require_hhmm(value, field_name: str) -> time:
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    try:
        return parse_hhmm(str(value or ""))
    except ValueError:
        raise ValidationError(f"{field_name} must be HH:MM")


def require_timezone(value: str, field_name: str) -> str:
    try:
        zone(value)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"{field_name} is not a known timezone: {value!r}")
    return value


def require_month(year: int, month: int) -> tuple[int, int]:
    if not 1 <= int(month) <= 12:
        raise ValidationError("month must be between 1 and 12")
    if int(year) < 1:
        raise ValidationError("year is invalid")
    return int(year), int(month)


def require_date_range(start: date, end: date) -> tuple[date, date]:
    if end < start:
        raise ValidationError("end date cannot be before start date")
    return start, end
