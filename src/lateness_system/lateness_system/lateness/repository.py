from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import LatenessRecord, LatenessReportRow


class LatenessRecordRepository(Protocol):
    def create(self, record: LatenessRecord) -> int:
        raise NotImplementedError

    def get_by_id(self, record_id: int) -> Optional[LatenessRecord]:
        raise NotImplementedError

    def get_by_attendance_id(self, attendance_id: int) -> Optional[LatenessRecord]:
        raise NotImplementedError

    def mark_processed(
        self,
        *,
        record_id: int,
        processed_at: datetime,
        processed_by: str,
        deduction_applied: bool,
    ) -> bool:
        raise NotImplementedError

    def list_for_user_between(
        self,
        *,
        company_id: int,
        user_id: int,
        start_date: date,
        end_date: date,
    ) -> Sequence[LatenessRecord]:
        """Records in [start_date, end_date], newest work date first."""

        raise NotImplementedError

    def get_daily_rows(self, *, company_id: int, work_date: date) -> Sequence[LatenessReportRow]:
        """Records of one work date joined with employee data, earliest check-in first."""

        raise NotImplementedError
