from __future__ import annotations

from typing import Optional, Protocol

from .model import MonthlySummary


class MonthlySummaryRepository(Protocol):
    def upsert(self, summary: MonthlySummary) -> MonthlySummary:
        """Create or replace the row keyed by (user_id, year, month)."""

        raise NotImplementedError

    def get_for_month(self, *, user_id: int, year: int, month: int) -> Optional[MonthlySummary]:
        raise NotImplementedError
