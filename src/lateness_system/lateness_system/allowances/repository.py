from __future__ import annotations

from typing import Optional, Protocol

from .model import MonthlyAllowance


class AllowanceRepository(Protocol):
    def get_by_id(self, allowance_id: int) -> Optional[MonthlyAllowance]:
        raise NotImplementedError

    def get_for_month(self, *, user_id: int, year: int, month: int, for_update: bool = False) -> Optional[MonthlyAllowance]:
        """Lookup by the unique (user_id, year, month) key.

        for_update locks the row until the surrounding transaction ends.
        """

        raise NotImplementedError

    def insert_if_absent(self, allowance: MonthlyAllowance) -> bool:
        """Insert unless (user_id, year, month) exists. True when a row was created."""

        raise NotImplementedError

    def consume(self, *, allowance_id: int, minutes: int) -> bool:
        """Move minutes from remaining to used; False when the balance no longer covers them."""

        raise NotImplementedError

    def has_later(self, *, user_id: int, year: int, month: int) -> bool:
        raise NotImplementedError

    def deactivate_before(
        self,
        *,
        year: int,
        month: int,
        company_id: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> int:
        """Deactivate active rows dated strictly before (year, month). Returns rows changed."""

        raise NotImplementedError
