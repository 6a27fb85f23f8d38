from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class UserRepository(Protocol):
    """Repository interface for employees.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_active(self, *, company_id: Optional[int] = None, with_employee_number: bool = False) -> Sequence[Employee]:
        """Active employees of one company, or of every company when company_id is None."""

        raise NotImplementedError
