from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee of a tenant company.

    Note: Plain data object (no DB access code). Rows are owned by the HR module;
    lateness tracking only reads them.
    """

    user_id: int
    company_id: int
    full_name: str
    employee_number: Optional[str]
    dept_id: Optional[int]
    is_active: bool = True
