from __future__ import annotations

from typing import Optional, Protocol

from .model import CompanyLatenessRules


class RulesRepository(Protocol):
    def get_for_company(self, company_id: int) -> Optional[CompanyLatenessRules]:
        raise NotImplementedError

    def create_if_missing(self, rules: CompanyLatenessRules) -> CompanyLatenessRules:
        """Insert rules unless the company already has a row; return the stored row."""

        raise NotImplementedError
