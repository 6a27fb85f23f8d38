from __future__ import annotations

from dataclasses import replace
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from ..common.validators import require_hhmm, require_timezone
from ..core.enums import DeductionType, WarningLevel
from ..core.exceptions import ValidationError
from ..logging_config import get_logger
from .model import CompanyLatenessRules, DeductionPolicy
from .repository import RulesRepository

logger = get_logger("rules")


def _policy_from_mapping(base: DeductionPolicy, data: Mapping[str, Any]) -> DeductionPolicy:
    try:
        deduction_type = DeductionType(data.get("deduction_type", base.deduction_type))
        level = data.get("warning_level", base.warning_level)
        amount = data.get("financial_amount", base.financial_amount)
        minutes = data.get("time_minutes", base.time_minutes)
        return DeductionPolicy(
            deduction_type=deduction_type,
            financial_amount=Decimal(str(amount)) if amount is not None else None,
            time_minutes=int(minutes) if minutes is not None else None,
            warning_level=WarningLevel(level) if level else None,
        )
    except (ValueError, InvalidOperation):
        raise ValidationError(f"Invalid deduction policy: {dict(data)!r}")


def build_rules(company_id: int, overrides: Optional[Mapping[str, Any]] = None) -> CompanyLatenessRules:
    """Default rules for a company with configured overrides applied and validated."""
    rules = CompanyLatenessRules(company_id=int(company_id))
    overrides = dict(overrides or {})
    if not overrides:
        return rules

    work_start = require_hhmm(overrides.get("work_start_time", rules.work_start_time), "work_start_time")
    latest_allowed = require_hhmm(overrides.get("latest_allowed_time", rules.latest_allowed_time), "latest_allowed_time")
    if latest_allowed < work_start:
        raise ValidationError("latest_allowed_time cannot be before work_start_time")

    allowance = int(overrides.get("monthly_allowance_minutes", rules.monthly_allowance_minutes))
    if allowance < 0:
        raise ValidationError("monthly_allowance_minutes cannot be negative")

    reset_day = int(overrides.get("allowance_reset_day", rules.allowance_reset_day))
    if not 1 <= reset_day <= 31:
        raise ValidationError("allowance_reset_day must be between 1 and 31")

    return replace(
        rules,
        work_start_time=work_start,
        latest_allowed_time=latest_allowed,
        monthly_allowance_minutes=allowance,
        allowance_reset_day=reset_day,
        auto_apply_deductions=bool(overrides.get("auto_apply_deductions", rules.auto_apply_deductions)),
        timezone=require_timezone(str(overrides.get("timezone", rules.timezone)), "timezone"),
        violation=_policy_from_mapping(rules.violation, overrides.get("violation", {})),
        allowance_exceeded=_policy_from_mapping(rules.allowance_exceeded, overrides.get("allowance_exceeded", {})),
        missing_attendance=_policy_from_mapping(rules.missing_attendance, overrides.get("missing_attendance", {})),
    )


class RulesService:
    def __init__(self, rules: RulesRepository, *, defaults: Optional[Mapping[str, Any]] = None):
        self._rules = rules
        self._defaults = dict(defaults or {})
        # Fail at startup, not on the first check-in.
        build_rules(0, self._defaults)

    def get_company_rules(self, company_id: int) -> CompanyLatenessRules:
        """Company rules, created with defaults on first access."""
        try:
            existing = self._rules.get_for_company(int(company_id))
            if existing:
                return existing

            created = self._rules.create_if_missing(build_rules(int(company_id), self._defaults))
            logger.info("Created default lateness rules for company %s", company_id)
            return created
        except Exception:
            logger.exception("Failed to load lateness rules for company %s", company_id)
            raise
