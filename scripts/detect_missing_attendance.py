"""Daily cron entry point: charge employees with no attendance row for a day.

Usage: python scripts/detect_missing_attendance.py --company-id N [--date YYYY-MM-DD]
Without --date the previous day in the company's timezone is checked.
"""

from __future__ import annotations

import argparse
import sys
from datetime import timedelta
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.lateness_system.lateness_system.common.datetime_utils import parse_iso_date, today_in
from src.lateness_system.lateness_system.container import build_container
from src.lateness_system.lateness_system.logging_config import configure_logging
from src.lateness_system.lateness_system.main import load_settings


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--company-id", type=int, required=True)
    parser.add_argument("--date", type=parse_iso_date, default=None)
    args = parser.parse_args(argv)

    settings = load_settings()
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    container = build_container(
        db_config=settings.DB_CONFIG,
        lateness_defaults=getattr(settings, "LATENESS_DEFAULTS", None),
        default_timezone=getattr(settings, "DEFAULT_TIMEZONE", "UTC"),
    )

    on_date = args.date
    if on_date is None:
        rules = container.rules_service.get_company_rules(args.company_id)
        on_date = today_in(rules.timezone) - timedelta(days=1)

    deductions = container.deduction_issuer.detect_missing_attendance(args.company_id, on_date)
    print(f"OK: {len(deductions)} missing attendance deductions for {on_date.isoformat()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
