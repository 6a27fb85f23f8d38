"""Monthly cron entry point: deactivate last month's allowances and open the current month.

Usage: python scripts/reset_allowances.py [--company-id N]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.lateness_system.lateness_system.container import build_container
from src.lateness_system.lateness_system.logging_config import configure_logging
from src.lateness_system.lateness_system.main import load_settings


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--company-id", type=int, default=None, help="limit the reset to one company")
    args = parser.parse_args(argv)

    settings = load_settings()
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    container = build_container(
        db_config=settings.DB_CONFIG,
        lateness_defaults=getattr(settings, "LATENESS_DEFAULTS", None),
        default_timezone=getattr(settings, "DEFAULT_TIMEZONE", "UTC"),
    )

    result = container.allowance_ledger.reset_monthly_allowances(args.company_id)
    print(f"OK: deactivated={result.deactivated} created={result.created}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
