"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time
from decimal import Decimal

DEFAULT_WORK_START_TIME = time(10, 0)
DEFAULT_LATEST_ALLOWED_TIME = time(10, 10)
DEFAULT_MONTHLY_ALLOWANCE_MINUTES = 60
DEFAULT_ALLOWANCE_RESET_DAY = 5
DEFAULT_TIMEZONE = "UTC"

DEFAULT_VIOLATION_TIME_MINUTES = 60
DEFAULT_ALLOWANCE_EXCEEDED_TIME_MINUTES = 30
DEFAULT_MISSING_ATTENDANCE_TIME_MINUTES = 480
DEFAULT_FINANCIAL_AMOUNT = Decimal("0.00")

PROCESSED_BY_SYSTEM = "SYSTEM"
