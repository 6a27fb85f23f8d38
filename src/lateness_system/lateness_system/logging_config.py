"""Logger hierarchy for the lateness package.

Every module logs under ``lateness_system.<feature>``; applications call
``configure_logging`` once at startup.
"""

from __future__ import annotations

import logging
import sys

_LOGGER_PREFIX = "lateness_system"
_HANDLER_MARKER = "_lateness_system_handler"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Child logger under the package root (``get_logger("allowances")``)."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


def configure_logging(level: int | str = logging.INFO, *, stream=None) -> logging.Logger:
    """Install one stream handler on the package root logger (idempotent)."""
    root = logging.getLogger(_LOGGER_PREFIX)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    root.setLevel(level)

    for handler in root.handlers:
        if getattr(handler, _HANDLER_MARKER, False):
            handler.setLevel(level)
            return root

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler.setLevel(level)
    setattr(handler, _HANDLER_MARKER, True)
    root.addHandler(handler)
    root.propagate = False
    return root
