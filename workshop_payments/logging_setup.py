"""
Logging for the workshop_payments package.

Entry points (the CLI and the API lifespan) call `configure_logging` once;
library modules only call `get_logger(__name__)` and never add handlers.
"""
from __future__ import annotations

import logging
import os
import sys
from typing import IO

PACKAGE_LOGGER = "workshop_payments"
LEVEL_ENV_VAR = "WORKSHOP_PAYMENTS_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_configured = False


def resolve_level(level: int | str | None) -> int:
    """Level from an int, a name ("debug") or a number string; None reads the env var."""
    if level is None:
        level = os.getenv(LEVEL_ENV_VAR)
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        name = level.strip().upper()
        if name.isdigit():
            return int(name)
        value = logging.getLevelName(name)
        if isinstance(value, int):
            return value
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Send package logs to `stream` (stderr by default). Later calls are no-ops."""
    global _configured
    if _configured:
        return

    pkg = logging.getLogger(PACKAGE_LOGGER)
    for h in [h for h in pkg.handlers if isinstance(h, logging.NullHandler)]:
        pkg.removeHandler(h)

    resolved = resolve_level(level)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    pkg.setLevel(resolved)
    pkg.addHandler(handler)
    pkg.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Module logger; silent (NullHandler) until an entry point configures output."""
    pkg = logging.getLogger(PACKAGE_LOGGER)
    if not _configured and not pkg.handlers:
        pkg.addHandler(logging.NullHandler())
    return logging.getLogger(name)
