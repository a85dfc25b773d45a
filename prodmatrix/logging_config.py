"""Logging configuration — called once at startup by the CLI.

Library modules only do ``logger = logging.getLogger(__name__)``; nothing
below the CLI installs handlers.
"""

from __future__ import annotations

import logging
import sys

# WARNING and above — message only
_FMT_MINIMAL = "%(message)s"

# INFO — timestamped with module context
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_DATEFMT_VERBOSE = "%H:%M:%S"

# DEBUG — full diagnostic with file:line
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"
_DATEFMT_DEBUG = "%H:%M:%S"

DEFAULT_LEVEL = "WARNING"


def setup_logging(level: str = DEFAULT_LEVEL) -> None:
    """Configure the root logger with a single stderr handler.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown names fall back to WARNING.
    """
    numeric_level = _parse_level(level)

    if numeric_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT_DEBUG
    elif numeric_level <= logging.INFO:
        fmt, datefmt = _FMT_VERBOSE, _DATEFMT_VERBOSE
    else:
        fmt, datefmt = _FMT_MINIMAL, None

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root.setLevel(numeric_level)


def _parse_level(level: str | None) -> int:
    if not level:
        return logging.WARNING
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.WARNING
