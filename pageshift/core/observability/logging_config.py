"""
Logging configuration — one setup call for the CLI entrypoint.

Every module logs through ``logging.getLogger(__name__)``; main.py calls
``setup_logging()`` once before any work happens.

Level precedence:
    --debug / --verbose / --quiet  >  PAGESHIFT_LOG_LEVEL  >  WARNING

A log file can be added with PAGESHIFT_LOG_FILE (level from
PAGESHIFT_LOG_FILE_LEVEL, else the console level).
"""

from __future__ import annotations

import logging
import os
import sys

ENV_LEVEL = "PAGESHIFT_LOG_LEVEL"
ENV_FILE = "PAGESHIFT_LOG_FILE"
ENV_FILE_LEVEL = "PAGESHIFT_LOG_FILE_LEVEL"

# (ceiling, format, datefmt); the first row whose ceiling >= the console level wins
_CONSOLE_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "%(levelname)s: %(message)s", None),
)

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_level(*, debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Pick the console level name from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(ENV_LEVEL, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure the root logger.

    Console output goes to stderr, so a dry-run page printed on stdout
    stays clean.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional log file path.
        log_file_level: Level for the file; defaults to ``level``.
    """
    console_level = _parse_level(level)
    root = logging.getLogger()
    root.handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))
    root.addHandler(console)

    effective = console_level
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        effective = min(effective, file_level)
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(handler)

    root.setLevel(effective)
    logging.raiseExceptions = False


def _console_formatter(level: int) -> logging.Formatter:
    for ceiling, fmt, datefmt in _CONSOLE_FORMATS:
        if level <= ceiling:
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter(_CONSOLE_FORMATS[-1][1])


def _parse_level(level: str | None) -> int:
    """Level name → numeric constant; unknown names fall back to WARNING."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
