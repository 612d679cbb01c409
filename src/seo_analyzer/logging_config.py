"""Logging setup for the analyzer and its command-line entry point."""

import logging
import sys
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "seo_analyzer"
DEFAULT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# The HTTP stack logs every request at INFO
QUIET_LOGGERS = ("httpx", "httpcore")


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """Route log records to stderr and, optionally, a file.

    stdout carries only reports, so ``--output json`` can be piped.

    Args:
        level: Level name; unknown names fall back to INFO
        log_file: Optional log file path, parent directories are created
        format_string: Optional custom format string

    Returns:
        The package logger
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=numeric_level, handlers=handlers, force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    return logging.getLogger(PACKAGE_LOGGER)


def get_logger(name: str) -> logging.Logger:
    """Logger under the package namespace: ``cli`` becomes ``seo_analyzer.cli``."""
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
