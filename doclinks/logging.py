"""Logging utilities for doclinks commands.

Reports go to stdout, so every log record is written to stderr. The console
threshold follows ``--verbose``/``--no-progress``; a log file, when given,
always keeps progress messages so a quiet CI run can still be diagnosed.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_LOGGER_NAME = "doclinks"

CONSOLE_FORMAT = "[doclinks] %(levelname)s %(message)s"
# Debug output names the emitting logger, e.g. "doclinks.validators.external".
VERBOSE_FORMAT = "[doclinks] %(levelname)s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the doclinks hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def console_level(*, verbose: bool = False, quiet: bool = False) -> int:
    """Console threshold for the given flags; ``verbose`` wins over ``quiet``."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | str | None = None
) -> logging.Logger:
    """Configure the doclinks logger with a stderr console handler and optional file sink."""
    stream_level = console_level(verbose=verbose, quiet=quiet)
    file_level = logging.DEBUG if verbose else logging.INFO

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(min(stream_level, file_level) if log_file is not None else stream_level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI runs more than once.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(stream_level)
    stream_handler.setFormatter(logging.Formatter(VERBOSE_FORMAT if verbose else CONSOLE_FORMAT))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "console_level", "get_logger"]
