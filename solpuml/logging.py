"""Logging setup and per-file failure reporting for solpuml runs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, TextIO

from .errors import FileError

_LOGGER_NAME = "solpuml"
_CONSOLE_FORMAT = "[solpuml] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the ``solpuml`` hierarchy."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send solpuml records to stderr and, optionally, to ``log_file``.

    Calling it again replaces the handlers installed by the previous call.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    sinks: list[tuple[logging.Handler, str]] = [(logging.StreamHandler(), _CONSOLE_FORMAT)]
    if log_file is not None:
        sinks.append((logging.FileHandler(log_file, encoding="utf-8"), _FILE_FORMAT))
    for handler, fmt in sinks:
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)

    return logger


def describe_file_error(error: FileError) -> str:
    """One-line summary of a per-file failure: ``[stage] path: message``."""
    return f"[{error.stage}] {error.path}: {error.message}"


def log_file_error(logger: logging.Logger, error: FileError) -> None:
    """Record a skipped file; the traceback is only attached in verbose runs."""
    logger.warning(
        "Skipped %s",
        describe_file_error(error),
        exc_info=error if logger.isEnabledFor(logging.DEBUG) else None,
    )


def write_failure_summary(errors: Iterable[FileError], stream: TextIO) -> int:
    """Write a summary of skipped files to ``stream`` and return how many there were."""
    errors = list(errors)
    if errors:
        stream.write(f"{len(errors)} file(s) were skipped:\n")
        for error in errors:
            stream.write(f"  {describe_file_error(error)}\n")
    return len(errors)


__all__ = [
    "configure_logging",
    "describe_file_error",
    "get_logger",
    "log_file_error",
    "write_failure_summary",
]
