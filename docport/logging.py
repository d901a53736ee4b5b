"""Logging setup for docport runs.

Declarations are resolved on a worker pool, so console lines emitted from a
worker thread are tagged with the worker's name; lines from the main thread
stay untagged. Per-declaration notes (skipped, ambiguous) go out at DEBUG and
only show with ``--verbose``.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

ROOT_LOGGER = "docport"

CONSOLE_FORMAT = "[docport] %(levelname)s%(worker)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s"


class WorkerTagFilter(logging.Filter):
    """Adds a ``worker`` field: `` [<thread name>]`` off the main thread, else empty."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.thread == threading.main_thread().ident:
            record.worker = ""
        else:
            record.worker = f" [{record.threadName}]"
        return True


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``docport`` or the ``docport.<name>`` child logger."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install console (and optionally file) handlers on the docport logger.

    Calling it again replaces the handlers from the previous call.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.propagate = False
    reset_logging(logger)

    console = logging.StreamHandler()
    console.addFilter(WorkerTagFilter())
    logger.addHandler(_prepare(console, level, CONSOLE_FORMAT))

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.addHandler(
            _prepare(logging.FileHandler(log_file, encoding="utf-8"), level, FILE_FORMAT)
        )
    return logger


def reset_logging(logger: logging.Logger | None = None) -> None:
    """Detach and close every handler on the docport logger."""
    logger = logger or logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _prepare(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


__all__ = [
    "CONSOLE_FORMAT",
    "FILE_FORMAT",
    "ROOT_LOGGER",
    "WorkerTagFilter",
    "configure_logging",
    "get_logger",
    "reset_logging",
]
