"""Logging for fvm: ``[tag] message`` lines on stderr under the ``fvm`` logger.

The level comes from ``--verbose`` (DEBUG), else ``FVM_LOG_LEVEL``, else
WARNING. Configuring again only adjusts the level and stream of the one
handler fvm owns.
"""

from __future__ import annotations

import logging
import os
import sys
import threading
from typing import TextIO

LOG_LEVEL_ENV = "FVM_LOG_LEVEL"

_lock = threading.Lock()


class TagFormatter(logging.Formatter):
    """Prefix the message with the logger name minus ``fvm.``.

    The record itself is left untouched so other handlers see the raw message.
    """

    def __init__(self) -> None:
        super().__init__("%(message)s")

    def format(self, record: logging.LogRecord) -> str:
        tag = record.name.removeprefix("fvm.")
        return f"[{tag}] {super().format(record)}"


def parse_level(value: str | None, default: int = logging.WARNING) -> int:
    """Map a level name such as ``debug`` to its number, or *default*."""
    name = (value or "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


def _own_handler(logger: logging.Logger) -> logging.StreamHandler | None:
    for handler in logger.handlers:
        if isinstance(handler, logging.StreamHandler) and isinstance(
            handler.formatter, TagFormatter
        ):
            return handler
    return None


def setup_logging(verbose: bool = False, *, stream: TextIO | None = None) -> logging.Logger:
    """Configure the ``fvm`` logger and return it.

    Safe to call repeatedly: the handler is added once and later calls only
    set the level (and the stream, when one is given).
    """
    level = logging.DEBUG if verbose else parse_level(os.environ.get(LOG_LEVEL_ENV))
    with _lock:
        logger = logging.getLogger("fvm")
        handler = _own_handler(logger)
        if handler is None:
            handler = logging.StreamHandler(stream or sys.stderr)
            handler.setFormatter(TagFormatter())
            logger.addHandler(handler)
            logger.propagate = False
        elif stream is not None:
            handler.setStream(stream)
        logger.setLevel(level)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return ``fvm.<name>``, configuring the ``fvm`` logger on first use."""
    if _own_handler(logging.getLogger("fvm")) is None:
        setup_logging()
    return logging.getLogger(f"fvm.{name}")
