"""Trace log opened by ``--debug-log``: one JSON metadata line per pass."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from . import utils

TRACE_LOGGER = "nodeify.trace"

_MARKER = "_nodeify_trace"


def open_trace_log(path: Path, *, name: str = TRACE_LOGGER) -> logging.Logger:
    """Point the ``name`` logger at a fresh ``path``, replacing any earlier trace file."""

    utils.ensure_directory(path.parent)
    logger = logging.getLogger(name)
    close_trace_log(logger)
    logger.setLevel(logging.DEBUG)
    # trace lines never reach the run log
    logger.propagate = False

    handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    setattr(handler, _MARKER, True)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def close_trace_log(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if getattr(handler, _MARKER, False):
            logger.removeHandler(handler)
            handler.close()


@contextmanager
def trace_log(path: Optional[Path], *, name: str = TRACE_LOGGER) -> Iterator[Optional[logging.Logger]]:
    """Yield a trace logger writing to ``path``, or ``None`` when tracing is off."""

    if path is None:
        yield None
        return
    logger = open_trace_log(path, name=name)
    try:
        yield logger
    finally:
        close_trace_log(logger)


__all__ = ["TRACE_LOGGER", "close_trace_log", "open_trace_log", "trace_log"]
