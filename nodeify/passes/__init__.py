"""Pass modules orchestrated by :mod:`nodeify.pipeline`."""

from __future__ import annotations

from . import (
    hash_extract,
    environment,
    rewrite,
    capabilities,
    wrap,
)

__all__ = [
    "hash_extract",
    "environment",
    "rewrite",
    "capabilities",
    "wrap",
]
