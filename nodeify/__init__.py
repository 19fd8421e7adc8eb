"""Convert the browser build of the headless host script into a Node.js module."""

from __future__ import annotations

from .exceptions import (
    ConfigError,
    FingerprintError,
    MissingCollaborator,
    NodeifyError,
    PatternNotFound,
    PipelineExecutionError,
)
from .pipeline import PIPELINE, Context, process_source

__version__ = "1.0.0"

__all__ = [
    "ConfigError",
    "Context",
    "FingerprintError",
    "MissingCollaborator",
    "NodeifyError",
    "PIPELINE",
    "PatternNotFound",
    "PipelineExecutionError",
    "process_source",
]
