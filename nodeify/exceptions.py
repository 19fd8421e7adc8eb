"""Custom exception hierarchy for the nodeify pipeline."""

from __future__ import annotations

from typing import List, Tuple


class NodeifyError(Exception):
    """Base class for all nodeify related errors."""


class FingerprintError(NodeifyError):
    """Raised when a required fingerprint cannot be located in the source."""

    def __init__(self, fingerprint: str, stage: str, detail: str | None = None) -> None:
        self.fingerprint = fingerprint
        self.stage = stage
        self.detail = detail
        message = f"{stage}: failed to find {fingerprint} pattern"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class PatternNotFound(FingerprintError):
    """A rewrite rule's fingerprint had zero matches."""


class MissingCollaborator(FingerprintError):
    """The init guard or config lookup needed for capability injection is absent."""


class ConfigError(NodeifyError):
    """Raised for malformed configuration files."""


class PipelineExecutionError(NodeifyError):
    """Wraps an unexpected failure raised while a pass was running."""

    def __init__(
        self,
        pass_name: str,
        cause: BaseException,
        timings: List[Tuple[str, float]],
        duration: float,
    ) -> None:
        self.pass_name = pass_name
        self.cause = cause
        self.timings = list(timings)
        self.duration = duration
        super().__init__(f"pass '{pass_name}' failed: {cause}")


__all__ = [
    "ConfigError",
    "FingerprintError",
    "MissingCollaborator",
    "NodeifyError",
    "PatternNotFound",
    "PipelineExecutionError",
]
