"""Pass-based orchestration for the nodeify pipeline."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from . import utils
from .exceptions import NodeifyError, PipelineExecutionError
from .report import NodeifyReport
from .passes.hash_extract import UNKNOWN_HASH, run as hash_extract_run
from .passes.environment import run as environment_run
from .passes.rewrite import DEFAULT_ORIGIN, run as rewrite_run
from .passes.capabilities import run as capabilities_run
from .passes.wrap import run as wrap_run

LOG = logging.getLogger(__name__)

PassFn = Callable[["Context"], None]


def _default_report() -> NodeifyReport:
    return NodeifyReport()


@dataclass
class Context:
    """Shared state threaded through individual pipeline passes.

    ``stage_output`` holds the one script text in flight; every pass consumes
    it and replaces it with its own result.
    """

    raw_input: str = ""
    input_path: Optional[Path] = None
    stage_output: str = ""
    output: str = ""
    extracted_hash: str = UNKNOWN_HASH
    options: Dict[str, Any] = field(default_factory=dict)
    pass_metadata: Dict[str, Any] = field(default_factory=dict)
    artifacts: Optional[Path] = None
    trace_logger: Optional[logging.Logger] = None
    report: NodeifyReport = field(default_factory=_default_report)

    def __post_init__(self) -> None:
        if self.raw_input and not self.stage_output:
            self.stage_output = self.raw_input
        self.report.input_length = len(self.raw_input)
        if self.input_path is not None and self.report.input_path is None:
            self.report.input_path = str(self.input_path)
        if self.artifacts:
            utils.ensure_directory(self.artifacts)

    # ------------------------------------------------------------------
    def record_metadata(self, name: str, metadata: Dict[str, Any]) -> None:
        summary = utils.summarise_metadata(metadata)
        self.pass_metadata[name] = summary
        if self.trace_logger is not None:
            self.trace_logger.debug("%s %s", name, json.dumps(summary, sort_keys=True))
        if self.artifacts:
            utils.write_json(self.artifacts / f"{name}.json", summary, sort_keys=True)

    def write_artifact(self, name: str, content: str, *, extension: str = ".js") -> None:
        if not self.artifacts:
            return
        if not content:
            return
        safe_name = name.replace(" ", "_")
        utils.write_text(self.artifacts / f"{safe_name}{extension}", content)


class PassRegistry:
    def __init__(self) -> None:
        self._passes: Dict[str, Tuple[int, PassFn]] = {}

    def register_pass(self, name: str, fn: PassFn, order: int) -> None:
        self._passes[name] = (order, fn)

    @property
    def names(self) -> List[str]:
        return [name for _, name in sorted((order, name) for name, (order, _) in self._passes.items())]

    def run_passes(self, ctx: Context) -> List[Tuple[str, float]]:
        """Run every registered pass in order and return per-pass timings.

        :class:`NodeifyError` subclasses propagate untouched so callers see the
        fingerprint that failed; anything else is wrapped in
        :class:`PipelineExecutionError` naming the pass.
        """

        selected = sorted((order, name, fn) for name, (order, fn) in self._passes.items())

        timings: List[Tuple[str, float]] = []
        for _, name, fn in selected:
            start = time.perf_counter()
            try:
                fn(ctx)
            except NodeifyError:
                raise
            except Exception as exc:
                raise PipelineExecutionError(
                    name, exc, timings, time.perf_counter() - start
                ) from exc
            duration = time.perf_counter() - start
            timings.append((name, duration))
            metadata = ctx.pass_metadata.get(name)
            summary_parts: List[str] = []
            if isinstance(metadata, dict):
                length = metadata.get("output_length")
                matches = metadata.get("matches")
                warnings = metadata.get("warnings")
                if isinstance(length, int):
                    summary_parts.append(f"length={length}")
                if isinstance(matches, dict):
                    summary_parts.append(f"rules={len(matches)}")
                if isinstance(warnings, list) and warnings:
                    summary_parts.append(f"warnings={len(warnings)}")
            suffix = f" ({', '.join(summary_parts)})" if summary_parts else ""
            LOG.info("pass %s completed in %.3fs%s", name, duration, suffix)
        return timings


PIPELINE = PassRegistry()


# ---------------------------------------------------------------------------
# Pass implementations


def _pass_hash_extract(ctx: Context) -> None:
    metadata = hash_extract_run(ctx)
    ctx.record_metadata("hash_extract", metadata)
    ctx.write_artifact("raw_input", ctx.raw_input)


def _pass_environment(ctx: Context) -> None:
    metadata = environment_run(ctx)
    ctx.record_metadata("environment", metadata)
    ctx.write_artifact("environment", ctx.stage_output)


def _pass_rewrite(ctx: Context) -> None:
    metadata = rewrite_run(ctx)
    ctx.record_metadata("rewrite", metadata)
    ctx.write_artifact("rewrite", ctx.stage_output)


def _pass_capabilities(ctx: Context) -> None:
    metadata = capabilities_run(ctx)
    ctx.record_metadata("capabilities", metadata)
    ctx.write_artifact("capabilities", ctx.stage_output)


def _pass_wrap(ctx: Context) -> None:
    metadata = wrap_run(ctx)
    ctx.record_metadata("wrap", metadata)
    ctx.write_artifact("wrap", ctx.stage_output)


PIPELINE.register_pass("hash_extract", _pass_hash_extract, 10)
PIPELINE.register_pass("environment", _pass_environment, 20)
PIPELINE.register_pass("rewrite", _pass_rewrite, 30)
PIPELINE.register_pass("capabilities", _pass_capabilities, 40)
PIPELINE.register_pass("wrap", _pass_wrap, 50)


def process_source(source: str, *, origin: str = DEFAULT_ORIGIN) -> Tuple[str, str]:
    """Transform ``source`` in memory and return ``(module_text, hash)``."""

    ctx = Context(raw_input=source, options={"origin": origin})
    PIPELINE.run_passes(ctx)
    return ctx.output, ctx.extracted_hash


__all__ = ["Context", "PassRegistry", "PIPELINE", "process_source"]
