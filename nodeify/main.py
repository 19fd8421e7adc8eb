"""Command line interface for running the nodeify pipeline."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from . import pipeline, utils
from .config import DEFAULT_INPUT, NodeifyConfig, load_config
from .exceptions import NodeifyError
from .logging_config import trace_log
from .report import NodeifyReport

LOG_FILE = Path("nodeify.log")

LOG = logging.getLogger(__name__)


class _ColourFormatter(logging.Formatter):
    COLOURS = {
        logging.DEBUG: "blue",
        logging.INFO: "green",
        logging.WARNING: "yellow",
        logging.ERROR: "red",
        logging.CRITICAL: "magenta",
    }

    def format(self, record: logging.LogRecord) -> str:  # pragma: no cover - trivial wrapper
        message = super().format(record)
        colour = self.COLOURS.get(record.levelno, "green")
        return utils.colorize_text(message, colour)


def configure_logging(verbose: bool, log_file: Optional[Path] = LOG_FILE) -> None:
    """Configure root logging handlers."""

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    level = logging.DEBUG if verbose else logging.INFO
    root.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if log_file is not None:
        utils.ensure_directory(log_file.parent)
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    if verbose:
        stream = logging.StreamHandler()
        stream.setFormatter(_ColourFormatter("%(levelname)s: %(message)s"))
        root.addHandler(stream)

    if not root.handlers:
        # stdout/stderr carry only the SUCCESS/ERROR line
        root.addHandler(logging.NullHandler())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nodeify",
        description="Convert the browser headless script into a Node.js module",
    )
    parser.add_argument(
        "input",
        nargs="?",
        help=f"headless script to convert (default: {DEFAULT_INPUT})",
    )
    parser.add_argument("-o", "--out", "--output", dest="output", help="output module path")
    parser.add_argument("--config", help="YAML file providing defaults for these options")
    parser.add_argument("--origin", help="Origin header sent by the WebSocket client")
    parser.add_argument("--write-artifacts", dest="artifacts", metavar="DIR", help="write per-pass artifacts to DIR")
    parser.add_argument("--report", dest="report_path", metavar="FILE", help="write a JSON run report to FILE")
    parser.add_argument("--dry-run", action="store_true", help="run every pass without writing the output module")
    parser.add_argument("--profile", action="store_true", help="print pass timings to stderr")
    parser.add_argument("--verbose", action="store_true", help="enable verbose colourised logging")
    parser.add_argument(
        "--log-file",
        default=str(LOG_FILE),
        help="log file path; pass an empty string to disable file logging",
    )
    parser.add_argument("--debug-log", metavar="FILE", help="trace per-pass metadata to FILE")
    return parser


def resolve_config(args: argparse.Namespace) -> NodeifyConfig:
    base = load_config(Path(args.config)) if args.config else NodeifyConfig()
    overrides: Dict[str, Any] = {
        "input_path": args.input,
        "output_path": args.output,
        "origin": args.origin,
        "artifacts": args.artifacts,
        "report_path": args.report_path,
    }
    return base.merged(overrides)


def run(
    config: NodeifyConfig,
    report: NodeifyReport,
    *,
    dry_run: bool = False,
    trace: Optional[logging.Logger] = None,
) -> Tuple[pipeline.Context, List[Tuple[str, float]]]:
    """Read, transform and (unless ``dry_run``) write one script.

    Nothing is written when any pass fails.
    """

    source = utils.read_text(config.input_path)
    ctx = pipeline.Context(
        raw_input=source,
        input_path=config.input_path,
        options={"origin": config.origin},
        artifacts=config.artifacts,
        trace_logger=trace,
        report=report,
    )
    timings = pipeline.PIPELINE.run_passes(ctx)
    if dry_run:
        LOG.info("dry run: skipping write to %s", config.output_path)
    else:
        utils.write_text(config.output_path, ctx.output)
        LOG.info("wrote %s (%d chars)", config.output_path, len(ctx.output))
    return ctx, timings


def _write_report(path: Optional[Path], report: NodeifyReport) -> None:
    if path is None:
        return
    try:
        utils.write_json(path, report.to_json())
    except OSError as exc:
        LOG.error("failed writing report to %s: %s", path, exc)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    configure_logging(args.verbose, Path(args.log_file) if args.log_file else None)

    config: Optional[NodeifyConfig] = None
    report: Optional[NodeifyReport] = None
    try:
        config = resolve_config(args)
        report = NodeifyReport(input_path=str(config.input_path), output_path=str(config.output_path))
        with trace_log(Path(args.debug_log) if args.debug_log else None) as trace:
            ctx, timings = run(config, report, dry_run=args.dry_run, trace=trace)
    except (NodeifyError, OSError, UnicodeDecodeError) as exc:
        LOG.error("nodeify failed: %s", exc)
        if config is not None and report is not None:
            report.errors.append(str(exc))
            LOG.info("run summary:\n%s", report.to_text())
            _write_report(config.report_path, report)
        print(f"ERROR:{exc}", file=sys.stderr)
        return 1

    for warning in ctx.report.warnings:
        LOG.warning("%s", warning)
    LOG.info("run summary:\n%s", ctx.report.to_text())
    _write_report(config.report_path, ctx.report)
    if args.profile:
        print(utils.format_pass_summary(timings), file=sys.stderr)
    print(f"SUCCESS:{ctx.extracted_hash}")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI wrapper
    raise SystemExit(main())
