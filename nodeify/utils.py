"""Shared file and metadata helpers."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Sequence, Tuple, cast

LOG = logging.getLogger(__name__)


def read_text(path: Path, encoding: str = "utf-8") -> str:
    """Read ``path``; I/O errors propagate to the caller."""

    content = path.read_text(encoding=encoding)
    LOG.debug("read %s (%d chars)", path, len(content))
    return content


def write_text(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Write ``content`` to ``path`` creating parent directories as needed."""

    ensure_directory(path.parent)
    path.write_text(content, encoding=encoding)
    LOG.debug("wrote %s (%d chars)", path, len(content))


def write_json(path: Path, payload: Any, *, sort_keys: bool = False) -> None:
    write_text(path, json.dumps(payload, indent=2, sort_keys=sort_keys) + "\n")


def ensure_directory(path: Path) -> None:
    """Create *path* if it does not exist."""

    path.mkdir(parents=True, exist_ok=True)


# Terminal helpers

_COLOR_CODES = {
    "red": "31",
    "green": "32",
    "yellow": "33",
    "blue": "34",
    "magenta": "35",
    "cyan": "36",
}


def colorize_text(text: str, color: str, bold: bool = False) -> str:
    """Return *text* wrapped in ANSI color codes."""
    code = _COLOR_CODES.get(color, "0")
    style = "1;" if bold else ""
    return f"\033[{style}{code}m{text}\033[0m"


def serialise_metadata(value: Any) -> Any:
    """Return a JSON-serialisable representation of ``value``."""

    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, (list, tuple, set)):
        return [serialise_metadata(item) for item in value]
    if isinstance(value, Mapping):
        return {str(key): serialise_metadata(item) for key, item in value.items()}
    if is_dataclass(value) and not isinstance(value, type):
        data = asdict(cast(Any, value))
        return {str(key): serialise_metadata(item) for key, item in data.items()}
    return repr(value)


def summarise_metadata(metadata: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a serialisable summary of ``metadata`` suitable for JSON dumps."""

    return {str(key): serialise_metadata(value) for key, value in metadata.items()}


def format_pass_summary(results: Sequence[Tuple[str, float]]) -> str:
    """Format ``results`` as a small table for console output."""

    if not results:
        return ""
    name_width = max(len(name) for name, _ in results)
    lines = [f"{'Pass'.ljust(name_width)}  Duration"]
    for name, duration in results:
        lines.append(f"{name.ljust(name_width)}  {duration:.3f}s")
    return "\n".join(lines)


__all__ = [
    "colorize_text",
    "ensure_directory",
    "format_pass_summary",
    "read_text",
    "serialise_metadata",
    "summarise_metadata",
    "write_json",
    "write_text",
]
