"""Run configuration loaded from YAML files and command line overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .exceptions import ConfigError
from .passes.rewrite import DEFAULT_ORIGIN

LOG = logging.getLogger(__name__)

DEFAULT_INPUT = Path("scripts") / "headless-min.js"
DEFAULT_OUTPUT = Path("src") / "build.js"

_PATH_FIELDS = ("input_path", "output_path", "artifacts", "report_path")
_REQUIRED_PATHS = ("input_path", "output_path")


@dataclass(frozen=True)
class NodeifyConfig:
    """Locations and options for a single nodeify run."""

    input_path: Path = DEFAULT_INPUT
    output_path: Path = DEFAULT_OUTPUT
    origin: str = DEFAULT_ORIGIN
    artifacts: Optional[Path] = None
    report_path: Optional[Path] = None

    def merged(self, overrides: Mapping[str, Any]) -> "NodeifyConfig":
        """Return a copy with every non-``None`` entry of ``overrides`` applied."""

        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **_coerce(changes))


def _coerce_path(key: str, value: Any) -> Optional[Path]:
    if value is None:
        if key in _REQUIRED_PATHS:
            raise ConfigError(f"{key} must be a path, not null")
        return None
    if not isinstance(value, (str, os.PathLike)):
        raise ConfigError(f"{key} must be a path, not {type(value).__name__}")
    if not str(value):
        raise ConfigError(f"{key} must not be empty")
    return Path(value)


def _coerce(values: Mapping[str, Any]) -> Dict[str, Any]:
    known = {item.name for item in fields(NodeifyConfig)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigError(f"unknown configuration keys: {', '.join(unknown)}")
    result: Dict[str, Any] = {}
    for key, value in values.items():
        if key in _PATH_FIELDS:
            result[key] = _coerce_path(key, value)
        elif key == "origin":
            if not isinstance(value, str) or not value:
                raise ConfigError("origin must be a non-empty string")
            result[key] = value
    return result


def load_config(path: Path) -> NodeifyConfig:
    """Load a :class:`NodeifyConfig` from the YAML mapping stored at ``path``."""

    text = path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
    if data is None:
        LOG.debug("config %s is empty; using defaults", path)
        return NodeifyConfig()
    if not isinstance(data, Mapping):
        raise ConfigError(f"Expected mapping at root of config: {path}")
    return NodeifyConfig(**_coerce(data))


__all__ = ["DEFAULT_INPUT", "DEFAULT_OUTPUT", "NodeifyConfig", "load_config"]
