"""Test configuration ensuring the project source tree is importable."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
FIXTURES = ROOT / "tests" / "fixtures"

root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

SAMPLE_HASH = "6a1f3c2e"


@pytest.fixture
def headless_source() -> str:
    """Minified headless script carrying every fingerprint exactly once."""

    return (FIXTURES / "headless_sample.js").read_text(encoding="utf-8")


@pytest.fixture
def headless_file(tmp_path, headless_source) -> Path:
    target = tmp_path / "scripts" / "headless-min.js"
    target.parent.mkdir(parents=True)
    target.write_text(headless_source, encoding="utf-8")
    return target
