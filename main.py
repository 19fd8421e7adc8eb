#!/usr/bin/env python3
"""Compat shim that forwards to :mod:`nodeify.main`.

CI jobs invoke ``python main.py`` from the repository root; the real CLI lives
in :mod:`nodeify.main` so both entry points share one code path.
"""

from __future__ import annotations

import sys

from nodeify import main as _cli


def main(argv: list[str] | None = None) -> int:
    """Entry point for ``python main.py``.

    Parameters
    ----------
    argv:
        Optional argument vector.  When ``None`` the wrapper forwards the
        current ``sys.argv[1:]`` to :func:`nodeify.main.main`.
    """

    return _cli.main(sys.argv[1:] if argv is None else argv)


if __name__ == "__main__":  # pragma: no cover - thin CLI shim
    raise SystemExit(main())
