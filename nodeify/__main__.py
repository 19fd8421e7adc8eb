from __future__ import annotations

from .main import main

if __name__ == "__main__":  # pragma: no cover - CLI wrapper
    raise SystemExit(main())
