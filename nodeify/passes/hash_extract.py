"""Extract the build hash advertised in the script's leading comment."""

from __future__ import annotations

from typing import Dict, TYPE_CHECKING

from ..patterns import HASH_COMMENT

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..pipeline import Context


UNKNOWN_HASH = "unknown"

# Scan window used when the leading comment is never terminated, counted from
# the comment opener.
LEADING_WINDOW = 512


def _leading_comment(source: str) -> str:
    body = source.lstrip("\ufeff").lstrip()
    if not body.startswith("/*"):
        return ""
    end = body.find("*/", 2)
    if end < 0:
        return body[:LEADING_WINDOW]
    return body[:end]


def extract_hash(source: str) -> str:
    """Return the 8 hex digit token from the leading comment or ``"unknown"``."""

    match = HASH_COMMENT.search(_leading_comment(source))
    if match is None:
        return UNKNOWN_HASH
    return match.group(1)


def run(ctx: "Context") -> Dict[str, object]:
    source = ctx.stage_output
    token = extract_hash(source)
    ctx.extracted_hash = token
    ctx.report.source_hash = token
    return {"hash": token, "found": token != UNKNOWN_HASH}


__all__ = ["LEADING_WINDOW", "UNKNOWN_HASH", "extract_hash", "run"]
