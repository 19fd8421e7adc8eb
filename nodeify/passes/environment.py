"""Strip browser-only globals and DOM accessors from the headless script."""

from __future__ import annotations

from typing import Dict, Mapping, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..pipeline import Context


BROWSER_REPLACEMENTS: Mapping[str, str] = {
    "window.": "",
    "parent.": "",
    "document.": "",
    ".innerHTML": "",
    'getElementById("roomlink")': "null",
    'getElementById("recaptcha")': "null",
}


def count_occurrences(source: str) -> Dict[str, int]:
    return {search: source.count(search) for search in BROWSER_REPLACEMENTS}


def strip_environment(source: str) -> str:
    """Apply every browser replacement globally; absent substrings are ignored."""

    for search, replace in BROWSER_REPLACEMENTS.items():
        source = source.replace(search, replace)
    return source


def run(ctx: "Context") -> Dict[str, object]:
    text = ctx.stage_output
    counts = count_occurrences(text)
    stripped = strip_environment(text)
    ctx.stage_output = stripped
    ctx.report.stripped = {key: value for key, value in counts.items() if value}
    return {
        "input_length": len(text),
        "output_length": len(stripped),
        "replacements": counts,
        "changed": stripped != text,
    }


__all__ = ["BROWSER_REPLACEMENTS", "count_occurrences", "run", "strip_environment"]
