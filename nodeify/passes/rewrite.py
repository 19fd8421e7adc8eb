"""Ordered locate-and-replace rules adapting the script to the host runtime.

Each :class:`Rule` pairs one fingerprint with a replacement builder.  Rules run
in the order of :data:`RULES` and splice only the first match; the init guard
is deliberately absent here so :mod:`.capabilities` can still locate it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple, TYPE_CHECKING

from ..patterns import (
    CAPTCHA_CASE,
    HB_INIT_ASSIGNMENT,
    SOCKET_ERROR_HANDLER,
    WEB_SOCKET_CONSTRUCTION,
    Fingerprint,
    splice,
)

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..pipeline import Context


STAGE = "rewrite"
DEFAULT_ORIGIN = "https://html5.haxball.com"

# Names of the mutable slots declared by the module envelope.
RESOLVE_SLOT = "promiseResolve"
PROXY_SLOT = "proxyAgent"
DEBUG_SLOT = "debug"

CAPTCHA_DIAGNOSTIC = "Invalid Token Provided!"

ReplacementBuilder = Callable[[re.Match, str], str]


@dataclass(frozen=True)
class Rule:
    """A fingerprint paired with the text that replaces its first match."""

    fingerprint: Fingerprint
    build: ReplacementBuilder

    @property
    def name(self) -> str:
        return self.fingerprint.name

    def apply(self, source: str, *, origin: str = DEFAULT_ORIGIN) -> Tuple[str, int]:
        """Return the rewritten text and how many matches the fingerprint had."""

        match = self.fingerprint.require(source, STAGE)
        count = self.fingerprint.count(source)
        return splice(source, match, self.build(match, origin)), count


def _deferred_init(match: re.Match, origin: str) -> str:
    return f"{RESOLVE_SLOT}({match.group('value')});"


def _transport_construction(match: re.Match, origin: str) -> str:
    options = f'{{headers:{{origin: "{origin}"}}, agent: {PROXY_SLOT}}}'
    return f"new WebSocket({match.group('args')}, {options}){match.group('tail')}"


def _transport_error(match: re.Match, origin: str) -> str:
    return (
        f"{match.group('obj')}.{match.group('prop')}.onerror=function(err){{"
        f"{match.group('method_obj')}.{match.group('method')}({match.group('truthy')});"
        f"{DEBUG_SLOT} && console.error(err)}};"
    )


def _challenge_bypass(match: re.Match, origin: str) -> str:
    return f'case "recaptcha":console.log(new Error("{CAPTCHA_DIAGNOSTIC}"))'


DEFERRED_INIT_RULE = Rule(HB_INIT_ASSIGNMENT, _deferred_init)
TRANSPORT_CONSTRUCTION_RULE = Rule(WEB_SOCKET_CONSTRUCTION, _transport_construction)
TRANSPORT_ERROR_RULE = Rule(SOCKET_ERROR_HANDLER, _transport_error)
CHALLENGE_BYPASS_RULE = Rule(CAPTCHA_CASE, _challenge_bypass)

RULES: Tuple[Rule, ...] = (
    DEFERRED_INIT_RULE,
    TRANSPORT_CONSTRUCTION_RULE,
    TRANSPORT_ERROR_RULE,
    CHALLENGE_BYPASS_RULE,
)


def apply_rules(
    source: str,
    rules: Sequence[Rule] = RULES,
    *,
    origin: str = DEFAULT_ORIGIN,
) -> Tuple[str, Dict[str, int]]:
    """Apply ``rules`` in order, failing on the first missing fingerprint."""

    counts: Dict[str, int] = {}
    for rule in rules:
        source, counts[rule.name] = rule.apply(source, origin=origin)
    return source, counts


def run(ctx: "Context") -> Dict[str, object]:
    text = ctx.stage_output
    origin = str(ctx.options.get("origin") or DEFAULT_ORIGIN)
    rewritten, counts = apply_rules(text, origin=origin)
    ctx.stage_output = rewritten

    warnings: List[str] = []
    for name, count in counts.items():
        ctx.report.fingerprint_matches[name] = count
        if count > 1:
            warnings.append(
                f"{name} matched {count} times; only the first occurrence was rewritten"
            )
    ctx.report.warnings.extend(warnings)
    return {
        "input_length": len(text),
        "output_length": len(rewritten),
        "matches": counts,
        "origin": origin,
        "warnings": warnings,
    }


__all__ = [
    "CAPTCHA_DIAGNOSTIC",
    "DEBUG_SLOT",
    "DEFAULT_ORIGIN",
    "PROXY_SLOT",
    "RESOLVE_SLOT",
    "RULES",
    "Rule",
    "apply_rules",
    "run",
]
