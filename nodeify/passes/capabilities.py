"""Inject proxy and debug wiring right after the script's init guard."""

from __future__ import annotations

from typing import Dict, TYPE_CHECKING

from ..exceptions import MissingCollaborator
from ..patterns import CONFIG_LOOKUP_CALL, INIT_GUARD, splice
from .rewrite import DEBUG_SLOT, PROXY_SLOT

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..pipeline import Context


STAGE = "capabilities"


def capability_statements(lookup: str) -> str:
    """Return the proxy/debug assignments calling the script's own ``lookup``."""

    proxy = f'{lookup}("proxy",null)'
    return (
        f"{PROXY_SLOT}={proxy}?new HttpsProxyAgent(url.parse({proxy})):null;"
        f'{DEBUG_SLOT}={lookup}("debug",null)==true;'
    )


def inject_capabilities(source: str) -> str:
    guard = INIT_GUARD.require(source, STAGE, MissingCollaborator)
    lookup = CONFIG_LOOKUP_CALL.require(source, STAGE, MissingCollaborator).group("name")
    return splice(source, guard, guard.group(0) + capability_statements(lookup))


def run(ctx: "Context") -> Dict[str, object]:
    text = ctx.stage_output
    injected = inject_capabilities(text)
    ctx.stage_output = injected

    lookup_match = CONFIG_LOOKUP_CALL.search(text)
    lookup = lookup_match.group("name") if lookup_match else None
    for fingerprint in (INIT_GUARD, CONFIG_LOOKUP_CALL):
        ctx.report.fingerprint_matches[fingerprint.name] = fingerprint.count(text)
    # repeated lookup calls are normal; a repeated guard is not
    guards = ctx.report.fingerprint_matches[INIT_GUARD.name]
    if guards > 1:
        ctx.report.warnings.append(
            f"{INIT_GUARD.name} matched {guards} times; only the first occurrence was rewritten"
        )
    return {
        "input_length": len(text),
        "output_length": len(injected),
        "config_lookup": lookup,
    }


__all__ = ["capability_statements", "inject_capabilities", "run"]
