"""Wrap the rewritten script in the host-runtime module envelope."""

from __future__ import annotations

from typing import Dict, TYPE_CHECKING

from .rewrite import DEBUG_SLOT, PROXY_SLOT, RESOLVE_SLOT

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..pipeline import Context


LOAD_FUNCTION = "HBLoaded"
ON_LOADED_FUNCTION = "onHBLoaded"
RTC_PRIMITIVES = ("RTCPeerConnection", "RTCIceCandidate", "RTCSessionDescription")
RTC_POLYFILL = "@mertushka/node-datachannel/polyfill"

BANNER = (
    "/* Builded & Automated with Haxball.JS Nodeify Script"
    " - Reads from local headless-min.js file */"
)

_RTC_NAMES = ", ".join(RTC_PRIMITIVES)
_RTC_OVERRIDES = "\n".join(
    f"    {name} = config.webrtc.{name};" for name in RTC_PRIMITIVES
)

HEADER = f"""const WebSocket = require("ws");
const XMLHttpRequest = require("xhr2");
const JSON5 = require("json5");
const url = require("url");
const pako = require("pako");
const {{ HttpsProxyAgent }} = require("https-proxy-agent");
const {{ Crypto }} = require("@peculiar/webcrypto");
const {{ performance }} = require("perf_hooks");
const crypto = new Crypto();

let {{ {_RTC_NAMES} }} = require("{RTC_POLYFILL}");

var {RESOLVE_SLOT};
var {PROXY_SLOT};
var {DEBUG_SLOT} = false;

const {LOAD_FUNCTION} = (config) => {{
  if(config?.webrtc) {{
{_RTC_OVERRIDES}
  }}
  return new Promise(function (resolve, reject) {{
  {RESOLVE_SLOT} = resolve;
  }});
}}

const {ON_LOADED_FUNCTION} = function (cb) {{
  return cb;
}};

{BANNER}

"""

FOOTER = f"\nmodule.exports = {LOAD_FUNCTION};"


def wrap_module(source: str) -> str:
    """Return ``source`` between the envelope header and footer, unvalidated."""

    return HEADER + source + FOOTER


def run(ctx: "Context") -> Dict[str, object]:
    text = ctx.stage_output
    wrapped = wrap_module(text)
    ctx.stage_output = wrapped
    ctx.output = wrapped
    ctx.report.output_length = len(wrapped)
    return {
        "input_length": len(text),
        "output_length": len(wrapped),
        "header_length": len(HEADER),
        "footer_length": len(FOOTER),
    }


__all__ = ["BANNER", "FOOTER", "HEADER", "LOAD_FUNCTION", "ON_LOADED_FUNCTION", "run", "wrap_module"]
