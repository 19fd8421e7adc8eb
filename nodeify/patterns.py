"""
Fingerprint definitions
Structural patterns located in the headless script before each rewrite
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Type

from .exceptions import FingerprintError, PatternNotFound


@dataclass(frozen=True)
class Fingerprint:
    """A named structural pattern expected to occur once in the source"""

    name: str
    regex: re.Pattern[str]
    description: str

    def search(self, text: str) -> re.Match[str] | None:
        return self.regex.search(text)

    def count(self, text: str) -> int:
        return sum(1 for _ in self.regex.finditer(text))

    def require(
        self,
        text: str,
        stage: str,
        error: Type[FingerprintError] = PatternNotFound,
    ) -> re.Match[str]:
        """Return the first match or raise ``error`` naming this fingerprint."""

        match = self.regex.search(text)
        if match is None:
            raise error(self.name, stage, self.description)
        return match


def splice(text: str, match: re.Match[str], replacement: str) -> str:
    """Replace the span of ``match`` (and only that span) with ``replacement``."""

    return text[: match.start()] + replacement + text[match.end():]


HASH_COMMENT = Fingerprint(
    name="hashComment",
    regex=re.compile(r"\b([a-f0-9]{8})\b"),
    description="8 hex digit build hash in the leading comment",
)

INIT_GUARD = Fingerprint(
    name="initGuard",
    regex=re.compile(
        r"if\s*\(\s*[A-Za-z]+\.[A-Za-z]+\s*\)\s*throw\s+[A-Za-z]+\.[A-Za-z]+\s*\(\s*"
        r"\"Can't init twice\"\s*\)\s*;\s*[A-Za-z]+\.[A-Za-z]+\s*=\s*!0\s*;"
    ),
    description="initialization guard",
)

HB_INIT_ASSIGNMENT = Fingerprint(
    name="hbInitAssignment",
    regex=re.compile(r"HBInit\s*=\s*(?P<value>.+?);"),
    description="HBInit assignment",
)

WEB_SOCKET_CONSTRUCTION = Fingerprint(
    name="webSocketConstruction",
    regex=re.compile(r"new\s+WebSocket\s*\((?P<args>[^)]+)\)(?P<tail>\s*;?)"),
    description="WebSocket construction",
)

SOCKET_ERROR_HANDLER = Fingerprint(
    name="socketErrorHandler",
    regex=re.compile(
        r"(?P<obj>[a-zA-Z]+)\.(?P<prop>[a-zA-Z]+)\.onerror\s*=\s*function\s*\(\s*\)\s*\{\s*"
        r"(?P<method_obj>[a-zA-Z]+)\.(?P<method>[a-zA-Z]+)\s*\(\s*(?P<truthy>!0|true)\s*\)\s*\}\s*;?"
    ),
    description="WebSocket error handler",
)

CAPTCHA_CASE = Fingerprint(
    name="captchaCase",
    regex=re.compile(r"case\s+\"recaptcha\"\s*:\s*[a-zA-Z]+\s*\(\s*[^)]+\s*\)"),
    description="recaptcha case",
)

CONFIG_LOOKUP_CALL = Fingerprint(
    name="configLookupCall",
    regex=re.compile(r"(?P<name>[\w$]+)\s*\(\s*\"noPlayer\"\s*,"),
    description="room config lookup function",
)

FINGERPRINTS: Dict[str, Fingerprint] = {
    fp.name: fp
    for fp in (
        HASH_COMMENT,
        INIT_GUARD,
        HB_INIT_ASSIGNMENT,
        WEB_SOCKET_CONSTRUCTION,
        SOCKET_ERROR_HANDLER,
        CAPTCHA_CASE,
        CONFIG_LOOKUP_CALL,
    )
}


__all__ = [
    "CAPTCHA_CASE",
    "CONFIG_LOOKUP_CALL",
    "FINGERPRINTS",
    "Fingerprint",
    "HASH_COMMENT",
    "HB_INIT_ASSIGNMENT",
    "INIT_GUARD",
    "SOCKET_ERROR_HANDLER",
    "WEB_SOCKET_CONSTRUCTION",
    "splice",
]
