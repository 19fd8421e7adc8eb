"""Structured nodeify run report helpers."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Dict, List


@dataclass
class NodeifyReport:
    """Summarises a single nodeify run for maintainers."""

    source_hash: str = "unknown"
    input_path: str | None = None
    output_path: str | None = None
    input_length: int = 0
    output_length: int = 0
    fingerprint_matches: Dict[str, int] = field(default_factory=dict)
    stripped: Dict[str, int] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.errors

    def to_text(self) -> str:
        """Format the report as a human-readable summary."""

        lines: List[str] = []
        lines.append(f"Source hash: {self.source_hash}")
        if self.input_path:
            lines.append(f"Input: {self.input_path} ({self.input_length} chars)")
        if self.output_path:
            lines.append(f"Output: {self.output_path} ({self.output_length} chars)")
        lines.append("Fingerprint matches:")
        if self.fingerprint_matches:
            for name, count in sorted(self.fingerprint_matches.items()):
                lines.append(f"  {name}: {count}")
        else:
            lines.append("  none")
        if self.stripped:
            lines.append("Stripped browser references:")
            for search, count in sorted(self.stripped.items()):
                lines.append(f"  {search}: {count}")
        if self.warnings:
            lines.append("Warnings:")
            lines.extend(f"  - {warning}" for warning in self.warnings)
        if self.errors:
            lines.append("Errors:")
            lines.extend(f"  - {error}" for error in self.errors)
        return "\n".join(lines)

    def to_json(self) -> Dict[str, object]:
        data: Dict[str, object] = asdict(self)
        data["succeeded"] = self.succeeded
        return data


__all__ = ["NodeifyReport"]
