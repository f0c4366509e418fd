"""
swiftlint_shims/diagnostics.py
══════════════════════════════

Diagnostic data model shared by every rule.

A rule produces :class:`StyleViolation` records; each one carries the rule
identifier, a :class:`ViolationSeverity`, a :class:`SourceLocation` and a
human-readable reason.  Metric rules decide the severity by walking an
ordered list of :class:`SeverityThreshold` pairs with
:func:`first_exceeded`.

Serialization mirrors the two reporters most tools consume:

  - ``to_json()``          — SwiftLint JSON reporter field names
  - ``to_xcode_format()``  — ``file:line:col: severity: Name Violation: reason (id)``

License: MIT — same as swiftlint-shims.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Optional


# ═════════════════════════════════════════════════════════════════════════
#  PART 1 — SEVERITY
# ═════════════════════════════════════════════════════════════════════════

class ViolationSeverity(Enum):
    """Severity levels a rule can report."""
    WARNING = "warning"
    ERROR = "error"

    @classmethod
    def parse(cls, raw: Any) -> "ViolationSeverity":
        """Accept an enum member or a case-insensitive string."""
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, str):
            try:
                return cls(raw.strip().lower())
            except ValueError:
                pass
        raise ValueError(f"unknown severity: {raw!r}")


@dataclass(frozen=True)
class SeverityThreshold:
    """A ``(value, severity)`` pair; a metric strictly above ``value`` trips it."""
    value: int
    severity: ViolationSeverity


def first_exceeded(
    thresholds: Iterable[SeverityThreshold], measured: int
) -> Optional[SeverityThreshold]:
    """
    Return the first threshold, in the order given, that ``measured`` exceeds.

    The list is *not* sorted here.  Configuration objects hand thresholds
    over most-severe first, so the first hit is the highest severity
    reached; a caller that supplies least-severe-first gets the least
    severe one even when every threshold is exceeded.
    """
    for threshold in thresholds:
        if measured > threshold.value:
            return threshold
    return None


# ═════════════════════════════════════════════════════════════════════════
#  PART 2 — LOCATION & VIOLATION
# ═════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SourceLocation:
    """
    A point in a source file.

    ``line`` is 1-based.  ``column`` is the 1-based character column, or 0
    for line-granular findings.  ``byte_offset`` is kept when the location
    was derived from a byte offset into the file.
    """
    file: str = ""
    line: int = 0
    column: int = 0
    byte_offset: Optional[int] = None

    def __str__(self) -> str:
        if self.column:
            return f"{self.file}:{self.line}:{self.column}"
        return f"{self.file}:{self.line}"


@dataclass(frozen=True)
class StyleViolation:
    """
    A single rule violation.

    Attributes
    ----------
    rule_id   : Rule identifier (e.g., "line_length")
    rule_name : Display name of the rule (e.g., "Line Length")
    severity  : ViolationSeverity
    location  : Where the violation was found
    reason    : Human-readable explanation
    """
    rule_id: str
    severity: ViolationSeverity
    location: SourceLocation
    reason: str
    rule_name: str = ""

    def to_json(self) -> Dict[str, Any]:
        """Serialize with the SwiftLint JSON reporter's field names."""
        return {
            "file": self.location.file or None,
            "line": self.location.line or None,
            "character": self.location.column or None,
            "severity": self.severity.value.capitalize(),
            "type": self.rule_name,
            "rule_id": self.rule_id,
            "reason": self.reason,
        }

    def to_json_str(self) -> str:
        """Single-line JSON string."""
        return json.dumps(self.to_json())

    def to_xcode_format(self) -> str:
        """Xcode/GCC-style diagnostic line."""
        name = self.rule_name or self.rule_id
        return (
            f"{self.location}: {self.severity.value}: "
            f"{name} Violation: {self.reason} ({self.rule_id})"
        )


__all__ = [
    "ViolationSeverity",
    "SeverityThreshold",
    "first_exceeded",
    "SourceLocation",
    "StyleViolation",
]
