"""
swiftlint_shims/errors.py
═════════════════════════

Exception hierarchy.

Rule evaluation itself never raises: missing offsets, unresolved token
queries and absent body ranges degrade to "no match".  Exceptions are
reserved for the edges of the system, where input is handed to us:

  SwiftLintShimsError (base)
  ├── ConfigurationError        - bad YAML, bad threshold values, bad severity
  └── SyntaxShapeError          - a syntax node/tree that violates the model
      └── SourceKittenFormatError - structurally invalid SourceKitten JSON
"""

from __future__ import annotations


class SwiftLintShimsError(Exception):
    """Base class for every error raised by swiftlint-shims."""


class ConfigurationError(SwiftLintShimsError, ValueError):
    """Raised when a rule or project configuration cannot be applied."""

    def __init__(self, message: str, *, rule_id: str = "") -> None:
        self.rule_id = rule_id
        if rule_id:
            message = f"{rule_id}: {message}"
        super().__init__(message)


class SyntaxShapeError(SwiftLintShimsError, ValueError):
    """Raised when a syntax node is constructed with an invalid shape."""


class SourceKittenFormatError(SyntaxShapeError):
    """Raised when SourceKitten structure/syntax JSON is malformed."""
