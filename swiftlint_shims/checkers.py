"""
swiftlint_shims/checkers.py
═══════════════════════════

Rule framework: the base classes every rule derives from, the registry
that discovers them, and inline suppression handling.

Architecture
────────────

  ┌─────────────────────────────────────────────────────────┐
  │                     LintRunner                          │
  │  ┌──────────────┐  ┌──────────────┐  ┌──────────────┐   │
  │  │ ObjectLiteral│  │ Cyclomatic   │  │ LineLength   │   │
  │  │   (ASTRule)  │  │ Complexity   │  │   (Rule)     │   │
  │  └──────┬───────┘  └──────┬───────┘  └──────┬───────┘   │
  │         │                 │                  │          │
  │  ┌──────▼─────────────────▼──────────────────▼───────┐  │
  │  │                   SourceFile                      │  │
  │  │   structure (tree) │ syntax_map │ lines │ bytes   │  │
  │  └──────────────────────────┬────────────────────────┘  │
  │                             │                           │
  │  ┌──────────────────────────▼────────────────────────┐  │
  │  │           SuppressionManager                      │  │
  │  │  // swiftlint:disable │ :next/:this/:previous     │  │
  │  └───────────────────────────────────────────────────┘  │
  └─────────────────────────────────────────────────────────┘

A rule is a stateless object: ``validate(file)`` is a pure function of the
file and the rule's configuration, so the same rule instance may be run on
many files, in any order.

License: MIT — same as swiftlint-shims.
"""

from __future__ import annotations

import fnmatch
import re
from abc import ABC, abstractmethod
from collections import defaultdict
from dataclasses import dataclass
from typing import (
    Any,
    ClassVar,
    Dict,
    Iterable,
    List,
    Optional,
    Set,
    Tuple,
    Type,
)

from .config import SeverityConfiguration
from .diagnostics import SourceLocation, StyleViolation, ViolationSeverity
from .errors import ConfigurationError
from .source import SourceFile
from .syntax import SyntaxNode


# ═════════════════════════════════════════════════════════════════════════
#  PART 1 — RULE DESCRIPTION
# ═════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RuleDescription:
    """
    Static metadata published by every rule.

    ``non_triggering_examples`` must produce no violation and
    ``triggering_examples`` exactly one; a ``↓`` in a triggering example
    marks where the violation is expected (see :mod:`.conformance`).
    """
    identifier: str
    name: str
    description: str
    non_triggering_examples: Tuple[str, ...] = ()
    triggering_examples: Tuple[str, ...] = ()


# ═════════════════════════════════════════════════════════════════════════
#  PART 2 — RULE BASE CLASSES
# ═════════════════════════════════════════════════════════════════════════

class Rule(ABC):
    """
    Abstract base class for all rules.

    Subclass Contract
    ─────────────────
      - Set ``description``
      - Override ``default_configuration()`` if the rule is not a plain
        severity rule
      - Implement ``validate(file)``
    """

    description: ClassVar[RuleDescription]
    opt_in: ClassVar[bool] = False

    def __init__(self, configuration: Any = None) -> None:
        self.configuration = (
            configuration if configuration is not None
            else self.default_configuration()
        )

    @classmethod
    def default_configuration(cls) -> Any:
        return SeverityConfiguration(ViolationSeverity.WARNING)

    @property
    def identifier(self) -> str:
        return self.description.identifier

    def configure(self, options: Any) -> None:
        """Apply raw (YAML-shaped) options to this rule's configuration."""
        try:
            self.configuration.apply(options)
        except ConfigurationError as exc:
            raise ConfigurationError(str(exc), rule_id=self.identifier) from exc

    @abstractmethod
    def validate(self, file: SourceFile) -> List[StyleViolation]:
        """Return every violation of this rule in ``file``, in source order."""
        ...

    def _violation(
        self,
        file: SourceFile,
        location: SourceLocation,
        severity: Optional[ViolationSeverity] = None,
        reason: Optional[str] = None,
    ) -> StyleViolation:
        """Helper to create a violation carrying this rule's metadata."""
        if severity is None:
            severity = getattr(self.configuration, "severity", ViolationSeverity.WARNING)
        return StyleViolation(
            rule_id=self.identifier,
            severity=severity,
            location=location,
            reason=reason if reason is not None else self.description.description,
            rule_name=self.description.name,
        )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} '{self.identifier}'>"


class ASTRule(Rule):
    """
    A rule evaluated at every node of the structure tree.

    The walk is a single pre-order pass in source order, so violations come
    out sorted by position.
    """

    def validate(self, file: SourceFile) -> List[StyleViolation]:
        violations: List[StyleViolation] = []
        for node in file.structure.walk():
            violations.extend(self.validate_node(file, node))
        return violations

    @abstractmethod
    def validate_node(self, file: SourceFile, node: SyntaxNode) -> List[StyleViolation]:
        ...


class OptInRule(Rule):
    """Marker base: the rule only runs when explicitly enabled."""

    opt_in: ClassVar[bool] = True


# ═════════════════════════════════════════════════════════════════════════
#  PART 3 — RULE REGISTRY
# ═════════════════════════════════════════════════════════════════════════

class RuleRegistry:
    """
    Registry of available rule classes, keyed by identifier.

    Usage
    -----
    >>> registry = RuleRegistry()
    >>> registry.register(LineLengthRule)
    >>> registry.disable("line_length")
    >>> registry.get_enabled()
    []
    """

    def __init__(self) -> None:
        self._rules: Dict[str, Type[Rule]] = {}
        self._disabled: Set[str] = set()

    def register(self, rule_cls: Type[Rule]) -> None:
        """Register a rule class."""
        self._rules[rule_cls.description.identifier] = rule_cls

    def unregister(self, identifier: str) -> None:
        """Remove a rule by identifier."""
        self._rules.pop(identifier, None)

    def disable(self, identifier: str) -> None:
        self._disabled.add(identifier)

    def enable(self, identifier: str) -> None:
        self._disabled.discard(identifier)

    def get_all(self) -> List[Type[Rule]]:
        return list(self._rules.values())

    def get_enabled(self) -> List[Type[Rule]]:
        return [
            cls for identifier, cls in self._rules.items()
            if identifier not in self._disabled
        ]

    def get_by_identifier(self, identifier: str) -> Optional[Type[Rule]]:
        return self._rules.get(identifier)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    @property
    def identifiers(self) -> List[str]:
        return sorted(self._rules.keys())


# ═════════════════════════════════════════════════════════════════════════
#  PART 4 — SUPPRESSION MANAGER
# ═════════════════════════════════════════════════════════════════════════

# Rule ids run to the end of the line; a ` - ` starts a free-text remark.
_COMMAND_RE = re.compile(
    r"swiftlint:(?P<action>enable|disable)"
    r"(?::(?P<modifier>previous|this|next))?"
    r"[^\S\n]+(?P<rules>\w+(?:[^\S\n]+\w+)*)"
)

ALL_RULES = "all"


@dataclass(frozen=True)
class _Command:
    action: str
    rules: Tuple[str, ...]
    line: int
    column: int
    modifier: Optional[str] = None

    def applies_to(self, rule_id: str) -> bool:
        return ALL_RULES in self.rules or rule_id in self.rules


class SuppressionManager:
    """
    Manages violation suppressions from multiple sources.

    Sources:
      1. Inline comments: ``// swiftlint:disable <rules>`` opens a region
         that ``// swiftlint:enable <rules>`` closes; ``:this``, ``:next``
         and ``:previous`` limit a command to one line.  ``all`` matches
         every rule.  The rule list ends at the end of its line or at
         `` - `` (``// swiftlint:disable:next line_length - long URL``).
      2. File-level suppressions (passed programmatically)
      3. Global suppressions (command-line or config)

    Usage
    -----
    >>> sm = SuppressionManager()
    >>> sm.load_inline_suppressions(file)
    >>> sm.add_global_suppression("line_length")
    >>> kept = sm.filter_violations(violations)
    """

    def __init__(self) -> None:
        # file path → commands in source order
        self._inline: Dict[str, List[_Command]] = defaultdict(list)
        # file pattern → set of rule ids
        self._file_level: Dict[str, Set[str]] = defaultdict(set)
        self._global: Set[str] = set()

    def load_inline_suppressions(self, file: SourceFile) -> None:
        """Scan the comment tokens of ``file`` for ``swiftlint:`` commands."""
        key = file.path or ""
        commands: List[_Command] = []
        for tok in file.tokens:
            if tok.kind is None or not tok.kind.is_comment:
                continue
            for match in _COMMAND_RE.finditer(tok.text):
                rules = tuple(match.group("rules").split())
                if not rules:
                    continue
                location = file.location_for_byte_offset(tok.offset)
                commands.append(_Command(
                    action=match.group("action"),
                    rules=rules,
                    line=location.line,
                    column=location.column,
                    modifier=match.group("modifier"),
                ))
        self._inline[key] = commands

    def add_file_suppression(self, rule_id: str, file_pattern: str) -> None:
        """Suppress ``rule_id`` in files matching ``file_pattern``."""
        self._file_level[file_pattern].add(rule_id)

    def add_global_suppression(self, rule_id: str) -> None:
        """Globally suppress ``rule_id``."""
        self._global.add(rule_id)

    def is_suppressed(self, violation: StyleViolation) -> bool:
        """Check whether a violation should be suppressed."""
        rid = violation.rule_id

        if rid in self._global or ALL_RULES in self._global:
            return True

        loc = violation.location

        for pattern, ids in self._file_level.items():
            if rid in ids or ALL_RULES in ids:
                if pattern == loc.file or loc.file.endswith(pattern):
                    return True
                if fnmatch.fnmatch(loc.file, pattern):
                    return True

        return self._inline_disabled(loc, rid)

    def _inline_disabled(self, loc: SourceLocation, rule_id: str) -> bool:
        disabled = False
        line_override: Optional[bool] = None
        for cmd in self._inline.get(loc.file, ()):
            if not cmd.applies_to(rule_id):
                continue
            if cmd.modifier is None:
                if (cmd.line, cmd.column) <= (loc.line, loc.column):
                    disabled = cmd.action == "disable"
                continue
            target = cmd.line + {"previous": -1, "this": 0, "next": 1}[cmd.modifier]
            if target == loc.line:
                line_override = cmd.action == "disable"
        if line_override is not None:
            return line_override
        return disabled

    def filter_violations(
        self, violations: Iterable[StyleViolation]
    ) -> List[StyleViolation]:
        """Return only non-suppressed violations."""
        return [v for v in violations if not self.is_suppressed(v)]


__all__ = [
    "RuleDescription",
    "Rule",
    "ASTRule",
    "OptInRule",
    "RuleRegistry",
    "SuppressionManager",
    "ALL_RULES",
]
