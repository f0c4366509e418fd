"""
swiftlint_shims/conformance.py
══════════════════════════════

Checks a rule against the examples in its own :class:`RuleDescription`.

  - every non-triggering example must produce no violation;
  - every triggering example must produce exactly one violation, or one
    per ``↓`` marker when markers are present, located at the markers.

A marker sits immediately before the character the violation points at.
Line-granular violations (column 0) only have to match the marker's line.

Usage
-----
>>> failures = verify_rule(LineLengthRule())
>>> assert not failures, "\\n".join(failures)
"""

from __future__ import annotations

from typing import List, Tuple, Type, Union

from .checkers import Rule
from .diagnostics import StyleViolation
from .source import SourceFile

MARKER = "↓"


def clean_example(example: str) -> str:
    """The example text with every marker removed."""
    return example.replace(MARKER, "")


def marker_positions(example: str) -> List[Tuple[int, int]]:
    """1-based ``(line, column)`` of each marker in the cleaned example."""
    positions: List[Tuple[int, int]] = []
    line, column = 1, 1
    for ch in example:
        if ch == MARKER:
            positions.append((line, column))
        elif ch == "\n":
            line, column = line + 1, 1
        else:
            column += 1
    return positions


def violations_for_example(rule: Rule, example: str) -> List[StyleViolation]:
    """Run ``rule`` alone on an example, without suppressions."""
    return rule.validate(SourceFile(clean_example(example)))


def _at(violation: StyleViolation, position: Tuple[int, int]) -> bool:
    line, column = position
    if violation.location.line != line:
        return False
    return violation.location.column in (0, column)


def verify_rule(rule: Union[Rule, Type[Rule]]) -> List[str]:
    """Return a description of every example the rule gets wrong."""
    if isinstance(rule, type):
        rule = rule()
    description = rule.description
    failures: List[str] = []

    for example in description.non_triggering_examples:
        found = violations_for_example(rule, example)
        if found:
            failures.append(
                f"{description.identifier}: non-triggering example produced "
                f"{len(found)} violation(s): {example!r}"
            )

    for example in description.triggering_examples:
        found = violations_for_example(rule, example)
        expected = marker_positions(example)
        if len(found) != max(1, len(expected)):
            failures.append(
                f"{description.identifier}: triggering example produced "
                f"{len(found)} violation(s), expected {max(1, len(expected))}: "
                f"{example!r}"
            )
            continue
        for violation, position in zip(found, expected):
            if not _at(violation, position):
                failures.append(
                    f"{description.identifier}: violation at "
                    f"{violation.location.line}:{violation.location.column}, "
                    f"expected {position[0]}:{position[1]}: {example!r}"
                )
    return failures


__all__ = [
    "MARKER",
    "clean_example",
    "marker_positions",
    "violations_for_example",
    "verify_rule",
]
