# tests/test_conformance.py
"""
Tests for the rule-example conformance checker and the built-in rules'
example sets.
"""

import pytest

from swiftlint_shims.checkers import Rule, RuleDescription
from swiftlint_shims.conformance import (
    clean_example,
    marker_positions,
    verify_rule,
)
from swiftlint_shims.rules import BUILTIN_RULES
from swiftlint_shims.source import SourceFile


class _FlagsEveryX(Rule):
    """Reports each ``x`` at its column."""

    description = RuleDescription(
        "flags_x", "Flags X", "No x allowed.",
        non_triggering_examples=("abc",),
        triggering_examples=("ab↓x", "↓x\n↓x"),
    )

    def validate(self, file: SourceFile):
        found = []
        for offset, byte in enumerate(file.data):
            if byte == ord("x"):
                found.append(self._violation(file, file.location_for_byte_offset(offset)))
        return found


class TestMarkers:

    def test_clean_example(self):
        assert clean_example("↓let ↓x") == "let x"

    def test_marker_positions(self):
        assert marker_positions("a↓b\n↓c↓") == [(1, 2), (2, 1), (2, 2)]

    def test_no_markers(self):
        assert marker_positions("abc") == []


class TestVerifyRule:

    @pytest.mark.parametrize("rule_cls", BUILTIN_RULES, ids=lambda c: c.description.identifier)
    def test_builtin_rules_pass_their_examples(self, rule_cls):
        assert verify_rule(rule_cls) == []

    def test_passing_rule(self):
        assert verify_rule(_FlagsEveryX()) == []

    def test_reports_unexpected_violation(self):
        class Broken(_FlagsEveryX):
            description = RuleDescription(
                "broken", "Broken", "d", non_triggering_examples=("x",),
            )

        (failure,) = verify_rule(Broken)
        assert "non-triggering example produced 1 violation(s)" in failure

    def test_reports_wrong_count(self):
        class Broken(_FlagsEveryX):
            description = RuleDescription(
                "broken", "Broken", "d", triggering_examples=("no match",),
            )

        (failure,) = verify_rule(Broken)
        assert "produced 0 violation(s), expected 1" in failure

    def test_reports_wrong_location(self):
        class Broken(_FlagsEveryX):
            description = RuleDescription(
                "broken", "Broken", "d", triggering_examples=("↓abx",),
            )

        (failure,) = verify_rule(Broken)
        assert "violation at 1:3, expected 1:1" in failure
