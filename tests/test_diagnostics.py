# tests/test_diagnostics.py
"""
Tests for the violation model, severity parsing and threshold evaluation.
"""

import json

import pytest

from swiftlint_shims.diagnostics import (
    SeverityThreshold,
    SourceLocation,
    StyleViolation,
    ViolationSeverity,
    first_exceeded,
)

W = ViolationSeverity.WARNING
E = ViolationSeverity.ERROR


class TestViolationSeverity:

    @pytest.mark.parametrize("raw,expected", [
        ("warning", W),
        ("error", E),
        ("ERROR ", E),
        ("Warning", W),
        (E, E),
    ])
    def test_parse(self, raw, expected):
        assert ViolationSeverity.parse(raw) is expected

    @pytest.mark.parametrize("raw", ["fatal", "", 1, None])
    def test_parse_rejects_unknown(self, raw):
        with pytest.raises(ValueError):
            ViolationSeverity.parse(raw)


class TestFirstExceeded:

    def test_at_threshold_is_not_exceeded(self):
        assert first_exceeded([SeverityThreshold(10, W)], 10) is None

    def test_above_threshold(self):
        hit = first_exceeded([SeverityThreshold(10, W)], 11)
        assert hit == SeverityThreshold(10, W)

    def test_error_first_escalates(self):
        params = [SeverityThreshold(20, E), SeverityThreshold(10, W)]
        assert first_exceeded(params, 15).severity is W
        assert first_exceeded(params, 21).severity is E

    def test_configured_order_is_respected(self):
        # Least severe first: the warning wins even though both are exceeded.
        params = [SeverityThreshold(10, W), SeverityThreshold(20, E)]
        assert first_exceeded(params, 25).severity is W

    def test_empty_list(self):
        assert first_exceeded([], 100) is None


class TestSourceLocation:

    def test_str_with_column(self):
        assert str(SourceLocation("a.swift", 3, 7)) == "a.swift:3:7"

    def test_str_line_only(self):
        assert str(SourceLocation("a.swift", 3)) == "a.swift:3"


class TestStyleViolation:

    @pytest.fixture
    def violation(self):
        return StyleViolation(
            rule_id="line_length",
            severity=W,
            location=SourceLocation("Sources/App.swift", 12),
            reason="Line should be 120 characters or less: currently 130 characters",
            rule_name="Line Length",
        )

    def test_to_json_fields(self, violation):
        assert violation.to_json() == {
            "file": "Sources/App.swift",
            "line": 12,
            "character": None,
            "severity": "Warning",
            "type": "Line Length",
            "rule_id": "line_length",
            "reason": "Line should be 120 characters or less: currently 130 characters",
        }

    def test_to_json_str_is_valid_json(self, violation):
        assert json.loads(violation.to_json_str())["rule_id"] == "line_length"

    def test_to_xcode_format(self):
        violation = StyleViolation(
            rule_id="cyclomatic_complexity",
            severity=E,
            location=SourceLocation("f.swift", 1, 5),
            reason="too complex",
            rule_name="Cyclomatic Complexity",
        )
        assert violation.to_xcode_format() == (
            "f.swift:1:5: error: Cyclomatic Complexity Violation: "
            "too complex (cyclomatic_complexity)"
        )

    def test_xcode_format_falls_back_to_rule_id(self):
        violation = StyleViolation("x", W, SourceLocation("f.swift", 2), "r")
        assert violation.to_xcode_format() == "f.swift:2: warning: x Violation: r (x)"

    def test_is_frozen(self, violation):
        with pytest.raises(AttributeError):
            violation.reason = "changed"
