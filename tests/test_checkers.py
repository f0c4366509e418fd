# tests/test_checkers.py
"""
Tests for the rule base classes, the registry and inline / programmatic
suppressions.
"""

import pytest

from swiftlint_shims.checkers import (
    ALL_RULES,
    ASTRule,
    OptInRule,
    Rule,
    RuleDescription,
    RuleRegistry,
    SuppressionManager,
)
from swiftlint_shims.config import SeverityConfiguration, SeverityLevelsConfiguration
from swiftlint_shims.diagnostics import SourceLocation, StyleViolation, ViolationSeverity
from swiftlint_shims.errors import ConfigurationError
from swiftlint_shims.rules import LineLengthRule, ObjectLiteralRule
from swiftlint_shims.source import SourceFile
from swiftlint_shims.syntax import NodeKind

W = ViolationSeverity.WARNING


class _CallCounter(ASTRule):
    """Reports every call node; used to exercise the AST walk."""

    description = RuleDescription("call_counter", "Call Counter", "Calls are counted.")

    def validate_node(self, file, node):
        if node.kind is not NodeKind.CALL:
            return []
        return [self._violation(file, file.location_for_byte_offset(node.offset))]


class _Optional(OptInRule):
    description = RuleDescription("optional_rule", "Optional", "Never fires.")

    def validate(self, file):
        return []


def _violation(rule_id, line, column=0, file="f.swift"):
    return StyleViolation(rule_id, W, SourceLocation(file, line, column), "r")


class TestRuleBase:

    def test_default_configuration_is_warning_severity(self):
        rule = _CallCounter()
        assert isinstance(rule.configuration, SeverityConfiguration)
        assert rule.identifier == "call_counter"
        assert not rule.opt_in
        assert _Optional.opt_in

    def test_violation_carries_rule_metadata(self):
        (violation,) = _CallCounter().validate(SourceFile("  foo()", "a.swift"))
        assert violation.rule_id == "call_counter"
        assert violation.rule_name == "Call Counter"
        assert violation.reason == "Calls are counted."
        assert (violation.location.line, violation.location.column) == (1, 3)

    def test_configured_severity_is_used(self):
        rule = _CallCounter()
        rule.configure("error")
        (violation,) = rule.validate(SourceFile("foo()"))
        assert violation.severity is ViolationSeverity.ERROR

    def test_ast_walk_is_in_source_order(self):
        violations = _CallCounter().validate(SourceFile("a()\nb(c())\nd()"))
        assert [(v.location.line, v.location.column) for v in violations] == [
            (1, 1), (2, 1), (2, 3), (3, 1),
        ]

    def test_configure_error_names_rule(self):
        rule = LineLengthRule()
        with pytest.raises(ConfigurationError) as info:
            rule.configure({"warning": "long"})
        assert info.value.rule_id == "line_length"
        assert str(info.value).startswith("line_length: ")

    def test_explicit_configuration(self):
        rule = LineLengthRule(SeverityLevelsConfiguration(40))
        assert rule.configuration.params[0].value == 40

    def test_rule_is_abstract(self):
        with pytest.raises(TypeError):
            Rule()

    def test_repr(self):
        assert repr(ObjectLiteralRule()) == "<ObjectLiteralRule 'object_literal'>"


class TestRuleRegistry:

    @pytest.fixture
    def registry(self):
        registry = RuleRegistry()
        registry.register(LineLengthRule)
        registry.register(_Optional)
        return registry

    def test_register_and_lookup(self, registry):
        assert len(registry) == 2
        assert "line_length" in registry
        assert registry.get_by_identifier("line_length") is LineLengthRule
        assert registry.get_by_identifier("missing") is None
        assert registry.identifiers == ["line_length", "optional_rule"]

    def test_disable_enable(self, registry):
        registry.disable("line_length")
        assert registry.get_enabled() == [_Optional]
        assert len(registry.get_all()) == 2
        registry.enable("line_length")
        assert LineLengthRule in registry.get_enabled()

    def test_unregister(self, registry):
        registry.unregister("optional_rule")
        registry.unregister("never_registered")
        assert registry.identifiers == ["line_length"]


class TestSuppressionManager:

    def _manager(self, contents, path="f.swift"):
        manager = SuppressionManager()
        manager.load_inline_suppressions(SourceFile(contents, path))
        return manager

    def test_region_disable_enable(self):
        manager = self._manager(
            "a\n// swiftlint:disable line_length\nb\n// swiftlint:enable line_length\nc\n"
        )
        assert not manager.is_suppressed(_violation("line_length", 1))
        assert manager.is_suppressed(_violation("line_length", 3))
        assert not manager.is_suppressed(_violation("line_length", 5))

    def test_other_rules_unaffected(self):
        manager = self._manager("// swiftlint:disable line_length\nb\n")
        assert not manager.is_suppressed(_violation("object_literal", 2))

    def test_all_keyword(self):
        manager = self._manager(f"// swiftlint:disable {ALL_RULES}\nb\n")
        assert manager.is_suppressed(_violation("object_literal", 2))

    def test_several_rules_in_one_command(self):
        manager = self._manager("// swiftlint:disable line_length object_literal\nx\n")
        assert manager.is_suppressed(_violation("line_length", 2))
        assert manager.is_suppressed(_violation("object_literal", 2))

    def test_region_starts_at_comment_column(self):
        manager = self._manager("let x = UIImage(named: \"a\") // swiftlint:disable object_literal\n")
        assert not manager.is_suppressed(_violation("object_literal", 1, 9))
        assert manager.is_suppressed(_violation("object_literal", 1, 40))

    @pytest.mark.parametrize("modifier,source_line,suppressed_line", [
        ("this", 2, 2),
        ("next", 2, 3),
        ("previous", 2, 1),
    ])
    def test_single_line_modifiers(self, modifier, source_line, suppressed_line):
        lines = ["a", "b", "c", "d"]
        lines[source_line - 1] += f" // swiftlint:disable:{modifier} line_length"
        manager = self._manager("\n".join(lines) + "\n")
        for line in range(1, 5):
            expected = line == suppressed_line
            assert manager.is_suppressed(_violation("line_length", line)) is expected

    def test_enable_next_inside_region(self):
        manager = self._manager(
            "// swiftlint:disable line_length\n"
            "// swiftlint:enable:next line_length\n"
            "x\n"
            "y\n"
        )
        assert not manager.is_suppressed(_violation("line_length", 3))
        assert manager.is_suppressed(_violation("line_length", 4))

    def test_block_comment_command(self):
        manager = self._manager("/* swiftlint:disable line_length */\nx\n")
        assert manager.is_suppressed(_violation("line_length", 2))

    def test_rule_list_stops_at_line_end_in_block_comment(self):
        manager = self._manager(
            "/* swiftlint:disable line_length\n"
            "   object_literal is fine here */\n"
            "x\n"
        )
        assert manager.is_suppressed(_violation("line_length", 3))
        assert not manager.is_suppressed(_violation("object_literal", 3))

    def test_rule_list_must_share_the_command_line(self):
        manager = self._manager("/* swiftlint:disable\nline_length */\nx\n")
        assert not manager.is_suppressed(_violation("line_length", 3))

    def test_remark_after_dash_is_not_a_rule(self):
        manager = self._manager(
            "// swiftlint:disable:next line_length - all of these URLs are long\n"
            "x\n"
        )
        assert manager.is_suppressed(_violation("line_length", 2))
        assert not manager.is_suppressed(_violation("object_literal", 2))

    def test_commands_in_strings_are_ignored(self):
        manager = self._manager('let s = "swiftlint:disable line_length"\nx\n')
        assert not manager.is_suppressed(_violation("line_length", 2))

    def test_commands_are_per_file(self):
        manager = self._manager("// swiftlint:disable line_length\n", path="a.swift")
        assert manager.is_suppressed(_violation("line_length", 2, file="a.swift"))
        assert not manager.is_suppressed(_violation("line_length", 2, file="b.swift"))

    def test_global_suppression(self):
        manager = SuppressionManager()
        manager.add_global_suppression("line_length")
        assert manager.is_suppressed(_violation("line_length", 1))
        assert not manager.is_suppressed(_violation("object_literal", 1))

    def test_file_suppression(self):
        manager = SuppressionManager()
        manager.add_file_suppression("line_length", "Generated/*.swift")
        assert manager.is_suppressed(_violation("line_length", 1, file="Generated/M.swift"))
        assert not manager.is_suppressed(_violation("line_length", 1, file="App.swift"))

    def test_filter_violations(self):
        manager = SuppressionManager()
        manager.add_global_suppression("line_length")
        kept = manager.filter_violations([
            _violation("line_length", 1),
            _violation("object_literal", 2),
        ])
        assert [v.rule_id for v in kept] == ["object_literal"]
