# tests/test_runner.py
"""
Tests for LintRunner, file discovery and result aggregation.
"""

import json
import logging

import pytest

from swiftlint_shims.checkers import Rule, RuleDescription, SuppressionManager
from swiftlint_shims.config import Configuration
from swiftlint_shims.diagnostics import ViolationSeverity
from swiftlint_shims.rules import BUILTIN_RULES, LineLengthRule, ObjectLiteralRule
from swiftlint_shims.runner import (
    INTERNAL_ERROR_ID,
    LintResults,
    LintRunner,
    iter_swift_files,
)
from swiftlint_shims.source import SourceFile


class _Exploding(Rule):
    description = RuleDescription("exploding", "Exploding", "Always fails.")

    def validate(self, file):
        raise RuntimeError("boom")


class TestIterSwiftFiles:

    def test_walks_sorted_swift_files(self, swift_project):
        found = [p.relative_to(swift_project).as_posix() for p in iter_swift_files([swift_project])]
        assert found == ["App.swift", "Long.swift", "Generated/Model.swift"]

    def test_explicit_file(self, swift_project):
        found = list(iter_swift_files([swift_project / "notes.txt"]))
        assert found == [swift_project / "notes.txt"]

    def test_exclusions(self, swift_project):
        config = Configuration(excluded=["Generated"], root=swift_project)
        found = [p.name for p in iter_swift_files([swift_project], config)]
        assert found == ["App.swift", "Long.swift"]


class TestLintRunner:

    def test_default_rules(self):
        runner = LintRunner()
        assert [r.identifier for r in runner.rules] == ["cyclomatic_complexity", "line_length"]

    def test_lint_source(self):
        runner = LintRunner(rules=[ObjectLiteralRule(), LineLengthRule()])
        results = runner.lint_source('let i = UIImage(named: "x")\n' + "a" * 130, "m.swift")
        assert [v.rule_id for v in results.violations] == ["object_literal", "line_length"]
        assert results.files == ["m.swift"]
        assert results.rule_ids == ["object_literal", "line_length"]
        assert set(results.stats) == {"object_literal_elapsed_ms", "line_length_elapsed_ms"}

    def test_inline_suppression_applies(self):
        runner = LintRunner(rules=[LineLengthRule()])
        source = "a" * 130 + " // swiftlint:disable:this line_length\n" + "b" * 130
        results = runner.lint_source(source, "s.swift")
        assert [v.location.line for v in results.violations] == [2]

    def test_global_suppression_applies(self):
        suppressions = SuppressionManager()
        suppressions.add_global_suppression("line_length")
        runner = LintRunner(rules=[LineLengthRule()], suppressions=suppressions)
        assert runner.lint_source("a" * 300).violations == []

    def test_failing_rule_is_isolated(self, caplog):
        runner = LintRunner(rules=[_Exploding(), LineLengthRule()])
        with caplog.at_level(logging.ERROR, logger="swiftlint_shims.runner"):
            results = runner.lint_source("a" * 130, "x.swift")
        internal, long_line = results.violations
        assert internal.rule_id == INTERNAL_ERROR_ID
        assert internal.severity is ViolationSeverity.WARNING
        assert internal.reason == "Rule 'exploding' failed: boom"
        assert internal.location.file == "x.swift"
        assert long_line.rule_id == "line_length"
        assert results.by_rule("exploding") == [internal]
        assert "exploding" in caplog.text

    def test_lint_paths(self, swift_project):
        runner = LintRunner(configuration=Configuration(root=swift_project))
        results = runner.lint_paths([swift_project])
        assert len(results.files) == 3
        assert results.failed_files == []
        assert [(v.location.file.endswith(name), v.severity) for v, name in zip(
            results.violations, ["Long.swift", "Model.swift"],
        )] == [(True, ViolationSeverity.WARNING), (True, ViolationSeverity.ERROR)]
        assert results.rule_ids == ["cyclomatic_complexity", "line_length"]

    def test_lint_paths_uses_included(self, swift_project):
        config = Configuration(included=["Generated"], root=swift_project)
        results = LintRunner(configuration=config).lint_paths([])
        assert [v.location.file for v in results.violations] == [
            str(swift_project / "Generated" / "Model.swift"),
        ]

    def test_missing_root_is_recorded(self, tmp_path):
        results = LintRunner().lint_paths([tmp_path / "nope"])
        assert results.failed_files == [str(tmp_path / "nope")]
        assert results.files == []


class TestLintResults:

    @pytest.fixture
    def results(self, swift_project):
        return LintRunner(configuration=Configuration(root=swift_project)).lint_paths(
            [swift_project]
        )

    def test_counts(self, results):
        assert results.error_count == 1
        assert results.warning_count == 1
        assert results.total_count == 2
        assert len(results.by_severity(ViolationSeverity.ERROR)) == 1

    def test_by_file_and_rule(self, results, swift_project):
        assert len(results.by_file(str(swift_project / "Long.swift"))) == 1
        assert len(results.by_rule("line_length")) == 2
        assert results.by_rule("cyclomatic_complexity") == []
        assert results.by_rule("unknown") == []

    def test_json(self, results):
        payload = json.loads(results.to_json_str())
        assert [entry["severity"] for entry in payload] == ["Warning", "Error"]
        assert all(entry["rule_id"] == "line_length" for entry in payload)

    def test_xcode(self, results):
        lines = results.to_xcode_format().splitlines()
        assert len(lines) == 2
        assert lines[0].endswith(
            ": warning: Line Length Violation: Line should be 120 characters "
            "or less: currently 140 characters (line_length)"
        )

    def test_summary(self, results):
        summary = results.summary().splitlines()
        assert summary[0] == "Done linting! Found 2 violations, 1 serious in 3 files."
        assert summary[1].startswith("  cyclomatic_complexity: 0 violations (")
        assert summary[2].startswith("  line_length: 2 violations (")

    def test_merge(self):
        a, b = LintResults(), LintResults()
        a.rule_ids.append("line_length")
        a.stats["line_length_elapsed_ms"] = 1.0
        b.rule_ids.extend(["line_length", "object_literal"])
        b.stats["line_length_elapsed_ms"] = 2.0
        b.files.append("b.swift")
        b.failed_files.append("c.swift")
        a.merge(b)
        assert a.rule_ids == ["line_length", "object_literal"]
        assert a.stats["line_length_elapsed_ms"] == 3.0
        assert a.files == ["b.swift"]
        assert a.failed_files == ["c.swift"]


class TestRepeatedRuns:

    SOURCE = (
        'let i = UIImage(named: "x")\n'
        "let c = UIColor(red: 1, green: 0, blue: 0, alpha: 1)\n"
        "func f() {\n" + "if x {}\n" * 11 + "}\n"
        + "let s = \"" + "a" * 130 + "\"\n"
    )

    @pytest.mark.parametrize("rule_cls", BUILTIN_RULES, ids=lambda c: c.description.identifier)
    def test_same_input_same_violations(self, rule_cls):
        rule = rule_cls()
        file = SourceFile(self.SOURCE, "r.swift")
        first = rule.validate(file)
        assert first
        assert rule.validate(file) == first
        assert rule.validate(SourceFile(self.SOURCE, "r.swift")) == first
        assert rule_cls().validate(SourceFile(self.SOURCE, "r.swift")) == first

    def test_runner_is_repeatable(self):
        rules = [cls() for cls in BUILTIN_RULES]
        runner = LintRunner(rules=rules)
        first = runner.lint_source(self.SOURCE, "r.swift").violations
        assert len(first) == 4
        assert runner.lint_source(self.SOURCE, "r.swift").violations == first
