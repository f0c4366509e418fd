"""
swiftlint_shims/runner.py
═════════════════════════

Runs a set of configured rules over source files and aggregates the
results.

    >>> runner = LintRunner()
    >>> results = runner.lint_paths(["Sources"])
    >>> print(results.summary())

A rule that raises is reported as a ``rule_internal_error`` violation for
that file and the run continues with the next rule.
"""

from __future__ import annotations

import json
import logging
import os
import time
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Union

from .checkers import Rule, RuleRegistry, SuppressionManager
from .config import Configuration
from .diagnostics import SourceLocation, StyleViolation, ViolationSeverity
from .rules import default_registry
from .source import SourceFile

logger = logging.getLogger(__name__)

INTERNAL_ERROR_ID = "rule_internal_error"
SWIFT_SUFFIX = ".swift"


# ═════════════════════════════════════════════════════════════════════════
#  PART 1 — RESULTS
# ═════════════════════════════════════════════════════════════════════════

@dataclass
class LintResults:
    """
    Aggregate results of a lint run.

    Attributes
    ----------
    violations         : all violations, per file in rule order
    violations_by_rule : violations grouped by rule identifier
    stats              : accumulated ``<rule>_elapsed_ms`` timings
    rule_ids           : identifiers of the rules that ran
    files              : files that were linted
    failed_files       : files that could not be read
    """
    violations: List[StyleViolation] = field(default_factory=list)
    violations_by_rule: Dict[str, List[StyleViolation]] = field(
        default_factory=lambda: defaultdict(list)
    )
    stats: Dict[str, float] = field(default_factory=dict)
    rule_ids: List[str] = field(default_factory=list)
    files: List[str] = field(default_factory=list)
    failed_files: List[str] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(
            1 for v in self.violations if v.severity == ViolationSeverity.ERROR
        )

    @property
    def warning_count(self) -> int:
        return sum(
            1 for v in self.violations if v.severity == ViolationSeverity.WARNING
        )

    @property
    def total_count(self) -> int:
        return len(self.violations)

    def by_severity(self, severity: ViolationSeverity) -> List[StyleViolation]:
        return [v for v in self.violations if v.severity == severity]

    def by_file(self, file: str) -> List[StyleViolation]:
        return [v for v in self.violations if v.location.file == file]

    def by_rule(self, rule_id: str) -> List[StyleViolation]:
        return list(self.violations_by_rule.get(rule_id, []))

    def merge(self, other: "LintResults") -> None:
        """Fold another run's results into this one."""
        self.violations.extend(other.violations)
        for rule_id, violations in other.violations_by_rule.items():
            self.violations_by_rule[rule_id].extend(violations)
        for key, value in other.stats.items():
            self.stats[key] = self.stats.get(key, 0.0) + value
        for rule_id in other.rule_ids:
            if rule_id not in self.rule_ids:
                self.rule_ids.append(rule_id)
        self.files.extend(other.files)
        self.failed_files.extend(other.failed_files)

    def to_json(self) -> List[Dict[str, Any]]:
        return [v.to_json() for v in self.violations]

    def to_json_str(self) -> str:
        """SwiftLint JSON reporter output (an indented array)."""
        return json.dumps(self.to_json(), indent=2)

    def to_xcode_format(self) -> str:
        return "\n".join(v.to_xcode_format() for v in self.violations)

    def summary(self) -> str:
        """Human-readable summary."""
        lines = [
            f"Done linting! Found {self.total_count} violations, "
            f"{self.error_count} serious in {len(self.files)} files.",
        ]
        for rule_id in self.rule_ids:
            count = len(self.violations_by_rule.get(rule_id, []))
            elapsed = self.stats.get(f"{rule_id}_elapsed_ms", 0.0)
            lines.append(f"  {rule_id}: {count} violations ({elapsed:.1f}ms)")
        return "\n".join(lines)


# ═════════════════════════════════════════════════════════════════════════
#  PART 2 — RUNNER
# ═════════════════════════════════════════════════════════════════════════

def iter_swift_files(
    paths: Iterable[Union[str, Path]],
    configuration: Optional[Configuration] = None,
) -> Iterator[Path]:
    """Yield ``.swift`` files under ``paths`` in sorted order, minus exclusions."""
    for path in paths:
        path = Path(path)
        if path.is_file():
            candidates: Iterable[Path] = [path]
        else:
            found: List[Path] = []
            for dirpath, dirnames, filenames in os.walk(path):
                dirnames.sort()
                found.extend(
                    Path(dirpath) / name for name in sorted(filenames)
                    if name.endswith(SWIFT_SUFFIX)
                )
            candidates = found
        for candidate in candidates:
            if configuration is not None and configuration.is_excluded(candidate):
                logger.debug("excluded %s", candidate)
                continue
            yield candidate


class LintRunner:
    """
    Runs rules against source files.

    Parameters for constructor
    ─────────────────────────
    rules         : explicit rule instances (overrides everything else)
    configuration : project configuration selecting and configuring rules
    registry      : RuleRegistry — source of rule classes
    suppressions  : SuppressionManager — global/file-level suppressions
    """

    def __init__(
        self,
        rules: Optional[Sequence[Rule]] = None,
        configuration: Optional[Configuration] = None,
        registry: Optional[RuleRegistry] = None,
        suppressions: Optional[SuppressionManager] = None,
    ) -> None:
        self.registry = registry or default_registry()
        self.configuration = configuration or Configuration()
        self.suppressions = suppressions or SuppressionManager()
        if rules is None:
            rules = self.configuration.configured_rules(self.registry)
        self.rules: List[Rule] = list(rules)

    def lint_file(self, file: SourceFile) -> LintResults:
        """Run every rule over one file."""
        results = LintResults()
        results.files.append(file.path or "")
        self.suppressions.load_inline_suppressions(file)

        for rule in self.rules:
            rule_id = rule.identifier
            results.rule_ids.append(rule_id)

            t0 = time.monotonic()
            try:
                violations = self.suppressions.filter_violations(rule.validate(file))
            except Exception as exc:
                logger.exception("rule '%s' failed on %r", rule_id, file)
                violations = [StyleViolation(
                    rule_id=INTERNAL_ERROR_ID,
                    severity=ViolationSeverity.WARNING,
                    location=SourceLocation(file=file.path or ""),
                    reason=f"Rule '{rule_id}' failed: {exc}",
                    rule_name="Rule Internal Error",
                )]
            elapsed_ms = (time.monotonic() - t0) * 1000.0

            results.violations.extend(violations)
            results.violations_by_rule[rule_id].extend(violations)
            results.stats[f"{rule_id}_elapsed_ms"] = elapsed_ms

        logger.debug("%r: %d violations", file, results.total_count)
        return results

    def lint_source(self, contents: str, path: Optional[str] = None) -> LintResults:
        return self.lint_file(SourceFile(contents, path))

    def lint_paths(self, paths: Sequence[Union[str, Path]]) -> LintResults:
        """Lint every Swift file under ``paths`` (files or directories)."""
        combined = LintResults()
        roots = []
        for root in self.configuration.lint_roots([str(p) for p in paths]):
            if root.exists():
                roots.append(root)
            else:
                logger.error("no such file or directory: %s", root)
                combined.failed_files.append(str(root))
        for path in iter_swift_files(roots, self.configuration):
            try:
                file = SourceFile.from_path(path)
            except OSError as exc:
                logger.error("cannot read %s: %s", path, exc)
                combined.failed_files.append(str(path))
                continue
            combined.merge(self.lint_file(file))
        logger.info(
            "linted %d files: %d violations",
            len(combined.files), combined.total_count,
        )
        return combined


__all__ = [
    "INTERNAL_ERROR_ID",
    "LintResults",
    "LintRunner",
    "iter_swift_files",
]
