"""
cyclomatic_complexity — limit branching in function bodies
==========================================================

Each function-like declaration is scored independently:

  1. walk the declaration's subtree depth-first with an explicit stack,
     never entering a nested function-like declaration (it is scored on
     its own when the walk reaches it);
  2. add one for every ``forEach``, ``if``, ``case``, ``guard``, ``for``,
     ``repeatWhile`` and ``while`` node;
  3. if any ``switch`` was seen, subtract the number of ``fallthrough``
     substrings in the declaration's body text, once for the whole body.

A ``switch`` node is not counted itself; its ``case`` arms are.
"""

from __future__ import annotations

import logging
from typing import List

from ..checkers import ASTRule, RuleDescription
from ..config import SeverityLevelsConfiguration
from ..diagnostics import StyleViolation, first_exceeded
from ..source import SourceFile
from ..syntax import FUNCTION_KINDS, NodeKind, SyntaxNode

logger = logging.getLogger(__name__)

COMPLEXITY_STATEMENTS = frozenset({
    NodeKind.FOR_EACH,
    NodeKind.IF,
    NodeKind.CASE,
    NodeKind.GUARD,
    NodeKind.FOR,
    NodeKind.REPEAT_WHILE,
    NodeKind.WHILE,
})


class CyclomaticComplexityRule(ASTRule):

    description = RuleDescription(
        identifier="cyclomatic_complexity",
        name="Cyclomatic Complexity",
        description="Complexity of function bodies should be limited.",
        non_triggering_examples=(
            "func f1() {\nif true {\nfor _ in 1..5 { } }\nif false { }\n}",
            "func f(code: Int) -> Int {"
            "switch code {\n case 0: fallthrough\ncase 0: return 1\ncase 0: return 1\n"
            "case 0: return 1\ncase 0: return 1\ncase 0: return 1\ncase 0: return 1\n"
            "case 0: return 1\ncase 0: return 1\ndefault: return 1}}",
            "func f1() {"
            "if true {}; if true {}; if true {}; if true {}; if true {}; if true {}\n"
            "func f2() {\n"
            "if true {}; if true {}; if true {}; if true {}; if true {}\n"
            "}}",
        ),
        triggering_examples=(
            "↓func f1() {\n  if true {\n    if true {\n      if false {}\n    }\n"
            "  }\n  if false {}\n  let i = 0\n\n  switch i {\n  case 1: break\n"
            "  case 2: break\n  case 3: break\n  case 4: break\n default: break\n  }\n"
            "  for _ in 1...5 {\n    guard true else {\n      return\n    }\n  }\n}\n",
        ),
    )

    @classmethod
    def default_configuration(cls) -> SeverityLevelsConfiguration:
        return SeverityLevelsConfiguration(warning=10, error=20)

    def validate_node(self, file: SourceFile, node: SyntaxNode) -> List[StyleViolation]:
        if node.kind not in FUNCTION_KINDS:
            return []

        complexity = self.measure_complexity(file, node)
        threshold = first_exceeded(self.configuration.params, complexity)
        if threshold is None:
            return []

        logger.debug("%s at offset %s: complexity %d", node.name, node.offset, complexity)
        return [self._violation(
            file,
            file.location_for_byte_offset(node.offset or 0),
            severity=threshold.severity,
            reason=(
                f"Function should have complexity {self.configuration.warning} "
                f"or less: currently complexity equals {complexity}"
            ),
        )]

    def measure_complexity(self, file: SourceFile, scope: SyntaxNode) -> int:
        """Score one function-like declaration."""
        tree = file.structure
        complexity = 0
        saw_switch = False

        stack = list(reversed(tree.children_of(scope)))
        while stack:
            node = stack.pop()
            if node.kind in FUNCTION_KINDS:
                continue
            if node.kind is NodeKind.SWITCH:
                saw_switch = True
            elif node.kind in COMPLEXITY_STATEMENTS:
                complexity += 1
            stack.extend(reversed(tree.children_of(node)))

        if saw_switch:
            complexity -= self._fallthrough_count(file, scope)
        return complexity

    @staticmethod
    def _fallthrough_count(file: SourceFile, scope: SyntaxNode) -> int:
        body = file.substring_by_bytes(scope.body_offset, scope.body_length)
        return body.count("fallthrough") if body else 0
