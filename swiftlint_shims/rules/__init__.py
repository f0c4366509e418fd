"""
swiftlint_shims.rules — built-in rules
"""

from __future__ import annotations

from typing import List, Type

from ..checkers import Rule, RuleRegistry
from .cyclomatic_complexity import CyclomaticComplexityRule
from .line_length import LineLengthRule
from .object_literal import ObjectLiteralRule

BUILTIN_RULES: List[Type[Rule]] = [
    CyclomaticComplexityRule,
    LineLengthRule,
    ObjectLiteralRule,
]


def default_registry() -> RuleRegistry:
    """A fresh registry holding every built-in rule."""
    registry = RuleRegistry()
    for rule_cls in BUILTIN_RULES:
        registry.register(rule_cls)
    return registry


__all__ = [
    "BUILTIN_RULES",
    "default_registry",
    "CyclomaticComplexityRule",
    "LineLengthRule",
    "ObjectLiteralRule",
]
