"""
swiftlint_shims — SwiftLint rule engine in Python
=================================================

Evaluates Swift source against parameterized style rules and reports
severity-tagged violations at precise source locations.

Core modules
------------
diagnostics
    Violation record, severities and ordered severity thresholds.
syntax
    Token syntax map and arena syntax tree (plus SourceKitten JSON import).
lexer
    Parsimonious PEG tokenizer producing the syntax map.
structure
    Lightweight structure recognizer producing the syntax tree.
source
    ``SourceFile``: raw text, lines, byte ranges and lazy providers.
config
    Rule configurations and ``.swiftlint.yml`` project configuration.
checkers
    Rule base classes, registry and inline suppressions.
rules
    Built-in rules: ``object_literal``, ``cyclomatic_complexity``,
    ``line_length``.
runner
    ``LintRunner`` and aggregated ``LintResults``.
conformance
    Verifies a rule against its own triggering/non-triggering examples.

Quick start
-----------
>>> from swiftlint_shims import LintRunner
>>> results = LintRunner().lint_source("let x = 1\\n")
>>> results.total_count
0

Package layout
--------------
::

    swiftlint_shims/
    ├── __init__.py            ← this file
    ├── __main__.py            ← CLI
    ├── errors.py
    ├── diagnostics.py
    ├── syntax.py
    ├── lexer.py
    ├── structure.py
    ├── source.py
    ├── config.py
    ├── checkers.py
    ├── runner.py
    ├── conformance.py
    └── rules/
        ├── object_literal.py
        ├── cyclomatic_complexity.py
        └── line_length.py
"""

from __future__ import annotations

import importlib
import logging
import sys
from typing import List

# ---------------------------------------------------------------------------
# Package metadata
# ---------------------------------------------------------------------------

__version__ = "0.1.0"
__license__ = "MIT"
__all__: List[str] = []          # populated below

_log = logging.getLogger(__name__)
_log.addHandler(logging.NullHandler())

# ---------------------------------------------------------------------------
# Internal registry: (module_name, list_of_names_to_import)
# ---------------------------------------------------------------------------

_CORE_MODULES = {
    "errors": [
        "SwiftLintShimsError",
        "ConfigurationError",
        "SyntaxShapeError",
        "SourceKittenFormatError",
    ],
    "diagnostics": [
        "ViolationSeverity",
        "SeverityThreshold",
        "first_exceeded",
        "SourceLocation",
        "StyleViolation",
    ],
    "syntax": [
        "TokenKind",
        "SyntaxToken",
        "SyntaxMap",
        "NodeKind",
        "CallArgument",
        "SyntaxNode",
        "SyntaxTree",
        "SyntaxTreeBuilder",
    ],
    "lexer": [
        "tokenize",
    ],
    "structure": [
        "build_structure",
    ],
    "source": [
        "Line",
        "SourceFile",
    ],
    "config": [
        "SeverityConfiguration",
        "SeverityLevelsConfiguration",
        "Configuration",
    ],
    "checkers": [
        "RuleDescription",
        "Rule",
        "ASTRule",
        "OptInRule",
        "RuleRegistry",
        "SuppressionManager",
    ],
    "rules": [
        "default_registry",
        "ObjectLiteralRule",
        "CyclomaticComplexityRule",
        "LineLengthRule",
    ],
    "runner": [
        "LintResults",
        "LintRunner",
    ],
    "conformance": [
        "verify_rule",
    ],
}


def _import_names(module_rel_name: str, names: List[str]) -> None:
    """Import *names* from a submodule and bind them in the package namespace."""
    mod = importlib.import_module(f"{__name__}.{module_rel_name}")
    current_module = sys.modules[__name__]
    for name in names:
        obj = getattr(mod, name, None)
        if obj is None:
            raise AttributeError(
                f"swiftlint_shims.{module_rel_name} does not export '{name}'"
            )
        setattr(current_module, name, obj)
        __all__.append(name)
    if module_rel_name not in __all__:
        __all__.append(module_rel_name)


for _mod, _names in _CORE_MODULES.items():
    _import_names(_mod, _names)

del _mod, _names
