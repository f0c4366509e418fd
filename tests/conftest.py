# tests/conftest.py
"""
Shared fixtures and helpers for the swiftlint-shims test suite.

``TreeFactory`` builds syntax trees by hand, bottom-up, for tests that need
node shapes the built-in recognizer would never produce (missing offsets,
pathological nesting).
"""

from typing import List, Optional

import pytest

from swiftlint_shims.checkers import Rule
from swiftlint_shims.diagnostics import StyleViolation
from swiftlint_shims.source import SourceFile
from swiftlint_shims.syntax import NodeKind, SyntaxNode, SyntaxTree, SyntaxTreeBuilder


class TreeFactory:
    """Bottom-up helper around :class:`SyntaxTreeBuilder`."""

    def __init__(self) -> None:
        self.builder = SyntaxTreeBuilder()

    def add(self, kind: NodeKind, *children: int, **fields) -> int:
        return self.builder.add(SyntaxNode(kind=kind, children=tuple(children), **fields))

    def tree(self, *top: int, length: int = 0) -> SyntaxTree:
        root = self.add(NodeKind.FILE, *top, offset=0, length=length)
        return self.builder.build(root)


def lint(rule: Rule, contents: str, path: Optional[str] = None) -> List[StyleViolation]:
    """Run a single rule over in-memory source."""
    return rule.validate(SourceFile(contents, path))


def nodes_of(tree: SyntaxTree, kind: NodeKind) -> List[SyntaxNode]:
    return [node for node in tree.walk() if node.kind is kind]


def function_named(tree: SyntaxTree, name: str) -> SyntaxNode:
    for node in tree.walk():
        if node.kind.is_function and node.name == name:
            return node
    raise AssertionError(f"no function named {name!r}")


@pytest.fixture
def tree_factory():
    return TreeFactory()


@pytest.fixture
def swift_project(tmp_path):
    """A small project tree with Swift and non-Swift files."""
    (tmp_path / "App.swift").write_text("let x = 1\n", encoding="utf-8")
    (tmp_path / "Long.swift").write_text("let s = \"" + "a" * 130 + "\"\n", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("x" * 300 + "\n", encoding="utf-8")
    sub = tmp_path / "Generated"
    sub.mkdir()
    (sub / "Model.swift").write_text("// " + "g" * 250 + "\n", encoding="utf-8")
    return tmp_path
