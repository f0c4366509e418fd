"""
swiftlint_shims/syntax.py
═════════════════════════

Syntax model consumed by every AST rule.

Two views of a parsed Swift file are modelled here:

  ┌──────────────────────────────┐   ┌──────────────────────────────┐
  │  SyntaxMap                   │   │  SyntaxTree (arena)          │
  │  classified tokens, sorted   │   │  nodes[i].children → indices │
  │  kinds_in(offset, length)    │   │  walk() — explicit stack     │
  └──────────────────────────────┘   └──────────────────────────────┘

Both can be produced by the built-in providers (:mod:`swiftlint_shims.lexer`
and :mod:`swiftlint_shims.structure`) or imported from the JSON that
``sourcekitten syntax`` / ``sourcekitten structure`` emit.  All offsets and
lengths are UTF-8 byte offsets into the file.

Nodes are validated when they are built, so rules never have to check
optional dictionary keys: a node either has an offset or it does not.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass
from enum import Enum
from typing import (
    Any,
    FrozenSet,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
)

from .errors import SourceKittenFormatError, SyntaxShapeError


# ═════════════════════════════════════════════════════════════════════════
#  PART 1 — TOKEN KINDS & SYNTAX MAP
# ═════════════════════════════════════════════════════════════════════════

class TokenKind(Enum):
    """Lexical classification of a source span (SourceKit syntax types)."""
    KEYWORD = "source.lang.swift.syntaxtype.keyword"
    IDENTIFIER = "source.lang.swift.syntaxtype.identifier"
    TYPEIDENTIFIER = "source.lang.swift.syntaxtype.typeidentifier"
    STRING = "source.lang.swift.syntaxtype.string"
    STRING_INTERPOLATION_ANCHOR = (
        "source.lang.swift.syntaxtype.string_interpolation_anchor"
    )
    NUMBER = "source.lang.swift.syntaxtype.number"
    COMMENT = "source.lang.swift.syntaxtype.comment"
    DOC_COMMENT = "source.lang.swift.syntaxtype.doccomment"
    COMMENT_MARK = "source.lang.swift.syntaxtype.comment.mark"
    COMMENT_URL = "source.lang.swift.syntaxtype.comment.url"
    ATTRIBUTE_BUILTIN = "source.lang.swift.syntaxtype.attribute.builtin"
    ATTRIBUTE_ID = "source.lang.swift.syntaxtype.attribute.id"
    OBJECT_LITERAL = "source.lang.swift.syntaxtype.objectliteral"
    BUILDCONFIG_KEYWORD = "source.lang.swift.syntaxtype.buildconfig.keyword"
    BUILDCONFIG_ID = "source.lang.swift.syntaxtype.buildconfig.id"
    POUND_DIRECTIVE_KEYWORD = (
        "source.lang.swift.syntaxtype.pounddirective.keyword"
    )
    PLACEHOLDER = "source.lang.swift.syntaxtype.placeholder"
    OTHER = "other"

    @classmethod
    def from_uid(cls, uid: str) -> "TokenKind":
        try:
            return cls(uid)
        except ValueError:
            return cls.OTHER

    @property
    def is_comment(self) -> bool:
        return self in _COMMENT_KINDS


_COMMENT_KINDS = frozenset({
    TokenKind.COMMENT,
    TokenKind.DOC_COMMENT,
    TokenKind.COMMENT_MARK,
    TokenKind.COMMENT_URL,
})


@dataclass(frozen=True)
class SyntaxToken:
    """A classified token: kind plus byte range."""
    kind: TokenKind
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length


class SyntaxMap:
    """
    Sorted, read-only sequence of classified tokens.

    Punctuation and operators are not classified and never appear here,
    so ``100 / 255.0`` has the kind set ``{NUMBER}``.
    """

    def __init__(self, tokens: Sequence[SyntaxToken] = ()) -> None:
        self._tokens: Tuple[SyntaxToken, ...] = tuple(
            sorted(tokens, key=lambda t: (t.offset, t.length))
        )
        self._ends: List[int] = []
        running = 0
        for tok in self._tokens:
            running = max(running, tok.end)
            self._ends.append(running)

    @property
    def tokens(self) -> Tuple[SyntaxToken, ...]:
        return self._tokens

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[SyntaxToken]:
        return iter(self._tokens)

    def tokens_in(
        self, offset: Optional[int], length: Optional[int]
    ) -> List[SyntaxToken]:
        """Tokens intersecting ``[offset, offset + length)``."""
        if offset is None or length is None or length <= 0 or offset < 0:
            return []
        end = offset + length
        # _ends is non-decreasing: skip every token that finishes before us.
        start = bisect.bisect_right(self._ends, offset)
        found: List[SyntaxToken] = []
        for tok in self._tokens[start:]:
            if tok.offset >= end:
                break
            if tok.end > offset:
                found.append(tok)
        return found

    def kinds_in(
        self, offset: Optional[int], length: Optional[int]
    ) -> FrozenSet[TokenKind]:
        """Set of token kinds in a byte range; empty when unresolvable."""
        return frozenset(tok.kind for tok in self.tokens_in(offset, length))

    @classmethod
    def from_sourcekitten(cls, raw: Any) -> "SyntaxMap":
        """
        Build from ``sourcekitten syntax`` output.

        Accepts either the bare list of ``{"offset", "length", "type"}``
        entries or a mapping holding it under ``"key.syntaxmap"``.
        """
        entries = raw
        if isinstance(raw, Mapping):
            entries = raw.get("key.syntaxmap", [])
        if not isinstance(entries, list):
            raise SourceKittenFormatError("syntax map must be a list")

        tokens: List[SyntaxToken] = []
        for i, entry in enumerate(entries):
            if not isinstance(entry, Mapping):
                raise SourceKittenFormatError(f"syntax[{i}] must be an object")
            offset = _int_field(entry, ("offset", "key.offset"), f"syntax[{i}]")
            length = _int_field(entry, ("length", "key.length"), f"syntax[{i}]")
            uid = entry.get("type", entry.get("key.kind"))
            if offset is None or length is None or not isinstance(uid, str):
                raise SourceKittenFormatError(
                    f"syntax[{i}] needs integer offset/length and a string type"
                )
            tokens.append(SyntaxToken(TokenKind.from_uid(uid), offset, length))
        return cls(tokens)


# ═════════════════════════════════════════════════════════════════════════
#  PART 2 — NODE KINDS
# ═════════════════════════════════════════════════════════════════════════

class NodeKind(Enum):
    """Structural node categories (SourceKit structure kinds)."""
    FILE = "source.lang.swift.source_file"

    # expressions
    CALL = "source.lang.swift.expr.call"
    ARGUMENT = "source.lang.swift.expr.argument"
    CLOSURE = "source.lang.swift.expr.closure"
    OBJECT_LITERAL = "source.lang.swift.expr.object_literal"
    ARRAY = "source.lang.swift.expr.array"
    DICTIONARY = "source.lang.swift.expr.dictionary"

    # statements
    BRACE = "source.lang.swift.stmt.brace"
    IF = "source.lang.swift.stmt.if"
    GUARD = "source.lang.swift.stmt.guard"
    FOR = "source.lang.swift.stmt.for"
    FOR_EACH = "source.lang.swift.stmt.foreach"
    WHILE = "source.lang.swift.stmt.while"
    REPEAT_WHILE = "source.lang.swift.stmt.repeatwhile"
    SWITCH = "source.lang.swift.stmt.switch"
    CASE = "source.lang.swift.stmt.case"

    # function-like declarations
    FUNCTION_ACCESSOR_ADDRESS = "source.lang.swift.decl.function.accessor.address"
    FUNCTION_ACCESSOR_DIDSET = "source.lang.swift.decl.function.accessor.didset"
    FUNCTION_ACCESSOR_GETTER = "source.lang.swift.decl.function.accessor.getter"
    FUNCTION_ACCESSOR_MUTABLEADDRESS = (
        "source.lang.swift.decl.function.accessor.mutableaddress"
    )
    FUNCTION_ACCESSOR_SETTER = "source.lang.swift.decl.function.accessor.setter"
    FUNCTION_ACCESSOR_WILLSET = "source.lang.swift.decl.function.accessor.willset"
    FUNCTION_CONSTRUCTOR = "source.lang.swift.decl.function.constructor"
    FUNCTION_DESTRUCTOR = "source.lang.swift.decl.function.destructor"
    FUNCTION_FREE = "source.lang.swift.decl.function.free"
    FUNCTION_METHOD_CLASS = "source.lang.swift.decl.function.method.class"
    FUNCTION_METHOD_INSTANCE = "source.lang.swift.decl.function.method.instance"
    FUNCTION_METHOD_STATIC = "source.lang.swift.decl.function.method.static"
    FUNCTION_OPERATOR = "source.lang.swift.decl.function.operator"
    FUNCTION_OPERATOR_INFIX = "source.lang.swift.decl.function.operator.infix"
    FUNCTION_OPERATOR_POSTFIX = "source.lang.swift.decl.function.operator.postfix"
    FUNCTION_OPERATOR_PREFIX = "source.lang.swift.decl.function.operator.prefix"
    FUNCTION_SUBSCRIPT = "source.lang.swift.decl.function.subscript"

    # other declarations
    CLASS = "source.lang.swift.decl.class"
    STRUCT = "source.lang.swift.decl.struct"
    ENUM = "source.lang.swift.decl.enum"
    ENUM_CASE = "source.lang.swift.decl.enumcase"
    ENUM_ELEMENT = "source.lang.swift.decl.enumelement"
    EXTENSION = "source.lang.swift.decl.extension"
    PROTOCOL = "source.lang.swift.decl.protocol"
    TYPEALIAS = "source.lang.swift.decl.typealias"
    VAR_GLOBAL = "source.lang.swift.decl.var.global"
    VAR_INSTANCE = "source.lang.swift.decl.var.instance"
    VAR_LOCAL = "source.lang.swift.decl.var.local"
    VAR_PARAMETER = "source.lang.swift.decl.var.parameter"
    VAR_STATIC = "source.lang.swift.decl.var.static"
    VAR_CLASS = "source.lang.swift.decl.var.class"

    OTHER = "other"

    @classmethod
    def from_uid(cls, uid: str) -> "NodeKind":
        try:
            return cls(uid)
        except ValueError:
            return cls.OTHER

    @property
    def is_function(self) -> bool:
        return self in FUNCTION_KINDS


FUNCTION_KINDS: FrozenSet[NodeKind] = frozenset(
    kind for kind in NodeKind if kind.value.startswith(
        "source.lang.swift.decl.function."
    )
)


# ═════════════════════════════════════════════════════════════════════════
#  PART 3 — NODES
# ═════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CallArgument:
    """One argument of a call: optional label plus the value's byte range."""
    name: Optional[str] = None
    body_offset: Optional[int] = None
    body_length: Optional[int] = None


@dataclass(frozen=True)
class SyntaxNode:
    """
    A structural node.

    ``children`` holds indices into the owning :class:`SyntaxTree`, in
    source order.  ``arguments`` is only legal on ``NodeKind.CALL``.
    Offsets are optional: a provider that cannot resolve a range leaves
    it ``None`` and rules treat the node as non-matching.
    """
    kind: NodeKind
    offset: Optional[int] = None
    length: Optional[int] = None
    name: Optional[str] = None
    body_offset: Optional[int] = None
    body_length: Optional[int] = None
    children: Tuple[int, ...] = ()
    arguments: Tuple[CallArgument, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.kind, NodeKind):
            raise SyntaxShapeError(f"kind must be a NodeKind, got {self.kind!r}")
        if self.arguments and self.kind is not NodeKind.CALL:
            raise SyntaxShapeError(
                f"only call nodes carry arguments, got {self.kind.name}"
            )
        for field_name in ("offset", "length", "body_offset", "body_length"):
            value = getattr(self, field_name)
            if value is not None and value < 0:
                raise SyntaxShapeError(f"{field_name} must be >= 0, got {value}")

    @property
    def end(self) -> Optional[int]:
        if self.offset is None or self.length is None:
            return None
        return self.offset + self.length

    @property
    def argument_names(self) -> List[Optional[str]]:
        return [arg.name for arg in self.arguments]


# ═════════════════════════════════════════════════════════════════════════
#  PART 4 — ARENA TREE
# ═════════════════════════════════════════════════════════════════════════

class SyntaxTree:
    """
    Read-only arena of :class:`SyntaxNode` objects.

    Every child index must point at a node stored before its parent, which
    is what a bottom-up builder produces and what rules out cycles.
    """

    def __init__(self, nodes: Sequence[SyntaxNode], root: int) -> None:
        self._nodes: Tuple[SyntaxNode, ...] = tuple(nodes)
        if not 0 <= root < len(self._nodes):
            raise SyntaxShapeError(f"root index {root} out of range")
        for index, node in enumerate(self._nodes):
            for child in node.children:
                if not 0 <= child < index:
                    raise SyntaxShapeError(
                        f"node {index} has invalid child index {child}"
                    )
        self._root = root

    @property
    def root(self) -> SyntaxNode:
        return self._nodes[self._root]

    @property
    def nodes(self) -> Tuple[SyntaxNode, ...]:
        return self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __getitem__(self, index: int) -> SyntaxNode:
        return self._nodes[index]

    def children_of(self, node: SyntaxNode) -> List[SyntaxNode]:
        return [self._nodes[i] for i in node.children]

    def walk(self, start: Optional[SyntaxNode] = None) -> Iterator[SyntaxNode]:
        """Pre-order, source-order traversal using an explicit stack."""
        stack = [start if start is not None else self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(self._nodes[i] for i in reversed(node.children))

    @classmethod
    def from_sourcekitten(cls, raw: Mapping[str, Any]) -> "SyntaxTree":
        """
        Validate ``sourcekitten structure`` output into an arena tree.

        The top-level dictionary becomes a ``FILE`` node.  Argument
        dictionaries (``source.lang.swift.expr.argument``) stay in the
        tree as ``ARGUMENT`` children and are also summarised into the
        owning call's ``arguments``.
        """
        if not isinstance(raw, Mapping):
            raise SourceKittenFormatError("structure must be a JSON object")

        # Pre-order listing with parent positions, children in source order.
        order: List[Tuple[Mapping[str, Any], int, str]] = []
        stack: List[Tuple[Mapping[str, Any], int, str]] = [(raw, -1, "structure")]
        while stack:
            entry, parent, where = stack.pop()
            position = len(order)
            order.append((entry, parent, where))
            subs = _substructure(entry, where)
            for i in range(len(subs) - 1, -1, -1):
                stack.append((subs[i], position, f"{where}.substructure[{i}]"))

        builder = SyntaxTreeBuilder()
        child_ids: List[List[int]] = [[] for _ in order]
        arg_ids: List[List[CallArgument]] = [[] for _ in order]
        index_of: List[int] = [0] * len(order)

        # Reverse pre-order visits every child before its parent.
        for position in range(len(order) - 1, -1, -1):
            entry, parent, where = order[position]
            kind = NodeKind.FILE if parent < 0 else _node_kind(entry, where)
            children = tuple(reversed(child_ids[position]))
            arguments = tuple(reversed(arg_ids[position]))
            if kind is not NodeKind.CALL:
                arguments = ()
            name = entry.get("key.name")
            if name is not None and not isinstance(name, str):
                raise SourceKittenFormatError(f"{where}: key.name must be a string")
            index = builder.add(SyntaxNode(
                kind=kind,
                offset=_int_field(entry, ("key.offset",), where),
                length=_int_field(entry, ("key.length",), where),
                name=name,
                body_offset=_int_field(entry, ("key.bodyoffset",), where),
                body_length=_int_field(entry, ("key.bodylength",), where),
                children=children,
                arguments=arguments,
            ))
            index_of[position] = index
            if parent >= 0:
                child_ids[parent].append(index)
                if kind is NodeKind.ARGUMENT:
                    node = builder.get(index)
                    arg_ids[parent].append(CallArgument(
                        name=node.name,
                        body_offset=node.body_offset,
                        body_length=node.body_length,
                    ))

        return builder.build(index_of[0])


class SyntaxTreeBuilder:
    """Bottom-up arena builder: add children first, then their parent."""

    def __init__(self) -> None:
        self._nodes: List[SyntaxNode] = []

    def add(self, node: SyntaxNode) -> int:
        self._nodes.append(node)
        return len(self._nodes) - 1

    def get(self, index: int) -> SyntaxNode:
        return self._nodes[index]

    def build(self, root: int) -> SyntaxTree:
        return SyntaxTree(self._nodes, root)


# ═════════════════════════════════════════════════════════════════════════
#  PART 5 — SOURCEKITTEN HELPERS
# ═════════════════════════════════════════════════════════════════════════

def _int_field(
    entry: Mapping[str, Any], keys: Sequence[str], where: str
) -> Optional[int]:
    for key in keys:
        if key in entry:
            value = entry[key]
            if isinstance(value, bool) or not isinstance(value, int):
                raise SourceKittenFormatError(
                    f"{where}: {key} must be an integer, got {value!r}"
                )
            return value
    return None


def _substructure(entry: Mapping[str, Any], where: str) -> List[Mapping[str, Any]]:
    subs = entry.get("key.substructure", [])
    if not isinstance(subs, list):
        raise SourceKittenFormatError(f"{where}: key.substructure must be a list")
    for i, sub in enumerate(subs):
        if not isinstance(sub, Mapping):
            raise SourceKittenFormatError(
                f"{where}.substructure[{i}] must be an object"
            )
    return subs


def _node_kind(entry: Mapping[str, Any], where: str) -> NodeKind:
    uid = entry.get("key.kind")
    if uid is None:
        return NodeKind.OTHER
    if not isinstance(uid, str):
        raise SourceKittenFormatError(f"{where}: key.kind must be a string")
    return NodeKind.from_uid(uid)


__all__ = [
    "TokenKind",
    "SyntaxToken",
    "SyntaxMap",
    "NodeKind",
    "FUNCTION_KINDS",
    "CallArgument",
    "SyntaxNode",
    "SyntaxTree",
    "SyntaxTreeBuilder",
]
