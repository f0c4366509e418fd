"""
lexer.py — Swift tokenizer built on a Parsimonious PEG grammar
==============================================================

Produces the token stream the structure recognizer works on and the
:class:`~swiftlint_shims.syntax.SyntaxMap` that rules query.

Every character of the input is claimed by exactly one grammar rule, so
``parse`` cannot fail: anything the richer rules reject (an unterminated
string, a stray backslash) falls through to single-character
punctuation.

String literals are split the way SourceKit classifies them::

    "count: \\(items.count) items"
    ├──────┤├┤├───┤├┤├───┤├┤├──────┤
     string  │ ident │ ident │ string
          anchor   punct   anchor

so an interpolated literal never has the kind set ``{STRING}``.

Depends on:
    - parsimonious (PEG parser)
"""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from parsimonious.grammar import Grammar
from parsimonious.nodes import Node, NodeVisitor

from .syntax import SyntaxMap, SyntaxToken, TokenKind

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  PART 1 — GRAMMAR (Parsimonious PEG)
# ═══════════════════════════════════════════════════════════════════

SWIFT_TOKEN_GRAMMAR = Grammar(r'''
    source              = token*
    token               = whitespace / comment / string / number
                        / pound_word / attribute / identifier / punctuation

    whitespace          = ~r"\s+"

    comment             = doc_line_comment / line_comment / doc_block_comment
                        / block_comment
    doc_line_comment    = ~r"///[^\n]*"
    line_comment        = ~r"//[^\n]*"
    doc_block_comment   = ~r"/\*\*(?!/)[\s\S]*?\*/"
    block_comment       = ~r"/\*[\s\S]*?\*/"

    string              = multiline_string / line_string
    multiline_string    = ~r'"""[\s\S]*?"""'
    line_string         = ~r'"(?:[^"\\\n]|\\\((?:[^()"\n]|"(?:[^"\\\n]|\\.)*"|\([^()\n]*\))*\)|\\.)*"'

    number              = ~r"0x[0-9a-fA-F_]+(?:\.[0-9a-fA-F_]+)?(?:[pP][+-]?[0-9_]+)?|0b[01_]+|0o[0-7_]+|[0-9][0-9_]*(?:\.[0-9][0-9_]*)?(?:[eE][+-]?[0-9_]+)?"

    pound_word          = ~r"#[^\W\d]\w*"
    attribute           = ~r"@[^\W\d]\w*"
    identifier          = ~r"[^\W\d]\w*" / ~r"`[^`\n]+`" / ~r"\$\w+"

    punctuation         = ~r"\S"
''')


KEYWORDS = frozenset({
    # declarations
    "associatedtype", "class", "deinit", "enum", "extension", "fileprivate",
    "func", "import", "init", "inout", "internal", "let", "open", "operator",
    "private", "protocol", "public", "static", "struct", "subscript",
    "typealias", "var",
    # statements
    "break", "case", "continue", "default", "defer", "do", "else",
    "fallthrough", "for", "guard", "if", "in", "repeat", "return", "switch",
    "where", "while",
    # expressions and types
    "as", "Any", "catch", "false", "is", "nil", "rethrows", "super", "self",
    "Self", "throw", "throws", "true", "try",
    # declaration modifiers
    "convenience", "dynamic", "final", "indirect", "lazy", "mutating",
    "nonmutating", "optional", "override", "required", "unowned", "weak",
})

BUILDCONFIG_WORDS = frozenset({"#if", "#else", "#elseif", "#endif"})
OBJECT_LITERAL_WORDS = frozenset({"#colorLiteral", "#imageLiteral", "#fileLiteral"})


# ═══════════════════════════════════════════════════════════════════
#  PART 2 — TOKENS
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class LexedToken:
    """
    A lexed token.

    ``kind`` is ``None`` for punctuation and operator characters, which
    the syntax map does not classify.  ``offset``/``length`` are UTF-8
    byte positions; ``line`` is 1-based.
    """
    kind: Optional[TokenKind]
    text: str
    offset: int
    length: int
    line: int

    @property
    def end(self) -> int:
        return self.offset + self.length

    @property
    def is_punctuation(self) -> bool:
        return self.kind is None

    def is_punct(self, text: str) -> bool:
        return self.kind is None and self.text == text

    def is_keyword(self, *words: str) -> bool:
        return self.kind is TokenKind.KEYWORD and self.text in words


@dataclass(frozen=True)
class _Span:
    """Character-indexed token before byte offsets are resolved."""
    kind: Optional[TokenKind]
    start: int
    end: int


# ═══════════════════════════════════════════════════════════════════
#  PART 3 — VISITOR (Parse Tree → spans)
# ═══════════════════════════════════════════════════════════════════

class _TokenVisitor(NodeVisitor):
    """Turns the Parsimonious parse tree into character spans."""

    def __init__(self, base: int = 0) -> None:
        self._base = base

    def generic_visit(self, node: Node, visited_children: list) -> list:
        spans: List[_Span] = []
        for child in visited_children:
            if isinstance(child, list):
                spans.extend(child)
        return spans

    def _span(self, kind: Optional[TokenKind], node: Node) -> List[_Span]:
        return [_Span(kind, self._base + node.start, self._base + node.end)]

    def visit_whitespace(self, node: Node, visited_children: list) -> list:
        return []

    def visit_doc_line_comment(self, node: Node, visited_children: list) -> list:
        return self._span(TokenKind.DOC_COMMENT, node)

    def visit_line_comment(self, node: Node, visited_children: list) -> list:
        return self._span(TokenKind.COMMENT, node)

    def visit_doc_block_comment(self, node: Node, visited_children: list) -> list:
        return self._span(TokenKind.DOC_COMMENT, node)

    def visit_block_comment(self, node: Node, visited_children: list) -> list:
        return self._span(TokenKind.COMMENT, node)

    def visit_multiline_string(self, node: Node, visited_children: list) -> list:
        return _split_string(node.text, self._base + node.start, quote_len=3)

    def visit_line_string(self, node: Node, visited_children: list) -> list:
        return _split_string(node.text, self._base + node.start, quote_len=1)

    def visit_number(self, node: Node, visited_children: list) -> list:
        return self._span(TokenKind.NUMBER, node)

    def visit_pound_word(self, node: Node, visited_children: list) -> list:
        if node.text in OBJECT_LITERAL_WORDS:
            return self._span(TokenKind.OBJECT_LITERAL, node)
        if node.text in BUILDCONFIG_WORDS:
            return self._span(TokenKind.BUILDCONFIG_KEYWORD, node)
        return self._span(TokenKind.POUND_DIRECTIVE_KEYWORD, node)

    def visit_attribute(self, node: Node, visited_children: list) -> list:
        return self._span(TokenKind.ATTRIBUTE_BUILTIN, node)

    def visit_identifier(self, node: Node, visited_children: list) -> list:
        kind = TokenKind.KEYWORD if node.text in KEYWORDS else TokenKind.IDENTIFIER
        return self._span(kind, node)

    def visit_punctuation(self, node: Node, visited_children: list) -> list:
        return self._span(None, node)


def _split_string(text: str, base: int, quote_len: int) -> List[_Span]:
    """
    Split a string literal into string segments, interpolation anchors and
    the lexed tokens of each interpolated expression.
    """
    spans: List[_Span] = []
    segment_start = 0
    i = quote_len
    limit = len(text) - quote_len
    while i < limit:
        ch = text[i]
        if ch == "\\" and i + 1 < limit and text[i + 1] == "(":
            close = _interpolation_end(text, i + 2, limit)
            if close is None:
                break
            if i > segment_start:
                spans.append(_Span(TokenKind.STRING, base + segment_start, base + i))
            spans.append(
                _Span(TokenKind.STRING_INTERPOLATION_ANCHOR, base + i, base + i + 2)
            )
            spans.extend(_lex_spans(text[i + 2:close], base + i + 2))
            spans.append(
                _Span(TokenKind.STRING_INTERPOLATION_ANCHOR, base + close, base + close + 1)
            )
            segment_start = close + 1
            i = close + 1
            continue
        i += 2 if ch == "\\" else 1
    if segment_start < len(text):
        spans.append(_Span(TokenKind.STRING, base + segment_start, base + len(text)))
    return spans


def _interpolation_end(text: str, start: int, limit: int) -> Optional[int]:
    """Index of the ``)`` closing an interpolation opened just before ``start``."""
    depth = 0
    in_string = False
    i = start
    while i < limit:
        ch = text[i]
        if in_string:
            if ch == "\\":
                i += 2
                continue
            if ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "(":
            depth += 1
        elif ch == ")":
            if depth == 0:
                return i
            depth -= 1
        i += 1
    return None


def _lex_spans(text: str, base: int) -> List[_Span]:
    tree = SWIFT_TOKEN_GRAMMAR.parse(text)
    return _TokenVisitor(base).visit(tree)


# ═══════════════════════════════════════════════════════════════════
#  PART 4 — PUBLIC API
# ═══════════════════════════════════════════════════════════════════

def tokenize(contents: str) -> List[LexedToken]:
    """Lex Swift source into tokens with UTF-8 byte offsets."""
    spans = _lex_spans(contents, 0)

    if contents.isascii():
        byte_at = None
    else:
        byte_at = [0]
        for ch in contents:
            byte_at.append(byte_at[-1] + len(ch.encode("utf-8")))

    line_starts = [0]
    for i, ch in enumerate(contents):
        if ch == "\n":
            line_starts.append(i + 1)

    tokens: List[LexedToken] = []
    for span in spans:
        if byte_at is None:
            offset, end = span.start, span.end
        else:
            offset, end = byte_at[span.start], byte_at[span.end]
        tokens.append(LexedToken(
            kind=span.kind,
            text=contents[span.start:span.end],
            offset=offset,
            length=end - offset,
            line=bisect.bisect_right(line_starts, span.start),
        ))
    logger.debug("lexed %d tokens from %d characters", len(tokens), len(contents))
    return tokens


def syntax_map_from_tokens(tokens: Sequence[LexedToken]) -> SyntaxMap:
    """Keep only classified tokens, as SourceKit's syntax map does."""
    return SyntaxMap(
        SyntaxToken(tok.kind, tok.offset, tok.length)
        for tok in tokens
        if tok.kind is not None
    )


__all__ = [
    "SWIFT_TOKEN_GRAMMAR",
    "KEYWORDS",
    "LexedToken",
    "tokenize",
    "syntax_map_from_tokens",
]
