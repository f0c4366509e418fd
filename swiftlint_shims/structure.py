"""
structure.py — lightweight Swift structure recognizer
=====================================================

Builds a :class:`~swiftlint_shims.syntax.SyntaxTree` from the lexer's token
stream.  This is not a Swift parser: it recognizes the brace/paren shape
of declarations, statements and calls, which is all the AST rules look
at, and degrades gracefully on anything it does not understand.

Recognized shapes
-----------------
  declarations  class/struct/enum/extension/protocol, func (free, method,
                static/class method, operator), init, deinit, subscript
  statements    if / else if / else, guard, for-in (forEach), C-style for,
                while, repeat-while, switch with case/default arms,
                do/catch/defer blocks
  expressions   calls (dotted names, labelled arguments, trailing closure),
                closures, object literals

Brackets are paired once up front; an opener without a partner simply
makes the enclosing construct run to the end of its range.  Nothing in
here raises on malformed input.

Every ``_parse_*`` method that descends into a nested range is a
generator frame: it yields the sub-frame it needs and receives that
frame's result back.  :meth:`StructureBuilder._drive` runs the frames
off one explicit work stack, so nesting depth is bounded by memory
rather than the interpreter's recursion limit.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Generator, List, Optional, Sequence, Tuple

from .lexer import LexedToken
from .syntax import (
    CallArgument,
    NodeKind,
    SyntaxNode,
    SyntaxTree,
    SyntaxTreeBuilder,
    TokenKind,
)

logger = logging.getLogger(__name__)

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {")", "]", "}"}

_TYPE_KINDS = {
    "class": NodeKind.CLASS,
    "struct": NodeKind.STRUCT,
    "enum": NodeKind.ENUM,
    "extension": NodeKind.EXTENSION,
    "protocol": NodeKind.PROTOCOL,
}

_FUNCTION_KEYWORDS = {
    "init": NodeKind.FUNCTION_CONSTRUCTOR,
    "deinit": NodeKind.FUNCTION_DESTRUCTOR,
    "subscript": NodeKind.FUNCTION_SUBSCRIPT,
}

# A declaration without a body ends where the next declaration starts.
_DECLARATION_STARTERS = frozenset({
    "func", "var", "let", "init", "deinit", "subscript", "class", "struct",
    "enum", "extension", "protocol", "typealias", "associatedtype", "case",
    "import", "static", "public", "private", "fileprivate", "internal",
    "open", "final", "override", "mutating", "nonmutating", "convenience",
    "required", "dynamic", "lazy", "weak", "unowned", "optional", "indirect",
})

_MODIFIERS = frozenset({
    "static", "class", "public", "private", "fileprivate", "internal", "open",
    "final", "override", "mutating", "nonmutating", "convenience", "required",
    "dynamic", "optional",
})

_CONDITIONAL_CASE_PREFIXES = frozenset({"if", "guard", "while", "for"})

# A parsing frame; its return value is what the frame produced.
_Frame = Generator["_Frame", Any, Any]


class StructureBuilder:
    """
    One-shot builder: ``StructureBuilder(tokens, source_length).build()``.

    Comments are dropped before recognition; every other token, including
    punctuation, takes part.
    """

    def __init__(self, tokens: Sequence[LexedToken], source_length: int) -> None:
        self._toks: List[LexedToken] = [
            tok for tok in tokens if tok.kind is None or not tok.kind.is_comment
        ]
        self._source_length = source_length
        self._match = self._pair_brackets()
        self._builder = SyntaxTreeBuilder()

    def build(self) -> SyntaxTree:
        children = self._drive(self._parse_range(0, len(self._toks), in_type=False))
        root = self._builder.add(SyntaxNode(
            kind=NodeKind.FILE,
            offset=0,
            length=self._source_length,
            children=tuple(children),
        ))
        tree = self._builder.build(root)
        logger.debug("built structure with %d nodes", len(tree))
        return tree

    # ─────────────────────────────────────────────────────────────
    # Token helpers
    # ─────────────────────────────────────────────────────────────

    def _pair_brackets(self) -> Dict[int, int]:
        match: Dict[int, int] = {}
        stack: List[int] = []
        for i, tok in enumerate(self._toks):
            if tok.kind is not None:
                continue
            if tok.text in _OPENERS:
                stack.append(i)
            elif tok.text in _CLOSERS and stack:
                if _OPENERS[self._toks[stack[-1]].text] == tok.text:
                    match[stack.pop()] = i
        return match

    def _punct(self, i: int, end: int, text: str) -> bool:
        return i < end and self._toks[i].is_punct(text)

    def _keyword(self, i: int, end: int, *words: str) -> bool:
        return i < end and self._toks[i].is_keyword(*words)

    def _close_of(self, opener: int, end: int) -> Tuple[int, int]:
        """(index of the closer, index of the last token inside the construct)."""
        close = self._match.get(opener)
        if close is None or close >= end:
            return end, end - 1
        return close, close

    def _skip(self, i: int, end: int) -> int:
        """Step over a bracket group starting at ``i`` (or a single token)."""
        tok = self._toks[i]
        if tok.kind is None and tok.text in "([":
            close, _ = self._close_of(i, end)
            return min(close + 1, end)
        return i + 1

    def _end_of(self, i: int) -> int:
        return self._toks[i].end

    def _after_dot(self, i: int) -> bool:
        return i > 0 and self._toks[i - 1].is_punct(".")

    def _adjacent(self, i: int, j: int) -> bool:
        return self._toks[i].end == self._toks[j].offset

    def _span(self, first: int, last: int) -> Tuple[int, int]:
        offset = self._toks[first].offset
        last = max(first, last)
        return offset, self._toks[last].end - offset

    def _body(self, opener: int, close: int, end: int) -> Tuple[int, int]:
        """Byte range strictly between a brace/paren and its closer."""
        body_offset = self._toks[opener].end
        if close < end:
            body_end = self._toks[close].offset
        elif end > 0 and end - 1 > opener:
            body_end = self._toks[end - 1].end
        else:
            body_end = body_offset
        return body_offset, max(0, body_end - body_offset)

    def _find_at_depth0(self, i: int, end: int, stop_else: bool = False) -> int:
        """
        Index of the ``{`` that opens a statement body (or ``else`` for
        guard), skipping parenthesized/bracketed groups; ``end`` if absent.
        """
        while i < end:
            tok = self._toks[i]
            if tok.is_punct("{") or tok.is_punct("}"):
                return i
            if stop_else and tok.is_keyword("else"):
                return i
            i = self._skip(i, end)
        return end

    def _statement_end(self, i: int, end: int, line: int) -> int:
        while i < end:
            tok = self._toks[i]
            if tok.line != line or tok.is_punct(";") or tok.is_punct("}"):
                return i
            i = self._skip(i, end)
        return end

    # ─────────────────────────────────────────────────────────────
    # Frames
    # ─────────────────────────────────────────────────────────────

    def _drive(self, frame: _Frame) -> Any:
        """
        Run ``frame`` to completion and return its result.

        A frame that yields a sub-frame is suspended until the sub-frame
        returns; the sub-frame's result is then sent back into it.
        """
        stack: List[_Frame] = [frame]
        value: Any = None
        while stack:
            try:
                sub = stack[-1].send(value)
            except StopIteration as stop:
                stack.pop()
                value = stop.value
                continue
            stack.append(sub)
            value = None
        return value

    # ─────────────────────────────────────────────────────────────
    # Ranges
    # ─────────────────────────────────────────────────────────────

    def _parse_range(self, start: int, end: int, in_type: bool) -> _Frame:
        children: List[int] = []
        i = start
        while i < end:
            node, i = yield self._parse_item(i, end, in_type)
            if node is not None:
                children.append(node)
        return children

    def _parse_item(self, i: int, end: int, in_type: bool) -> _Frame:
        tok = self._toks[i]

        if tok.kind is TokenKind.KEYWORD:
            text = tok.text
            if text == "func":
                return (yield self._parse_function(i, end, in_type))
            if text in _FUNCTION_KEYWORDS and not self._after_dot(i):
                return (yield self._parse_function(i, end, in_type))
            if text in _TYPE_KINDS and self._starts_type(i, end):
                return (yield self._parse_type(i, end))
            if text == "case" and in_type:
                return None, self._statement_end(i + 1, end, tok.line)
            if text == "if":
                return (yield self._parse_if(i, end))
            if text == "guard":
                return (yield self._parse_guard(i, end))
            if text in ("for", "while"):
                return (yield self._parse_loop(i, end))
            if text == "repeat":
                return (yield self._parse_repeat(i, end))
            if text == "switch":
                return (yield self._parse_switch(i, end))
            if text in ("do", "catch", "defer") or (
                text == "else" and self._punct(i + 1, end, "{")
            ):
                return (yield self._parse_block_statement(i, end))
            if text in ("self", "super", "Self"):
                return (yield self._parse_chain(i, end))
            return None, i + 1

        if tok.kind is TokenKind.IDENTIFIER:
            return (yield self._parse_chain(i, end))

        if tok.kind is TokenKind.OBJECT_LITERAL and self._punct(i + 1, end, "("):
            return self._parse_object_literal(i, end)

        if tok.is_punct("{"):
            return (yield self._parse_brace(i, end, NodeKind.CLOSURE))

        return None, i + 1

    # ─────────────────────────────────────────────────────────────
    # Declarations
    # ─────────────────────────────────────────────────────────────

    def _starts_type(self, i: int, end: int) -> bool:
        nxt = i + 1
        if nxt >= end:
            return False
        if self._toks[i].text == "class":
            return self._toks[nxt].kind is TokenKind.IDENTIFIER
        return self._toks[nxt].kind in (TokenKind.IDENTIFIER, TokenKind.KEYWORD)

    def _parse_type(self, i: int, end: int) -> _Frame:
        kind = _TYPE_KINDS[self._toks[i].text]
        name_parts = [self._toks[i + 1].text]
        j = i + 2
        while self._punct(j, end, ".") and j + 1 < end:
            name_parts.append(self._toks[j + 1].text)
            j += 2
        brace = self._find_at_depth0(j, end)
        if brace >= end or not self._toks[brace].is_punct("{"):
            offset, length = self._span(i, brace - 1)
            return self._builder.add(SyntaxNode(
                kind=kind, offset=offset, length=length,
                name=".".join(name_parts),
            )), brace
        close, last = self._close_of(brace, end)
        children = yield self._parse_range(brace + 1, close, in_type=True)
        offset, length = self._span(i, last)
        body_offset, body_length = self._body(brace, close, end)
        return self._builder.add(SyntaxNode(
            kind=kind,
            offset=offset,
            length=length,
            name=".".join(name_parts),
            body_offset=body_offset,
            body_length=body_length,
            children=tuple(children),
        )), min(close + 1, end)

    def _parse_function(self, i: int, end: int, in_type: bool) -> _Frame:
        keyword = self._toks[i].text
        if keyword == "func":
            name, j = self._function_name(i + 1, end)
            kind = self._function_kind(i, name, in_type)
        else:
            name, j = keyword, i + 1
            kind = _FUNCTION_KEYWORDS[keyword]

        # Body brace: first `{` at depth 0 before the next declaration.
        brace = j
        while brace < end:
            tok = self._toks[brace]
            if tok.is_punct("{") or tok.is_punct("}"):
                break
            if tok.kind is TokenKind.KEYWORD and tok.text in _DECLARATION_STARTERS:
                break
            if tok.kind is TokenKind.ATTRIBUTE_BUILTIN:
                break
            brace = self._skip(brace, end)

        if brace >= end or not self._toks[brace].is_punct("{"):
            offset, length = self._span(i, brace - 1)
            return self._builder.add(SyntaxNode(
                kind=kind, offset=offset, length=length, name=name,
            )), max(brace, i + 1)

        close, last = self._close_of(brace, end)
        children = yield self._parse_range(brace + 1, close, in_type=False)
        offset, length = self._span(i, last)
        body_offset, body_length = self._body(brace, close, end)
        return self._builder.add(SyntaxNode(
            kind=kind,
            offset=offset,
            length=length,
            name=name,
            body_offset=body_offset,
            body_length=body_length,
            children=tuple(children),
        )), min(close + 1, end)

    def _function_name(self, j: int, end: int) -> Tuple[Optional[str], int]:
        if j < end and self._toks[j].kind in (TokenKind.IDENTIFIER, TokenKind.KEYWORD):
            return self._toks[j].text.strip("`"), j + 1
        parts: List[str] = []
        while j < end and self._toks[j].kind is None and self._toks[j].text not in "({":
            parts.append(self._toks[j].text)
            j += 1
        return ("".join(parts) or None), j

    def _function_kind(self, i: int, name: Optional[str], in_type: bool) -> NodeKind:
        modifiers = set()
        k = i - 1
        while k >= 0:
            tok = self._toks[k]
            if tok.kind is TokenKind.KEYWORD and tok.text in _MODIFIERS:
                modifiers.add(tok.text)
            elif tok.kind is not TokenKind.ATTRIBUTE_BUILTIN:
                break
            k -= 1
        if in_type:
            if "static" in modifiers:
                return NodeKind.FUNCTION_METHOD_STATIC
            if "class" in modifiers:
                return NodeKind.FUNCTION_METHOD_CLASS
            return NodeKind.FUNCTION_METHOD_INSTANCE
        if name and not (name[0].isalpha() or name[0] == "_"):
            return NodeKind.FUNCTION_OPERATOR
        return NodeKind.FUNCTION_FREE

    # ─────────────────────────────────────────────────────────────
    # Statements
    # ─────────────────────────────────────────────────────────────

    def _brace_node(self, brace: int, end: int) -> _Frame:
        """Build a BRACE node for a statement body; returns (node, last)."""
        close, last = self._close_of(brace, end)
        children = yield self._parse_range(brace + 1, close, in_type=False)
        offset, length = self._span(brace, last)
        body_offset, body_length = self._body(brace, close, end)
        node = self._builder.add(SyntaxNode(
            kind=NodeKind.BRACE,
            offset=offset,
            length=length,
            body_offset=body_offset,
            body_length=body_length,
            children=tuple(children),
        ))
        return node, last

    def _statement(
        self,
        kind: NodeKind,
        i: int,
        last: int,
        children: List[int],
        body: Optional[Tuple[int, int]],
    ) -> int:
        offset, length = self._span(i, last)
        return self._builder.add(SyntaxNode(
            kind=kind,
            offset=offset,
            length=length,
            body_offset=body[0] if body else None,
            body_length=body[1] if body else None,
            children=tuple(children),
        ))

    def _parse_if(self, i: int, end: int) -> _Frame:
        cond_end = self._find_at_depth0(i + 1, end)
        children = yield self._parse_range(i + 1, cond_end, in_type=False)
        if not self._punct(cond_end, end, "{"):
            return self._statement(NodeKind.IF, i, cond_end - 1, children, None), cond_end

        close, _ = self._close_of(cond_end, end)
        body = self._body(cond_end, close, end)
        brace, last = yield self._brace_node(cond_end, end)
        children.append(brace)
        j = min(last + 1, end)

        if self._keyword(j, end, "else"):
            if self._keyword(j + 1, end, "if"):
                nested, j = yield self._parse_if(j + 1, end)
                if nested is not None:
                    children.append(nested)
                last = j - 1
            elif self._punct(j + 1, end, "{"):
                else_brace, last = yield self._brace_node(j + 1, end)
                children.append(else_brace)
                j = min(last + 1, end)

        return self._statement(NodeKind.IF, i, last, children, body), j

    def _parse_guard(self, i: int, end: int) -> _Frame:
        else_at = self._find_at_depth0(i + 1, end, stop_else=True)
        children = yield self._parse_range(i + 1, else_at, in_type=False)
        if not (self._keyword(else_at, end, "else") and self._punct(else_at + 1, end, "{")):
            return self._statement(NodeKind.GUARD, i, else_at - 1, children, None), else_at
        brace_at = else_at + 1
        close, _ = self._close_of(brace_at, end)
        body = self._body(brace_at, close, end)
        brace, last = yield self._brace_node(brace_at, end)
        children.append(brace)
        return self._statement(NodeKind.GUARD, i, last, children, body), min(last + 1, end)

    def _parse_loop(self, i: int, end: int) -> _Frame:
        keyword = self._toks[i].text
        cond_end = self._find_at_depth0(i + 1, end)
        if keyword == "while":
            kind = NodeKind.WHILE
        else:
            kind = NodeKind.FOR
            k = i + 1
            while k < cond_end:
                if self._toks[k].is_keyword("in"):
                    kind = NodeKind.FOR_EACH
                    break
                k = self._skip(k, cond_end)
        children = yield self._parse_range(i + 1, cond_end, in_type=False)
        if not self._punct(cond_end, end, "{"):
            return self._statement(kind, i, cond_end - 1, children, None), cond_end
        close, _ = self._close_of(cond_end, end)
        body = self._body(cond_end, close, end)
        brace, last = yield self._brace_node(cond_end, end)
        children.append(brace)
        return self._statement(kind, i, last, children, body), min(last + 1, end)

    def _parse_repeat(self, i: int, end: int) -> _Frame:
        if not self._punct(i + 1, end, "{"):
            return None, i + 1
        close, _ = self._close_of(i + 1, end)
        body = self._body(i + 1, close, end)
        brace, last = yield self._brace_node(i + 1, end)
        children = [brace]
        j = min(last + 1, end)
        if self._keyword(j, end, "while"):
            cond_end = self._statement_end(j + 1, end, self._toks[j].line)
            children.extend((yield self._parse_range(j + 1, cond_end, in_type=False)))
            last = max(j, cond_end - 1)
            j = cond_end
        return self._statement(NodeKind.REPEAT_WHILE, i, last, children, body), j

    def _parse_switch(self, i: int, end: int) -> _Frame:
        cond_end = self._find_at_depth0(i + 1, end)
        children = yield self._parse_range(i + 1, cond_end, in_type=False)
        if not self._punct(cond_end, end, "{"):
            return self._statement(NodeKind.SWITCH, i, cond_end - 1, children, None), cond_end

        close, last = self._close_of(cond_end, end)
        body = self._body(cond_end, close, end)

        labels: List[int] = []
        k = cond_end + 1
        while k < close:
            tok = self._toks[k]
            if tok.is_punct("{"):
                k = min(self._close_of(k, close)[0] + 1, close)
                continue
            if self._is_case_label(k):
                labels.append(k)
            k = self._skip(k, close)

        head_end = labels[0] if labels else close
        children.extend((yield self._parse_range(cond_end + 1, head_end, in_type=False)))
        for n, label in enumerate(labels):
            segment_end = labels[n + 1] if n + 1 < len(labels) else close
            children.append((yield self._parse_case(label, segment_end, end)))

        return self._statement(NodeKind.SWITCH, i, last, children, body), min(last + 1, end)

    def _is_case_label(self, k: int) -> bool:
        tok = self._toks[k]
        if tok.is_keyword("default"):
            return k + 1 < len(self._toks) and self._toks[k + 1].is_punct(":")
        if not tok.is_keyword("case"):
            return False
        prev = self._toks[k - 1] if k > 0 else None
        if prev is None:
            return True
        if prev.is_punct(","):
            return False
        return not prev.is_keyword(*_CONDITIONAL_CASE_PREFIXES)

    def _parse_case(self, label: int, segment_end: int, end: int) -> _Frame:
        colon = label + 1
        while colon < segment_end and not self._toks[colon].is_punct(":"):
            colon = self._skip(colon, segment_end)
        body_start = min(colon + 1, segment_end)
        children = yield self._parse_range(body_start, segment_end, in_type=False)

        offset, length = self._span(label, segment_end - 1)
        body_offset: Optional[int] = None
        body_length: Optional[int] = None
        if colon < segment_end:
            body_offset = self._toks[colon].end
            if segment_end < end:
                body_end = self._toks[segment_end].offset
            else:
                body_end = self._toks[segment_end - 1].end
            body_length = max(0, body_end - body_offset)
        return self._builder.add(SyntaxNode(
            kind=NodeKind.CASE,
            offset=offset,
            length=length,
            body_offset=body_offset,
            body_length=body_length,
            children=tuple(children),
        ))

    def _parse_block_statement(self, i: int, end: int) -> _Frame:
        """``do {}``, ``catch <pattern> {}``, ``defer {}`` and a bare ``else {}``."""
        brace_at = self._find_at_depth0(i + 1, end)
        children = yield self._parse_range(i + 1, brace_at, in_type=False)
        if not self._punct(brace_at, end, "{"):
            return None, max(brace_at, i + 1)
        close, last = self._close_of(brace_at, end)
        children.extend((yield self._parse_range(brace_at + 1, close, in_type=False)))
        offset, length = self._span(i, last)
        body_offset, body_length = self._body(brace_at, close, end)
        return self._builder.add(SyntaxNode(
            kind=NodeKind.BRACE,
            offset=offset,
            length=length,
            body_offset=body_offset,
            body_length=body_length,
            children=tuple(children),
        )), min(last + 1, end)

    # ─────────────────────────────────────────────────────────────
    # Expressions
    # ─────────────────────────────────────────────────────────────

    def _parse_brace(self, i: int, end: int, kind: NodeKind) -> _Frame:
        close, last = self._close_of(i, end)
        children = yield self._parse_range(i + 1, close, in_type=False)
        offset, length = self._span(i, last)
        body_offset, body_length = self._body(i, close, end)
        return self._builder.add(SyntaxNode(
            kind=kind,
            offset=offset,
            length=length,
            body_offset=body_offset,
            body_length=body_length,
            children=tuple(children),
        )), min(last + 1, end)

    def _parse_object_literal(self, i: int, end: int) -> Tuple[Optional[int], int]:
        open_at = i + 1
        close, last = self._close_of(open_at, end)
        offset, length = self._span(i, last)
        body_offset, body_length = self._body(open_at, close, end)
        return self._builder.add(SyntaxNode(
            kind=NodeKind.OBJECT_LITERAL,
            offset=offset,
            length=length,
            name=self._toks[i].text.lstrip("#"),
            body_offset=body_offset,
            body_length=body_length,
        )), min(last + 1, end)

    def _parse_chain(self, i: int, end: int) -> _Frame:
        """A dotted name; becomes a call when directly followed by ``(``."""
        parts = [self._toks[i].text]
        j = i
        while (
            self._punct(j + 1, end, ".")
            and j + 2 < end
            and self._toks[j + 2].kind in (TokenKind.IDENTIFIER, TokenKind.KEYWORD)
        ):
            parts.append(self._toks[j + 2].text)
            j += 2
        if self._punct(j + 1, end, "(") and self._adjacent(j, j + 1):
            return (yield self._parse_call(i, j + 1, ".".join(parts), end))
        return None, j + 1

    def _parse_call(self, i: int, open_at: int, name: str, end: int) -> _Frame:
        close = self._match.get(open_at)
        if close is None or close >= end:
            return None, open_at + 1

        argument_nodes: List[int] = []
        arguments: List[CallArgument] = []
        for a_start, a_end in self._split_arguments(open_at + 1, close):
            node, argument = yield self._parse_argument(a_start, a_end)
            argument_nodes.append(node)
            arguments.append(argument)

        children = list(argument_nodes)
        last = close
        trailing = close + 1
        if (
            self._punct(trailing, end, "{")
            and self._toks[trailing].line == self._toks[close].line
        ):
            closure, last = yield self._parse_brace(trailing, end, NodeKind.CLOSURE)
            if closure is not None:
                children.append(closure)
            last -= 1

        offset, length = self._span(i, last)
        body_offset, body_length = self._body(open_at, close, end)
        return self._builder.add(SyntaxNode(
            kind=NodeKind.CALL,
            offset=offset,
            length=length,
            name=name,
            body_offset=body_offset,
            body_length=body_length,
            children=tuple(children),
            arguments=tuple(arguments),
        )), last + 1

    def _split_arguments(self, start: int, end: int) -> List[Tuple[int, int]]:
        pieces: List[Tuple[int, int]] = []
        piece_start = start
        k = start
        while k < end:
            tok = self._toks[k]
            if tok.is_punct(","):
                pieces.append((piece_start, k))
                piece_start = k + 1
                k += 1
                continue
            if tok.is_punct("{"):
                k = min(self._close_of(k, end)[0] + 1, end)
                continue
            k = self._skip(k, end)
        pieces.append((piece_start, end))
        return [(a, b) for a, b in pieces if a < b]

    def _parse_argument(self, start: int, end: int) -> _Frame:
        name: Optional[str] = None
        body_start = start
        first = self._toks[start]
        if (
            end - start >= 2
            and first.kind in (TokenKind.IDENTIFIER, TokenKind.KEYWORD)
            and self._toks[start + 1].is_punct(":")
        ):
            name = first.text.strip("`")
            body_start = start + 2

        body_offset: Optional[int] = None
        body_length: Optional[int] = None
        if body_start < end:
            body_offset = self._toks[body_start].offset
            body_length = self._toks[end - 1].end - body_offset

        children = yield self._parse_range(body_start, end, in_type=False)
        offset, length = self._span(start, end - 1)
        node = self._builder.add(SyntaxNode(
            kind=NodeKind.ARGUMENT,
            offset=offset,
            length=length,
            name=name,
            body_offset=body_offset,
            body_length=body_length,
            children=tuple(children),
        ))
        return node, CallArgument(name, body_offset, body_length)


def build_structure(tokens: Sequence[LexedToken], source_length: int) -> SyntaxTree:
    """Recognize the structure of a lexed Swift file."""
    return StructureBuilder(tokens, source_length).build()


__all__ = ["StructureBuilder", "build_structure"]
