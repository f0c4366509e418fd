# tests/test_lexer.py
"""
Tests for the Parsimonious-based Swift tokenizer and the syntax map it
feeds.
"""

import pytest

from swiftlint_shims.lexer import KEYWORDS, syntax_map_from_tokens, tokenize
from swiftlint_shims.syntax import TokenKind


def _kinds(source):
    return [(tok.kind, tok.text) for tok in tokenize(source)]


class TestTokenize:

    def test_empty_source(self):
        assert tokenize("") == []

    def test_declaration(self):
        assert _kinds("let x = 42") == [
            (TokenKind.KEYWORD, "let"),
            (TokenKind.IDENTIFIER, "x"),
            (None, "="),
            (TokenKind.NUMBER, "42"),
        ]

    @pytest.mark.parametrize("literal", ["0xFF", "0b1010", "0o17", "1_000", "3.14", "1e-9", "255.0"])
    def test_numbers(self, literal):
        assert _kinds(literal) == [(TokenKind.NUMBER, literal)]

    def test_comments(self):
        source = "// plain\n/// doc\n/* block */ /** doc block */"
        assert [k for k, _ in _kinds(source)] == [
            TokenKind.COMMENT,
            TokenKind.DOC_COMMENT,
            TokenKind.COMMENT,
            TokenKind.DOC_COMMENT,
        ]

    def test_comment_hides_code(self):
        assert _kinds("// if x { }") == [(TokenKind.COMMENT, "// if x { }")]

    def test_plain_string(self):
        assert _kinds('"hello \\"world\\""') == [
            (TokenKind.STRING, '"hello \\"world\\""'),
        ]

    def test_multiline_string(self):
        source = '"""\nline one\nline two\n"""'
        assert _kinds(source) == [(TokenKind.STRING, source)]

    def test_interpolated_string_is_split(self):
        tokens = tokenize('"a\\(b)c"')
        assert [(t.kind, t.text, t.offset, t.length) for t in tokens] == [
            (TokenKind.STRING, '"a', 0, 2),
            (TokenKind.STRING_INTERPOLATION_ANCHOR, "\\(", 2, 2),
            (TokenKind.IDENTIFIER, "b", 4, 1),
            (TokenKind.STRING_INTERPOLATION_ANCHOR, ")", 5, 1),
            (TokenKind.STRING, 'c"', 6, 2),
        ]

    def test_interpolation_with_call(self):
        kinds = {k for k, _ in _kinds('"\\(foo(1))"')}
        assert TokenKind.NUMBER in kinds
        assert TokenKind.STRING_INTERPOLATION_ANCHOR in kinds

    def test_unterminated_string_does_not_fail(self):
        tokens = tokenize('let s = "oops\nlet t = 1')
        assert tokens[-1].text == "1"
        assert tokens[-1].line == 2

    def test_pound_words(self):
        assert _kinds("#colorLiteral #if #selector") == [
            (TokenKind.OBJECT_LITERAL, "#colorLiteral"),
            (TokenKind.BUILDCONFIG_KEYWORD, "#if"),
            (TokenKind.POUND_DIRECTIVE_KEYWORD, "#selector"),
        ]

    def test_attribute_and_special_identifiers(self):
        assert _kinds("@objc `class` $0") == [
            (TokenKind.ATTRIBUTE_BUILTIN, "@objc"),
            (TokenKind.IDENTIFIER, "`class`"),
            (TokenKind.IDENTIFIER, "$0"),
        ]

    def test_keywords_are_classified(self):
        for word in ("func", "switch", "fallthrough", "guard"):
            assert word in KEYWORDS
            assert _kinds(word) == [(TokenKind.KEYWORD, word)]

    def test_offsets_are_utf8_bytes(self):
        tokens = tokenize('let é = "ü"')
        assert [(t.offset, t.length) for t in tokens] == [
            (0, 3), (4, 2), (7, 1), (9, 4),
        ]

    def test_line_numbers(self):
        tokens = tokenize("a\nb\n\nc")
        assert [t.line for t in tokens] == [1, 2, 4]


class TestSyntaxMapFromTokens:

    def test_punctuation_is_dropped(self):
        smap = syntax_map_from_tokens(tokenize("100 / 255.0"))
        assert [t.kind for t in smap] == [TokenKind.NUMBER, TokenKind.NUMBER]
        assert smap.kinds_in(0, 11) == {TokenKind.NUMBER}
