# tests/test_source.py
"""
Tests for SourceFile: line splitting, byte-range access, location mapping
and lazy syntax providers.
"""

import pytest

from swiftlint_shims.source import SourceFile
from swiftlint_shims.syntax import NodeKind, SyntaxMap, SyntaxToken, TokenKind
from tests.conftest import TreeFactory


class TestLines:

    def test_mixed_terminators(self):
        src = SourceFile("a\r\nbé\n\nc")
        lines = src.lines
        assert [line.content for line in lines] == ["a", "bé", "", "c"]
        assert [line.index for line in lines] == [1, 2, 3, 4]
        assert [line.byte_offset for line in lines] == [0, 3, 7, 8]
        assert [line.byte_length for line in lines] == [1, 3, 0, 1]

    def test_trailing_newline_adds_no_line(self):
        assert len(SourceFile("a\nb\n").lines) == 2

    def test_lone_carriage_return(self):
        assert [line.content for line in SourceFile("a\rb").lines] == ["a", "b"]

    def test_empty_file(self):
        assert SourceFile("").lines == []


class TestByteAccess:

    def test_substring_by_bytes(self):
        src = SourceFile('let é = "ü"')
        assert src.substring_by_bytes(4, 2) == "é"
        assert src.substring_by_bytes(9, 4) == '"ü"'

    @pytest.mark.parametrize("offset,length", [
        (None, 1), (0, None), (-1, 1), (0, -1), (10, 5),
    ])
    def test_unresolvable_ranges(self, offset, length):
        assert SourceFile("let x = 1").substring_by_bytes(offset, length) is None

    def test_location_for_byte_offset(self):
        src = SourceFile("a\r\nbé\n\nc", "f.swift")
        loc = src.location_for_byte_offset(6)
        assert (loc.file, loc.line, loc.column, loc.byte_offset) == ("f.swift", 2, 3, 6)

    def test_location_at_line_start(self):
        src = SourceFile("a\nb")
        loc = src.location_for_byte_offset(2)
        assert (loc.line, loc.column) == (2, 1)

    def test_location_in_empty_file(self):
        loc = SourceFile("").location_for_byte_offset(0)
        assert (loc.line, loc.column) == (1, 1)

    def test_location_for_line(self):
        loc = SourceFile("x", "g.swift").location_for_line(7)
        assert (loc.file, loc.line, loc.column) == ("g.swift", 7, 0)


class TestProviders:

    def test_built_in_providers(self):
        src = SourceFile("foo(1)")
        assert src.syntax_map.kinds_in(0, 6) == {TokenKind.IDENTIFIER, TokenKind.NUMBER}
        assert [n.kind for n in src.structure.walk()][:2] == [NodeKind.FILE, NodeKind.CALL]

    def test_supplied_providers_win(self):
        smap = SyntaxMap([SyntaxToken(TokenKind.STRING, 0, 3)])
        tree = TreeFactory().tree(length=3)
        src = SourceFile("abc", syntax_map=smap, structure=tree)
        assert src.syntax_map is smap
        assert src.structure is tree
        assert src._tokens is None

    def test_from_path(self, tmp_path):
        path = tmp_path / "A.swift"
        path.write_bytes(b"let a = 1\nlet b = \xff\n")
        src = SourceFile.from_path(path)
        assert src.path == str(path)
        assert len(src.lines) == 2
        assert "�" in src.lines[1].content

    def test_repr(self):
        assert repr(SourceFile("", "x.swift")) == "<SourceFile x.swift>"
        assert repr(SourceFile("")) == "<SourceFile <memory>>"
