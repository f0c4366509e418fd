"""
swiftlint_shims/source.py
═════════════════════════

In-memory view of one Swift file.

A :class:`SourceFile` owns the raw text and hands rules the three things
they query:

  - ``lines``       — :class:`Line` records with UTF-8 byte ranges
  - ``syntax_map``  — classified tokens (built-in lexer unless supplied)
  - ``structure``   — arena syntax tree (built-in recognizer unless supplied)

plus byte-range substrings and byte offset → line/column conversion.
Providers run lazily, so a rule that only needs lines never pays for
lexing.
"""

from __future__ import annotations

import bisect
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from .diagnostics import SourceLocation
from .lexer import LexedToken, syntax_map_from_tokens, tokenize
from .structure import build_structure
from .syntax import SyntaxMap, SyntaxTree

logger = logging.getLogger(__name__)

_LINE_RE = re.compile(r"([^\r\n]*)(\r\n|\r|\n|$)")


@dataclass(frozen=True)
class Line:
    """One source line, without its terminator. ``index`` is 1-based."""
    index: int
    content: str
    byte_offset: int
    byte_length: int


class SourceFile:
    """
    A Swift source file plus lazily built syntax providers.

    Parameters
    ----------
    contents   : the file text
    path       : optional path, used for reporting only
    syntax_map : pre-built token map (e.g. from ``sourcekitten syntax``)
    structure  : pre-built tree (e.g. from ``sourcekitten structure``)
    """

    def __init__(
        self,
        contents: str,
        path: Optional[Union[str, Path]] = None,
        *,
        syntax_map: Optional[SyntaxMap] = None,
        structure: Optional[SyntaxTree] = None,
    ) -> None:
        self.contents = contents
        self.path = str(path) if path is not None else None
        self._data: Optional[bytes] = None
        self._lines: Optional[List[Line]] = None
        self._line_offsets: Optional[List[int]] = None
        self._tokens: Optional[List[LexedToken]] = None
        self._syntax_map = syntax_map
        self._structure = structure

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "SourceFile":
        """Read a file as UTF-8 (undecodable bytes are replaced)."""
        text = Path(path).read_text(encoding="utf-8", errors="replace")
        return cls(text, path)

    def __repr__(self) -> str:
        return f"<SourceFile {self.path or '<memory>'}>"

    # ── raw text ────────────────────────────────────────────────────

    @property
    def data(self) -> bytes:
        if self._data is None:
            self._data = self.contents.encode("utf-8")
        return self._data

    @property
    def lines(self) -> List[Line]:
        if self._lines is None:
            self._lines = _split_lines(self.contents)
            self._line_offsets = [line.byte_offset for line in self._lines]
        return self._lines

    def substring_by_bytes(
        self, offset: Optional[int], length: Optional[int]
    ) -> Optional[str]:
        """Text of a byte range, or ``None`` if the range is unresolvable."""
        if offset is None or length is None or offset < 0 or length < 0:
            return None
        if offset + length > len(self.data):
            return None
        return self.data[offset:offset + length].decode("utf-8", errors="replace")

    def location_for_byte_offset(self, offset: int) -> SourceLocation:
        """Map a byte offset to a 1-based line and character column."""
        lines = self.lines
        if not lines:
            return SourceLocation(file=self.path or "", line=1, column=1,
                                  byte_offset=offset)
        assert self._line_offsets is not None
        index = max(0, bisect.bisect_right(self._line_offsets, offset) - 1)
        line = lines[index]
        prefix = self.data[line.byte_offset:max(line.byte_offset, offset)]
        column = len(prefix.decode("utf-8", errors="ignore")) + 1
        return SourceLocation(
            file=self.path or "",
            line=line.index,
            column=column,
            byte_offset=offset,
        )

    def location_for_line(self, line: int) -> SourceLocation:
        return SourceLocation(file=self.path or "", line=line)

    # ── syntax providers ────────────────────────────────────────────

    @property
    def tokens(self) -> List[LexedToken]:
        if self._tokens is None:
            self._tokens = tokenize(self.contents)
        return self._tokens

    @property
    def syntax_map(self) -> SyntaxMap:
        if self._syntax_map is None:
            self._syntax_map = syntax_map_from_tokens(self.tokens)
        return self._syntax_map

    @property
    def structure(self) -> SyntaxTree:
        if self._structure is None:
            self._structure = build_structure(self.tokens, len(self.data))
            logger.debug("%r: recognized %d structure nodes", self, len(self._structure))
        return self._structure


def _split_lines(contents: str) -> List[Line]:
    lines: List[Line] = []
    byte_offset = 0
    for match in _LINE_RE.finditer(contents):
        content, terminator = match.group(1), match.group(2)
        if not content and not terminator:
            # Final zero-width match after the last terminator.
            break
        byte_length = len(content.encode("utf-8"))
        lines.append(Line(len(lines) + 1, content, byte_offset, byte_length))
        byte_offset += byte_length + len(terminator)
    return lines


__all__ = ["Line", "SourceFile"]
