"""Regex-based lexer for C-family sources (C, Objective-C).

Used when no tree-sitter grammar is installed for the target language, or
when the ``lexer`` backend is selected explicitly. It produces a flat
ParseTree: a translation_unit root whose children are the file's tokens and
comments in source order. That is all the line and comment metrics need.

Unterminated block comments, string literals and character literals are
reported as parse failures. The text of a #warning or #error line is free-form
and is kept as a single token, so an apostrophe in it is not a literal.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from ..exceptions import ParseError
from .base import SourceParser
from .syntax import LINE_BREAK, ParseTree, SyntaxNode, count_lines

_TOKEN_PATTERN = re.compile(
    r"""
    (?P<line_comment>//[^\r\n]*)
  | (?P<block_comment>/\*.*?\*/)
  | (?P<bad_block_comment>/\*)
  | (?P<string_literal>@?"(?:\\.|[^"\\\r\n])*")
  | (?P<bad_string_literal>@?")
  | (?P<char_literal>'(?:\\.|[^'\\\r\n])+')
  | (?P<bad_char_literal>')
  | (?P<preproc_message>\#[ \t]*(?:warning|error)\b(?:\\(?:\r\n|.)|[^\\\r\n/]|/(?![/*]))*)
  | (?P<preproc_directive>\#[ \t]*[A-Za-z_]\w*)
  | (?P<at_keyword>@[A-Za-z_]\w*)
  | (?P<identifier>[A-Za-z_$][\w$]*)
  | (?P<number_literal>\.?\d(?:[eEpP][+-]|[\w.])*)
  | (?P<newline>\r\n|\n|\r)
  | (?P<whitespace>[ \t\f\v]+)
  | (?P<punctuation>.)
    """,
    re.VERBOSE | re.DOTALL,
)

_COMMENT_KINDS = frozenset({"line_comment", "block_comment"})

_FAILURES = {
    "bad_block_comment": "unterminated block comment",
    "bad_string_literal": "unterminated string literal",
    "bad_char_literal": "unterminated character literal",
}


def find_line_comment(text: str) -> Optional[int]:
    """Offset of the first `//` comment in ``text`` outside string and character literals.

    Unterminated literals are skipped over rather than reported; ``text`` is
    a fragment such as a macro body, not a whole file.
    """
    for match in _TOKEN_PATTERN.finditer(text):
        if match.lastgroup == "line_comment":
            return match.start()
    return None


@dataclass
class _Cursor:
    line: int = 1
    line_start: int = 0

    def advance(self, text: str, offset: int) -> None:
        """Move past every line break in ``text``, which starts at ``offset``."""
        for brk in LINE_BREAK.finditer(text):
            self.line += 1
            self.line_start = offset + brk.end()


class CFamilyLexer(SourceParser):
    """Tokenizes C-family source text into a flat ParseTree."""

    name = "lexer"

    def parse(self, path: str, text: str) -> ParseTree:
        children: list[SyntaxNode] = []
        cursor = _Cursor()

        for match in _TOKEN_PATTERN.finditer(text):
            kind = match.lastgroup
            value = match.group()

            if kind in _FAILURES:
                raise ParseError(
                    path,
                    self.language.name,
                    f"{_FAILURES[kind]} at line {cursor.line}",
                )

            if kind == "newline":
                cursor.advance(value, match.start())
                continue
            if kind == "whitespace":
                continue

            start_line = cursor.line
            start_column = match.start() - cursor.line_start
            cursor.advance(value, match.start())

            is_comment = kind in _COMMENT_KINDS
            children.append(
                SyntaxNode(
                    type="comment" if is_comment else kind,
                    start_line=start_line,
                    start_column=start_column,
                    end_line=cursor.line,
                    text=value,
                    is_comment=is_comment,
                )
            )

        line_count = count_lines(text)
        root = SyntaxNode(
            type="translation_unit",
            start_line=1,
            start_column=0,
            end_line=max(line_count, 1),
            children=tuple(children),
        )
        return ParseTree(path=path, language=self.language.name, root=root, line_count=line_count)
