"""Normalizer: converts tree-sitter parse trees to ParseTree.

Tree-sitter recovers from syntax errors by inserting ERROR and MISSING
nodes. Such a tree is reported as a ParseError rather than measured.

The C and Objective-C grammars lex a macro body up to the end of the line,
so a trailing `//` comment ends up inside the preproc_arg token. It is split
back out into its own comment node.
"""

from __future__ import annotations

from typing import Any

from ..exceptions import ParseError, UnsupportedLanguageError
from ..logging_config import get_logger
from .base import SourceParser
from .languages import LanguageConfig
from .lexer import find_line_comment
from .syntax import LINE_BREAK, ParseTree, SyntaxNode, count_lines
from .treesitter_parser import TreeSitterParser, get_supported_languages

logger = get_logger(__name__)


class TreeSitterSourceParser(SourceParser):
    """Parser adapter backed by a tree-sitter grammar.

    Usage:
        parser = TreeSitterSourceParser(get_language_config("objc"))
        tree = parser.parse("Foo.m", content)
    """

    name = "tree-sitter"

    def __init__(self, language: LanguageConfig, parser: TreeSitterParser | None = None):
        super().__init__(language)
        self._parser = parser or TreeSitterParser()
        if not self._parser.is_language_supported(language.grammar):
            raise UnsupportedLanguageError(language.name, get_supported_languages())

    def parse(self, path: str, text: str) -> ParseTree:
        code_bytes = text.encode("utf-8")
        tree = self._parser.parse(code_bytes, self.language.grammar)
        if tree is None:
            raise ParseError(path, self.language.name, "grammar not available")

        root = tree.root_node
        if root.has_error:
            line = self._first_error_line(root)
            raise ParseError(path, self.language.name, f"syntax error near line {line}")

        return ParseTree(
            path=path,
            language=self.language.name,
            root=self._convert(root),
            line_count=count_lines(text),
        )

    def _convert(self, node: Any) -> SyntaxNode:
        """Convert a tree-sitter node and its subtree."""
        start_row, start_col = node.start_point
        end_row, _ = node.end_point
        is_comment = node.type in self.language.comment_node_types

        children: tuple[SyntaxNode, ...] = ()
        text = None
        if is_comment or not node.children:
            text = node.text.decode("utf-8", errors="replace") if node.text else ""
        else:
            children = tuple(
                part
                for child in node.children
                for part in self._split_preproc_arg(self._convert(child))
            )

        return SyntaxNode(
            type=node.type,
            start_line=start_row + 1,
            start_column=start_col,
            end_line=end_row + 1,
            text=text,
            children=children,
            is_comment=is_comment,
        )

    @staticmethod
    def _split_preproc_arg(node: SyntaxNode) -> tuple[SyntaxNode, ...]:
        """Separate a trailing `//` comment that the grammar folds into a macro body."""
        if node.type != "preproc_arg" or not node.text:
            return (node,)
        offset = find_line_comment(node.text)
        if offset is None:
            return (node,)

        head = node.text[:offset]
        breaks = list(LINE_BREAK.finditer(head))
        start_line = node.start_line + len(breaks)
        text = node.text[offset:].rstrip()
        comment = SyntaxNode(
            type="comment",
            start_line=start_line,
            start_column=offset - breaks[-1].end() if breaks else node.start_column + offset,
            end_line=start_line + len(LINE_BREAK.findall(text)),
            text=text,
            is_comment=True,
        )

        code = head.rstrip()
        if not code:
            return (comment,)
        return (
            SyntaxNode(
                type=node.type,
                start_line=node.start_line,
                start_column=node.start_column,
                end_line=node.start_line + len(LINE_BREAK.findall(code)),
                text=code,
            ),
            comment,
        )

    @staticmethod
    def _first_error_line(root: Any) -> int:
        """1-indexed line of the first ERROR or MISSING node."""
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "ERROR" or node.is_missing:
                return int(node.start_point[0]) + 1
            stack.extend(reversed([c for c in node.children if c.has_error or c.is_missing]))
        return int(root.start_point[0]) + 1
