"""Syntax models for parsed source files.

A ParseTree is the read-only contract between parser adapters and metric
visitors. Both the tree-sitter backend and the C-family lexer produce one.
The root node holds typed children; leaves carry their raw source text and
comments are flagged with ``is_comment``.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field

LINE_BREAK = re.compile(r"\r\n|\n|\r")


@dataclass(frozen=True)
class SyntaxNode:
    """One node of a parse tree.

    Attributes:
        type: Grammar node type (e.g. "identifier", "comment", "translation_unit")
        start_line: First line (1-indexed)
        start_column: Column of the first character (0-indexed)
        end_line: Last line (1-indexed, inclusive)
        text: Raw source text for leaves and comments, None for inner nodes
        children: Child nodes in source order
        is_comment: True for comment tokens
    """

    type: str
    start_line: int
    start_column: int
    end_line: int
    text: str | None = None
    children: tuple[SyntaxNode, ...] = ()
    is_comment: bool = False

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def position(self) -> tuple[int, int]:
        """(line, column) of the first character, for ordering."""
        return (self.start_line, self.start_column)

    def lines(self) -> range:
        """Physical lines spanned by this node."""
        return range(self.start_line, self.end_line + 1)


@dataclass(frozen=True)
class ParseTree:
    """An immutable parse result for a single file.

    Attributes:
        path: Path of the parsed file
        language: Language the file was parsed as
        root: Root node
        line_count: Physical lines in the source text
    """

    path: str
    language: str
    root: SyntaxNode
    line_count: int
    _tokens: tuple[SyntaxNode, ...] = field(default=(), repr=False, compare=False)
    _comments: tuple[SyntaxNode, ...] = field(default=(), repr=False, compare=False)

    def __post_init__(self) -> None:
        tokens = []
        comments = []
        for node in self.walk():
            if node.is_comment:
                comments.append(node)
            elif node.is_leaf and node.text and node.text.strip():
                tokens.append(node)
        object.__setattr__(self, "_tokens", tuple(sorted(tokens, key=lambda n: n.position)))
        object.__setattr__(self, "_comments", tuple(sorted(comments, key=lambda n: n.position)))

    def walk(self) -> Iterator[SyntaxNode]:
        """Depth-first, pre-order traversal. Comment nodes are not descended into."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            if not node.is_comment:
                stack.extend(reversed(node.children))

    def tokens(self) -> tuple[SyntaxNode, ...]:
        """Non-comment leaves with non-blank text, in source order."""
        return self._tokens

    def comments(self) -> tuple[SyntaxNode, ...]:
        """Comment tokens in source order."""
        return self._comments


def count_lines(text: str) -> int:
    """Physical line count: line breaks + 1, or 0 for empty text."""
    return len(LINE_BREAK.findall(text)) + 1 if text else 0
