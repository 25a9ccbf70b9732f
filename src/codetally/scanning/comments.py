"""Comment analysis: blank-line detection and delimiter stripping.

A comment family is described by its delimiters. Stripping removes exactly
``len(prefix)`` characters from the front and ``len(suffix)`` from the back,
so a new family only needs a new CommentSyntax entry.

Usage:
    analyzer = CommentAnalyzer()
    analyzer.get_contents("/* hi */")   # " hi "
    analyzer.is_blank(" * ")            # True
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..exceptions import InvariantViolation
from .syntax import LINE_BREAK


@dataclass(frozen=True)
class CommentSyntax:
    """Delimiters of one comment family.

    Attributes:
        name: Family name ("line", "block", ...)
        prefix: Opening delimiter
        suffix: Closing delimiter, empty for comments that run to end of line
    """

    name: str
    prefix: str
    suffix: str = ""

    @property
    def min_length(self) -> int:
        return len(self.prefix) + len(self.suffix)


LINE_COMMENT = CommentSyntax("line", "//")
BLOCK_COMMENT = CommentSyntax("block", "/*", "*/")

C_FAMILY_COMMENTS: tuple[CommentSyntax, ...] = (LINE_COMMENT, BLOCK_COMMENT)


class CommentAnalyzer:
    """Classifies comment text for the comment metrics."""

    def __init__(self, families: Sequence[CommentSyntax] = C_FAMILY_COMMENTS) -> None:
        if not families:
            raise ValueError("at least one comment family is required")
        # Longest prefix first so "///" would win over "//"
        self._families = tuple(sorted(families, key=lambda f: len(f.prefix), reverse=True))

    @property
    def families(self) -> tuple[CommentSyntax, ...]:
        return self._families

    @staticmethod
    def is_blank(line: str) -> bool:
        """True iff no character of ``line`` is a letter or digit."""
        return not any(ch.isalnum() for ch in line)

    def syntax_of(self, comment: str) -> CommentSyntax:
        """The family whose opening delimiter starts ``comment``.

        Raises:
            InvariantViolation: If no configured family matches.
        """
        for family in self._families:
            if comment.startswith(family.prefix):
                return family
        raise InvariantViolation("comment matches no delimiter family", comment=comment[:20])

    def get_contents(self, comment: str) -> str:
        """Strip the delimiters, leaving only the comment's own text.

        Raises:
            InvariantViolation: If the token is too short to hold its delimiters
                or lacks its closing delimiter. Parser adapters guarantee
                well-formed comments, so this means an adapter bug.
        """
        family = self.syntax_of(comment)
        if len(comment) < family.min_length:
            raise InvariantViolation(
                f"{family.name} comment shorter than its delimiters", comment=comment
            )
        if family.suffix and not comment.endswith(family.suffix):
            raise InvariantViolation(f"unterminated {family.name} comment", comment=comment[:20])
        end = len(comment) - len(family.suffix)
        return comment[len(family.prefix):end]

    @staticmethod
    def split_lines(contents: str) -> list[str]:
        """Split on any line break, keeping empty segments."""
        return LINE_BREAK.split(contents)
