"""Comment line counter.

Every line of a counted comment is a comment line; those whose text holds no
letter or digit are also blank comment lines. Lines are counted once even
when several comments share them, so COMMENT_BLANK_LINES never exceeds
COMMENT_LINES.

The two counts overlap. A four-line banner comment holding only `/*`, `*` and
`*/` gives 4 comment lines, all 4 of them blank. Counters that keep comment
lines and blank comment lines as disjoint sets would report 0 and 4 instead.
"""

from __future__ import annotations

from typing import Optional

from ..infrastructure.metrics import Metric
from ..scanning.comments import CommentAnalyzer
from ..scanning.syntax import ParseTree, SyntaxNode
from .base import MetricVisitor, ScopedAccumulator

NO_SONAR_LINES = "no_sonar_lines"


class CommentsVisitor(MetricVisitor):
    """Counts comment lines and blank comment lines.

    Args:
        comment_metric: Metric receiving the comment line count
        blank_metric: Metric receiving the blank comment line count, or None
        analyzer: Comment analyzer for the target language's delimiters
        ignore_header_comments: Skip the file's first comment when it
            precedes every code token
        no_sonar_marker: Lines containing this marker are recorded in the
            file's ``no_sonar_lines`` metadata. Counting is unaffected.
    """

    def __init__(
        self,
        comment_metric: Metric = Metric.COMMENT_LINES,
        blank_metric: Optional[Metric] = Metric.COMMENT_BLANK_LINES,
        analyzer: Optional[CommentAnalyzer] = None,
        ignore_header_comments: bool = False,
        no_sonar_marker: Optional[str] = "NOSONAR",
    ) -> None:
        self.comment_metric = comment_metric
        self.blank_metric = blank_metric
        self.metrics = (comment_metric,) if blank_metric is None else (comment_metric, blank_metric)
        self.analyzer = analyzer or CommentAnalyzer()
        self.ignore_header_comments = ignore_header_comments
        self.no_sonar_marker = no_sonar_marker
        super().__init__()

    def observe(self, tree: ParseTree, accumulator: ScopedAccumulator) -> None:
        comment_lines: set[int] = set()
        content_lines: set[int] = set()
        no_sonar_lines: set[int] = set()

        for comment in self._counted_comments(tree):
            contents = self.analyzer.get_contents(comment.text or "")
            for offset, line in enumerate(self.analyzer.split_lines(contents)):
                line_no = comment.start_line + offset
                comment_lines.add(line_no)
                if not self.analyzer.is_blank(line):
                    content_lines.add(line_no)
                if self.no_sonar_marker and self.no_sonar_marker in line:
                    no_sonar_lines.add(line_no)

        accumulator.set(self.comment_metric, len(comment_lines))
        if self.blank_metric is not None:
            accumulator.set(self.blank_metric, len(comment_lines - content_lines))
        if self.no_sonar_marker:
            accumulator.annotate(NO_SONAR_LINES, sorted(no_sonar_lines))

    def _counted_comments(self, tree: ParseTree) -> tuple[SyntaxNode, ...]:
        comments = tree.comments()
        if self.ignore_header_comments and comments and is_header_comment(tree, comments[0]):
            return comments[1:]
        return comments


def is_header_comment(tree: ParseTree, comment: SyntaxNode) -> bool:
    """True if ``comment`` is the file's first comment and no code token precedes it."""
    comments = tree.comments()
    if not comments or comments[0] is not comment:
        return False
    tokens = tree.tokens()
    return not tokens or comment.position < tokens[0].position
