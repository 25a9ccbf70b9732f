"""Physical line and code line counters."""

from ..infrastructure.metrics import Metric
from ..scanning.syntax import ParseTree
from .base import MetricVisitor, ScopedAccumulator


class LinesVisitor(MetricVisitor):
    """Counts the physical lines of the file."""

    def __init__(self, metric: Metric = Metric.LINES) -> None:
        self.metric = metric
        self.metrics = (metric,)
        super().__init__()

    def observe(self, tree: ParseTree, accumulator: ScopedAccumulator) -> None:
        accumulator.set(self.metric, tree.line_count)


class LinesOfCodeVisitor(MetricVisitor):
    """Counts lines that hold at least one non-comment token.

    A token spanning several lines (a multi-line string, say) marks each of
    them. Lines holding only comments or whitespace are not counted.
    """

    def __init__(self, metric: Metric = Metric.LINES_OF_CODE) -> None:
        self.metric = metric
        self.metrics = (metric,)
        super().__init__()

    def observe(self, tree: ParseTree, accumulator: ScopedAccumulator) -> None:
        code_lines: set[int] = set()
        for token in tree.tokens():
            code_lines.update(token.lines())
        accumulator.set(self.metric, len(code_lines))
