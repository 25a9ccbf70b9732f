"""Metric visitors: independent passes that each measure one concern of a parse tree."""

from .base import MetricAccumulator, MetricVisitor, ScopedAccumulator
from .comments import NO_SONAR_LINES, CommentsVisitor, is_header_comment
from .lines import LinesOfCodeVisitor, LinesVisitor

__all__ = [
    "MetricVisitor",
    "MetricAccumulator",
    "ScopedAccumulator",
    "LinesVisitor",
    "LinesOfCodeVisitor",
    "CommentsVisitor",
    "is_header_comment",
    "NO_SONAR_LINES",
]
