"""Metric enum and registry, the fixed universe of metric identifiers.

Every metric is defined once as an enum member, and the enum is the name.
The registry maps each Metric to a MetricMeta describing where the value
lives and what it counts.

Usage:
    from codetally.infrastructure.metrics import Metric, get_metric_meta

    meta = get_metric_meta(Metric.LINES_OF_CODE)
    assert meta.scope == "file"
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Set


class Metric(Enum):
    """Every metric defined once. The string value is its stable external name."""

    FILES = "files"
    LINES = "lines"
    LINES_OF_CODE = "lines_of_code"
    COMMENT_LINES = "comment_lines"
    COMMENT_BLANK_LINES = "comment_blank_lines"


@dataclass(frozen=True)
class MetricMeta:
    """Describes a metric.

    Attributes:
        metric:      The Metric enum member.
        scope:       "file" (written by visitors) or "project" (written by the
                     orchestrator only).
        description: Human-readable description.
    """

    metric: Metric
    scope: str
    description: str

    def __post_init__(self) -> None:
        if self.scope not in ("file", "project"):
            raise ValueError(f"{self.metric.name}: scope must be 'file' or 'project'")


REGISTRY: Dict[Metric, MetricMeta] = {}


def register(meta: MetricMeta) -> None:
    """Register a metric. Each metric may be registered exactly once."""
    if meta.metric in REGISTRY:
        raise ValueError(f"Metric {meta.metric.name} is already registered")
    REGISTRY[meta.metric] = meta


def get_metric_meta(metric: Metric) -> MetricMeta:
    """Look up the metadata for a metric."""
    return REGISTRY[metric]


def metrics_by_scope(scope: str) -> Set[Metric]:
    """All metrics declared with the given scope."""
    return {m for m, meta in REGISTRY.items() if meta.scope == scope}


register(MetricMeta(Metric.FILES, "project", "Number of successfully parsed files"))
register(MetricMeta(Metric.LINES, "file", "Physical lines in the file"))
register(
    MetricMeta(
        Metric.LINES_OF_CODE,
        "file",
        "Physical lines holding at least one non-comment, non-blank token",
    )
)
register(MetricMeta(Metric.COMMENT_LINES, "file", "Physical lines carrying comment text"))
register(
    MetricMeta(
        Metric.COMMENT_BLANK_LINES,
        "file",
        "Comment lines without any letter or digit",
    )
)
