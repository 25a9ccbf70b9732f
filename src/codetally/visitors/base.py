"""Metric visitor contract and the per-file accumulator visitors write into.

A visitor observes one parse tree and contributes values for the metrics it
declares. Visitors keep no per-run state on the instance, so one instance can
be shared by every file of a scan, across threads.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable

from ..exceptions import InvariantViolation
from ..infrastructure.metrics import Metric, get_metric_meta
from ..scanning.syntax import ParseTree


class MetricAccumulator:
    """Metric values and metadata gathered for one file before commit."""

    def __init__(self, path: str) -> None:
        self.path = path
        self._measures: dict[Metric, int] = {}
        self._metadata: dict[str, Any] = {}

    def add(self, metric: Metric, amount: int = 1) -> None:
        """Increment ``metric`` by ``amount``, creating it at 0 if absent."""
        if amount < 0:
            raise InvariantViolation("negative increment", metric=metric.name, amount=amount)
        self._measures[metric] = self._measures.get(metric, 0) + amount

    def set(self, metric: Metric, value: int) -> None:
        """Set ``metric`` to ``value``."""
        if value < 0:
            raise InvariantViolation("negative metric value", metric=metric.name, value=value)
        self._measures[metric] = value

    def annotate(self, key: str, value: Any) -> None:
        """Attach a non-metric attribute to the file entity."""
        self._metadata[key] = value

    @property
    def measures(self) -> dict[Metric, int]:
        return dict(self._measures)

    @property
    def metadata(self) -> dict[str, Any]:
        return dict(self._metadata)

    def scoped(self, owned: Iterable[Metric]) -> ScopedAccumulator:
        """A view that only accepts writes to ``owned`` metrics."""
        return ScopedAccumulator(self, owned)


class ScopedAccumulator:
    """Write access to a MetricAccumulator, restricted to a visitor's own metrics."""

    def __init__(self, target: MetricAccumulator, owned: Iterable[Metric]) -> None:
        self._target = target
        self._owned = frozenset(owned)

    @property
    def path(self) -> str:
        return self._target.path

    def _check(self, metric: Metric) -> None:
        if metric not in self._owned:
            raise InvariantViolation(
                "visitor wrote a metric it does not declare",
                metric=metric.name,
                path=self._target.path,
            )

    def add(self, metric: Metric, amount: int = 1) -> None:
        self._check(metric)
        self._target.add(metric, amount)

    def set(self, metric: Metric, value: int) -> None:
        self._check(metric)
        self._target.set(metric, value)

    def annotate(self, key: str, value: Any) -> None:
        self._target.annotate(key, value)


class MetricVisitor(ABC):
    """Base class for metric visitors.

    Subclasses set ``metrics`` to the metrics they own and implement
    observe(). Only file-scoped metrics may be owned; project totals are
    maintained by the index.
    """

    metrics: tuple[Metric, ...] = ()

    def __init__(self) -> None:
        for metric in self.metrics:
            if get_metric_meta(metric).scope != "file":
                raise ValueError(f"{type(self).__name__} cannot own project metric {metric.name}")

    @abstractmethod
    def observe(self, tree: ParseTree, accumulator: ScopedAccumulator) -> None:
        """Walk ``tree`` once and write this visitor's metrics."""
        ...

    def __repr__(self) -> str:
        owned = ", ".join(m.name for m in self.metrics)
        return f"{type(self).__name__}({owned})"
