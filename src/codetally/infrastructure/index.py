"""SourceIndex: the queryable hierarchy of measured entities for one scan session.

The index owns the PROJECT entity, every committed FILE entity, and the list
of files that failed to scan. It is the only shared mutable structure of a
scan: each file is committed once, atomically, under a lock, and readers
query it after the scan returns.

Usage:
    index = SourceIndex("Objective-C Project")
    index.commit("/src/main.m", {Metric.LINES: 12}, metadata={"language": "objc"})

    for entity in index.search(EntityType.FILE):
        print(entity.key, entity.measures)
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Mapping, Optional

from ..exceptions import InvariantViolation
from ..logging_config import get_logger
from .entities import Entity, EntityId, EntityType
from .metrics import Metric, get_metric_meta

logger = get_logger(__name__)


@dataclass(frozen=True)
class ScanFailure:
    """A file that produced no FILE entity.

    Attributes:
        path:   Resolved path of the file, the key its FILE entity would have.
        reason: Human-readable cause.
        error:  The exception raised by the parser adapter or file reader.
    """

    path: str
    reason: str
    error: Exception


class SourceIndex:
    """In-memory entity hierarchy: one PROJECT, any number of FILEs."""

    def __init__(self, project_name: str) -> None:
        self._lock = threading.Lock()
        self._project = Entity(EntityId(EntityType.PROJECT, project_name))
        self._entities: dict[EntityId, Entity] = {self._project.id: self._project}
        self._failures: list[ScanFailure] = []

    @property
    def project(self) -> Entity:
        """The session's PROJECT entity."""
        return self._project

    @property
    def failures(self) -> list[ScanFailure]:
        """Files that failed to scan, in the order they were recorded."""
        with self._lock:
            return list(self._failures)

    def search(self, entity_type: EntityType) -> list[Entity]:
        """All entities of the given kind. No ordering guarantee."""
        with self._lock:
            return [e for e in self._entities.values() if e.type is entity_type]

    def files(self) -> list[Entity]:
        """Shortcut for search(EntityType.FILE)."""
        return self.search(EntityType.FILE)

    def get(self, entity_id: EntityId) -> Optional[Entity]:
        """Look up an entity by id."""
        with self._lock:
            return self._entities.get(entity_id)

    def commit(
        self,
        path: str,
        measures: Mapping[Metric, int],
        metadata: Optional[dict] = None,
    ) -> Entity:
        """Publish a fully measured file.

        Creates the FILE entity, increments the project's FILES count, and
        adds the file's measures to the project totals. Re-committing a path
        already in the index replaces the earlier entity and withdraws its
        contribution from the project totals first.

        Raises:
            InvariantViolation: If a measure is negative or project-scoped.
        """
        for metric, value in measures.items():
            if get_metric_meta(metric).scope != "file":
                raise InvariantViolation(
                    "project metric written at file level", metric=metric.name, path=path
                )
            if value < 0:
                raise InvariantViolation(
                    "negative metric value", metric=metric.name, value=value, path=path
                )

        entity = Entity(
            id=EntityId(EntityType.FILE, path),
            parent=self._project.id,
            measures=dict(measures),
            metadata=dict(metadata or {}),
        )

        with self._lock:
            previous = self._entities.get(entity.id)
            if previous is not None:
                logger.warning(f"Replacing measures for re-scanned file {path}")
                self._withdraw(previous)
            else:
                self._bump(Metric.FILES, 1)

            for metric, value in entity.measures.items():
                self._bump(metric, value)
            self._entities[entity.id] = entity
            self._failures = [f for f in self._failures if f.path != path]

        return entity

    def record_failure(self, path: str, reason: str, error: Exception) -> ScanFailure:
        """Record a file that could not be measured.

        If an earlier scan of ``path`` succeeded, its FILE entity is removed
        and its measures are withdrawn from the project totals, so a path is
        never reported as both measured and failed.
        """
        failure = ScanFailure(path=path, reason=reason, error=error)
        with self._lock:
            stale = self._entities.pop(EntityId(EntityType.FILE, path), None)
            if stale is not None:
                logger.warning(f"Dropping earlier measures for {path}: re-scan failed")
                self._withdraw(stale)
                self._bump(Metric.FILES, -1)
            self._failures = [f for f in self._failures if f.path != path]
            self._failures.append(failure)
        return failure

    def _bump(self, metric: Metric, amount: int) -> None:
        measures = self._project.measures
        measures[metric] = measures.get(metric, 0) + amount

    def _withdraw(self, entity: Entity) -> None:
        for metric, value in entity.measures.items():
            self._bump(metric, -value)
