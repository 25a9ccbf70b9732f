"""Entity model for codetally.

Entities are the things we measure. They form a two-level hierarchy:

    Project (root, one per scan session)
        └── File

Each entity has a unique EntityId (type + key), a parent (None for the
project), and a measures map from Metric to a non-negative int.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .metrics import Metric


class EntityType(Enum):
    """The kinds of entity in the measured hierarchy."""

    PROJECT = "project"
    FILE = "file"


@dataclass(frozen=True)
class EntityId:
    """Unique identifier for any entity.

    Key conventions:
        PROJECT - project name      e.g. Objective-C Project
        FILE    - resolved path     e.g. /Users/dev/app/Sources/AppDelegate.m
    """

    type: EntityType
    key: str


@dataclass
class Entity:
    """A concrete entity in the measured hierarchy.

    Every entity has:
        - id:       unique EntityId (type + key)
        - parent:   parent EntityId (None for the project)
        - measures: Metric -> accumulated value; untouched metrics are absent
        - metadata: free-form dictionary for extra attributes
    """

    id: EntityId
    parent: Optional[EntityId] = None
    measures: dict[Metric, int] = field(default_factory=dict)
    metadata: dict = field(default_factory=dict)

    @property
    def type(self) -> EntityType:
        """Shortcut to self.id.type."""
        return self.id.type

    @property
    def key(self) -> str:
        """Shortcut to self.id.key."""
        return self.id.key

    def get(self, metric: Metric, default: Optional[int] = None) -> Optional[int]:
        """Value of ``metric``, or ``default`` when no visitor wrote it."""
        return self.measures.get(metric, default)
