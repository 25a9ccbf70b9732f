"""Measurement infrastructure: metric registry, entity model and source index.

Usage:
    from codetally.infrastructure import EntityType, Metric, SourceIndex

    index = SourceIndex("Objective-C Project")
    files = index.search(EntityType.FILE)
"""

from .entities import Entity, EntityId, EntityType
from .index import ScanFailure, SourceIndex
from .metrics import REGISTRY, Metric, MetricMeta, get_metric_meta, metrics_by_scope

__all__ = [
    "Entity",
    "EntityId",
    "EntityType",
    "Metric",
    "MetricMeta",
    "REGISTRY",
    "get_metric_meta",
    "metrics_by_scope",
    "ScanFailure",
    "SourceIndex",
]
