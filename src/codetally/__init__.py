"""
codetally - structural metrics for C-family source files

Parses each file into a syntax tree and runs independent metric visitors
over it: physical lines, lines of code, comment lines and blank comment
lines, gathered into a queryable project/file index.
"""

__version__ = "0.1.0"

from .config import ScanConfig, load_config
from .infrastructure import Entity, EntityType, Metric, SourceIndex
from .scanner import AstScanner, create_scanner, default_visitors, scan, scan_single_file

__all__ = [
    "scan",  # Batch entry point
    "scan_single_file",  # Single-file entry point
    "create_scanner",
    "default_visitors",
    "AstScanner",
    "ScanConfig",
    "load_config",
    "SourceIndex",
    "Entity",
    "EntityType",
    "Metric",
]
