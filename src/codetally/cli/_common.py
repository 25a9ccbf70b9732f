"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import ScanConfig, load_config

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    language: Optional[str] = None,
    backend: Optional[str] = None,
    ignore_header_comments: Optional[bool] = None,
    workers: Optional[int] = None,
) -> ScanConfig:
    """Build scan configuration from CLI options. Unset options leave file/env values alone."""
    return load_config(
        config_file=config,
        language=language,
        parser_backend=backend,
        ignore_header_comments=ignore_header_comments,
        workers=workers,
    )
