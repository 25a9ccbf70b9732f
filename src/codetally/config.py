"""Configuration loading and management for codetally.

Configuration sources are merged in priority order:
    1. Defaults (defined in ScanConfig)
    2. Global config (~/.codetally.toml)
    3. Project config (./codetally.toml)
    4. Explicit config file
    5. Environment variables (CODETALLY_* prefix)
    6. Keyword overrides (typically CLI flags)

Example:
    >>> config = load_config(ignore_header_comments=True)
    >>> config.ignore_header_comments
    True
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

ParserBackend = Literal["auto", "tree-sitter", "lexer"]

_BACKENDS = ("auto", "tree-sitter", "lexer")


@dataclass(frozen=True)
class ScanConfig:
    """Configuration for a scan session.

    Attributes:
        language: Language every file is parsed as (see scanning.languages.LANGUAGES),
            or None to pick it per file from the extension
        parser_backend: "tree-sitter", "lexer", or "auto" (tree-sitter when the
            grammar is installed, lexer otherwise)
        ignore_header_comments: Exclude the leading file comment from comment metrics
        no_sonar_marker: Marker recorded by the comment visitor for downstream
            issue filtering; it never changes counts
        encoding: Source text encoding
        workers: Thread pool size for batch scans (None or 1 = sequential)
        max_file_size_mb: Larger files are reported as failures, not parsed
        project_name: Key of the PROJECT entity
    """

    language: Optional[str] = None
    parser_backend: ParserBackend = "auto"
    ignore_header_comments: bool = False
    no_sonar_marker: str = "NOSONAR"
    encoding: str = "utf-8"
    workers: Optional[int] = None
    max_file_size_mb: float = 10.0
    project_name: str = "Objective-C Project"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.parser_backend not in _BACKENDS:
            raise ValueError(f"parser_backend must be one of {', '.join(_BACKENDS)}")
        if self.workers is not None and self.workers < 1:
            raise ValueError("workers must be at least 1")
        if self.max_file_size_mb <= 0:
            raise ValueError("max_file_size_mb must be positive")
        if not self.no_sonar_marker:
            raise ValueError("no_sonar_marker must not be empty")
        if not self.project_name:
            raise ValueError("project_name must not be empty")

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)


DEFAULT_CONFIG = ScanConfig()


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> ScanConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides; None values are ignored

    Returns:
        Validated ScanConfig instance

    Raises:
        ConfigurationError: If a config file is missing or malformed, or a
            value fails validation
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".codetally.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "codetally.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())
    merged.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(ScanConfig)}
    unknown = sorted(set(merged) - known)
    if unknown:
        raise InvalidConfigError(unknown[0], merged[unknown[0]], "unknown configuration key")

    try:
        return ScanConfig(**merged)
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from CODETALLY_* environment variables.

    Returns:
        Dict of field_name -> parsed_value for any CODETALLY_* vars found.
    """
    type_hints = get_type_hints(ScanConfig)
    result: dict[str, Any] = {}

    for field_name in ScanConfig.__dataclass_fields__:
        env_key = f"CODETALLY_{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hints[field_name])
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e)) from e
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type."""
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load a TOML file, accepting either top-level keys or a [codetally] table."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}") from e

    section = data.get("codetally")
    if isinstance(section, dict):
        return section
    return data
