"""Exception hierarchy for codetally."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    ParseError,
    UnsupportedLanguageError,
)
from .base import CodetallyError, InvariantViolation, PreconditionError
from .config import ConfigurationError, InvalidConfigError

__all__ = [
    "CodetallyError",
    "PreconditionError",
    "InvariantViolation",
    "AnalysisError",
    "FileAccessError",
    "ParseError",
    "UnsupportedLanguageError",
    "ConfigurationError",
    "InvalidConfigError",
]
