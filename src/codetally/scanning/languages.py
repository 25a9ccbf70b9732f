"""Language configurations for the supported C-family targets.

Adding a new language:
  1. Add a LanguageConfig entry to LANGUAGES below.
  2. If it has its own tree-sitter grammar, register the module in
     treesitter_parser.py under ``grammar``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..exceptions import UnsupportedLanguageError
from .comments import C_FAMILY_COMMENTS, CommentSyntax


@dataclass(frozen=True)
class LanguageConfig:
    """Everything the scanner needs to know about a language.

    Attributes:
        name: Language name used in configuration
        extensions: File extensions (lowercase, with leading dot)
        grammar: tree-sitter grammar name
        comment_families: Comment delimiter families
        comment_node_types: tree-sitter node types that are comments
    """

    name: str
    extensions: tuple[str, ...]
    grammar: str
    comment_families: tuple[CommentSyntax, ...] = C_FAMILY_COMMENTS
    comment_node_types: tuple[str, ...] = ("comment",)


DEFAULT_LANGUAGE = "objc"

LANGUAGES = {
    "objc": LanguageConfig(
        name="objc",
        extensions=(".m", ".mm", ".h"),
        grammar="objc",
    ),
    "c": LanguageConfig(
        name="c",
        extensions=(".c", ".h"),
        grammar="c",
    ),
}


def get_language_config(name: str) -> LanguageConfig:
    """Look up a language by name.

    Raises:
        UnsupportedLanguageError: If the language is unknown.
    """
    config = LANGUAGES.get(name)
    if config is None:
        raise UnsupportedLanguageError(name, sorted(LANGUAGES))
    return config


def detect_language(path: Path, default: str = DEFAULT_LANGUAGE) -> str:
    """Guess the language from a file extension; ``default`` wins for shared ones (.h)."""
    suffix = path.suffix.lower()
    if suffix in LANGUAGES[default].extensions:
        return default
    for name, config in LANGUAGES.items():
        if suffix in config.extensions:
            return name
    return default
