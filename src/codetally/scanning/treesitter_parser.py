"""Tree-sitter parser wrapper.

Provides a unified interface for tree-sitter parsing across the supported
grammars. tree-sitter and its grammars are an optional dependency (the
``parsing`` extra); availability is reported through TREE_SITTER_AVAILABLE
and get_supported_languages().

Usage:
    if "objc" in get_supported_languages():
        parser = TreeSitterParser()
        tree = parser.parse(code_bytes, "objc")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..logging_config import get_logger

logger = get_logger(__name__)

TREE_SITTER_AVAILABLE = False
_tree_sitter_module: Any = None
_language_modules: dict[str, Any] = {}

try:
    import tree_sitter as _tree_sitter_module  # type: ignore[no-redef]

    TREE_SITTER_AVAILABLE = True

    try:
        import tree_sitter_objc

        _language_modules["objc"] = tree_sitter_objc
    except ImportError:
        pass

    try:
        import tree_sitter_c

        _language_modules["c"] = tree_sitter_c
    except ImportError:
        pass

except ImportError:
    TREE_SITTER_AVAILABLE = False


if TYPE_CHECKING:

    class Node:
        text: bytes | None
        type: str
        start_point: tuple[int, int]
        end_point: tuple[int, int]
        children: list[Node]
        has_error: bool

    class Tree:
        root_node: Node


def get_supported_languages() -> list[str]:
    """Get list of grammars that are installed."""
    if not TREE_SITTER_AVAILABLE:
        return []
    return list(_language_modules.keys())


class TreeSitterParser:
    """Wrapper around tree-sitter for multi-grammar parsing.

    Check TREE_SITTER_AVAILABLE before using, or check if parse() returns None.
    """

    def __init__(self) -> None:
        """Initialize parsers for every installed grammar."""
        self._parsers: dict[str, Any] = {}

        if not TREE_SITTER_AVAILABLE:
            return

        for grammar, module in _language_modules.items():
            lang_fn = getattr(module, f"language_{grammar}", None) or getattr(
                module, "language", None
            )
            if lang_fn is None:
                continue
            try:
                # tree-sitter >= 0.23 returns a PyCapsule; wrap in Language()
                lang_obj = _tree_sitter_module.Language(lang_fn())
                self._parsers[grammar] = _tree_sitter_module.Parser(lang_obj)
            except (TypeError, ValueError) as e:
                logger.warning(f"Cannot load tree-sitter grammar '{grammar}': {e}")

    def parse(self, code: bytes, grammar: str) -> Tree | None:
        """Parse code and return its syntax tree.

        Args:
            code: Source code as bytes
            grammar: Grammar name (e.g., "objc")

        Returns:
            Tree, or None if the grammar is not installed
        """
        parser = self._parsers.get(grammar)
        if parser is None:
            return None
        result: Tree = parser.parse(code)
        return result

    def is_language_supported(self, grammar: str) -> bool:
        """Check if a grammar is loaded."""
        return grammar in self._parsers
