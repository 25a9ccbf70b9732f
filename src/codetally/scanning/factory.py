"""Parser factory: resolves the configured backend to a SourceParser."""

from typing import Optional

from ..config import ScanConfig
from ..logging_config import get_logger
from .base import SourceParser
from .languages import DEFAULT_LANGUAGE, get_language_config
from .lexer import CFamilyLexer
from .normalizer import TreeSitterSourceParser
from .treesitter_parser import get_supported_languages

logger = get_logger(__name__)


def create_parser(config: ScanConfig, language: Optional[str] = None) -> SourceParser:
    """Build the parser adapter for ``language``.

    ``language`` defaults to ``config.language``, then to objc.

    "tree-sitter" requires the grammar to be installed and raises
    UnsupportedLanguageError otherwise. "auto" prefers tree-sitter and falls
    back to the built-in lexer when the grammar is missing.
    """
    target = get_language_config(language or config.language or DEFAULT_LANGUAGE)

    if config.parser_backend == "lexer":
        return CFamilyLexer(target)

    if config.parser_backend == "tree-sitter":
        return TreeSitterSourceParser(target)

    if target.grammar in get_supported_languages():
        logger.debug(f"Using tree-sitter grammar '{target.grammar}'")
        return TreeSitterSourceParser(target)

    logger.info(
        f"No tree-sitter grammar for {target.name}, using the built-in lexer. "
        "For grammar-based parsing: pip install codetally[parsing]"
    )
    return CFamilyLexer(target)
