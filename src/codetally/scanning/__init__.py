"""Parser adapters, parse tree model and comment analysis."""

from .base import SourceParser
from .comments import (
    BLOCK_COMMENT,
    C_FAMILY_COMMENTS,
    LINE_COMMENT,
    CommentAnalyzer,
    CommentSyntax,
)
from .factory import create_parser
from .languages import (
    DEFAULT_LANGUAGE,
    LANGUAGES,
    LanguageConfig,
    detect_language,
    get_language_config,
)
from .lexer import CFamilyLexer
from .normalizer import TreeSitterSourceParser
from .syntax import ParseTree, SyntaxNode, count_lines
from .treesitter_parser import TREE_SITTER_AVAILABLE, TreeSitterParser, get_supported_languages

__all__ = [
    # Parse tree
    "ParseTree",
    "SyntaxNode",
    "count_lines",
    # Parser adapters
    "SourceParser",
    "CFamilyLexer",
    "TreeSitterSourceParser",
    "TreeSitterParser",
    "TREE_SITTER_AVAILABLE",
    "get_supported_languages",
    "create_parser",
    # Languages
    "LanguageConfig",
    "LANGUAGES",
    "DEFAULT_LANGUAGE",
    "get_language_config",
    "detect_language",
    # Comments
    "CommentAnalyzer",
    "CommentSyntax",
    "LINE_COMMENT",
    "BLOCK_COMMENT",
    "C_FAMILY_COMMENTS",
]
