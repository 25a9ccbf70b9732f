"""Parser adapter interface.

Every backend turns the text of one file into an immutable ParseTree, or
raises ParseError. A backend never returns a partially populated tree.
"""

from abc import ABC, abstractmethod

from .languages import LanguageConfig
from .syntax import ParseTree


class SourceParser(ABC):
    """Abstract base class for parser backends."""

    name: str = "abstract"

    def __init__(self, language: LanguageConfig):
        """
        Initialize parser.

        Args:
            language: Language the parser is configured for
        """
        self.language = language

    @abstractmethod
    def parse(self, path: str, text: str) -> ParseTree:
        """
        Parse the text of one file.

        Args:
            path: File path, used for error reporting and the tree's identity
            text: Full source text

        Returns:
            Parse tree for the file

        Raises:
            ParseError: If the text is not well-formed for the language
        """
        pass
