"""Shared test fixtures for codetally."""

from pathlib import Path

import pytest

from codetally.config import ScanConfig

# Line  Content
#  1    // Copyright header          comment
#  2    #import <Foundation/...>     code
#  3                                 blank
#  4    /*                           comment (blank)
#  5     * Greeter.                  comment
#  6     */                          comment (blank)
#  7    @implementation Greeter      code
#  8    - (void)greet {...} // hi    code + comment
#  9    @end                         code
# 10    (after final newline)
GREETER_M = (
    "// Copyright header\n"
    "#import <Foundation/Foundation.h>\n"
    "\n"
    "/*\n"
    " * Greeter.\n"
    " */\n"
    "@implementation Greeter\n"
    '- (void)greet { NSLog(@"hi"); } // say hi\n'
    "@end\n"
)

HEADER_ONLY_M = "/* License\n * text\n */\n"

BROKEN_M = "int a; /* never closed\nint b;\n"


@pytest.fixture
def lexer_config() -> ScanConfig:
    """Configuration pinned to the built-in lexer so results never depend on grammars."""
    return ScanConfig(parser_backend="lexer")


@pytest.fixture
def write_source(tmp_path):
    """Factory writing a source file under tmp_path and returning its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def greeter_m() -> str:
    """Objective-C sample: 10 lines, 4 code lines, 5 comment lines of which 2 blank."""
    return GREETER_M


@pytest.fixture
def header_only_m() -> str:
    """A file whose only content is a 3-line header comment (1 blank line)."""
    return HEADER_ONLY_M


@pytest.fixture
def broken_m() -> str:
    """Source with an unterminated block comment."""
    return BROKEN_M
