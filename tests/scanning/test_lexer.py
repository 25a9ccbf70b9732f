"""Tests for the C-family lexer backend."""

import pytest

from codetally.exceptions import ParseError
from codetally.scanning.languages import get_language_config
from codetally.scanning.lexer import CFamilyLexer, find_line_comment


@pytest.fixture
def lexer():
    return CFamilyLexer(get_language_config("objc"))


class TestTokens:
    def test_line_count(self, lexer, greeter_m):
        tree = lexer.parse("Greeter.m", greeter_m)
        assert tree.line_count == 10

    def test_empty_file(self, lexer):
        tree = lexer.parse("Empty.m", "")
        assert tree.line_count == 0
        assert tree.tokens() == ()
        assert tree.comments() == ()

    def test_comments_found_in_order(self, lexer, greeter_m):
        tree = lexer.parse("Greeter.m", greeter_m)
        comments = tree.comments()
        assert [c.start_line for c in comments] == [1, 4, 8]
        assert comments[0].text == "// Copyright header"
        assert comments[1].end_line == 6
        assert comments[2].text == "// say hi"

    def test_code_token_lines(self, lexer, greeter_m):
        tree = lexer.parse("Greeter.m", greeter_m)
        assert sorted({t.start_line for t in tree.tokens()}) == [2, 7, 8, 9]

    def test_token_kinds(self, lexer):
        tree = lexer.parse("a.m", '#import "A.h"\n@interface A\nint x = 0x1F;\n')
        kinds = {t.type for t in tree.tokens()}
        assert {"preproc_directive", "string_literal", "at_keyword", "identifier"} <= kinds
        assert "number_literal" in kinds

    def test_comment_markers_inside_strings_are_not_comments(self, lexer):
        tree = lexer.parse("a.m", 'NSString *s = @"// not a comment /* nor this */";\n')
        assert tree.comments() == ()

    def test_string_markers_inside_comments_are_ignored(self, lexer):
        tree = lexer.parse("a.m", "// don't \"quote\"\nint x;\n")
        assert len(tree.comments()) == 1

    def test_columns(self, lexer):
        tree = lexer.parse("a.m", "int x; // tail\n")
        comment = tree.comments()[0]
        assert comment.position == (1, 7)
        assert tree.tokens()[0].position == (1, 0)

    def test_crlf_line_endings(self, lexer):
        tree = lexer.parse("a.m", "int a;\r\n/* x\r\n y */\r\nint b;\r\n")
        assert tree.line_count == 5
        assert [t.start_line for t in tree.tokens() if t.text == "b"] == [4]
        assert tree.comments()[0].end_line == 3


class TestFailures:
    def test_unterminated_block_comment(self, lexer, broken_m):
        with pytest.raises(ParseError) as exc_info:
            lexer.parse("Broken.m", broken_m)
        assert exc_info.value.filepath == "Broken.m"
        assert "block comment" in exc_info.value.reason

    def test_unterminated_string(self, lexer):
        with pytest.raises(ParseError, match="objc"):
            lexer.parse("Bad.m", 'char *s = "abc;\nint x;\n')

    def test_unterminated_char_literal(self, lexer):
        with pytest.raises(ParseError):
            lexer.parse("Bad.m", "char c = ';\n")


class TestPreprocessorMessages:
    def test_apostrophe_in_warning(self, lexer):
        tree = lexer.parse("a.m", "#warning Don't ship this\nint y;\n")
        assert [t.type for t in tree.tokens() if t.start_line == 1] == ["preproc_message"]
        assert tree.tokens()[0].text == "#warning Don't ship this"
        assert sorted({t.start_line for t in tree.tokens()}) == [1, 2]

    def test_quote_in_error(self, lexer):
        tree = lexer.parse("a.m", '#  error "unsupported platform\n')
        assert tree.tokens()[0].type == "preproc_message"

    def test_trailing_comment_after_warning(self, lexer):
        tree = lexer.parse("a.m", "#warning it's slow // revisit\n")
        assert [c.text for c in tree.comments()] == ["// revisit"]
        assert tree.tokens()[0].text == "#warning it's slow "

    def test_continued_warning(self, lexer):
        tree = lexer.parse("a.m", "#warning don't\\\n  ship\nint y;\n")
        message = tree.tokens()[0]
        assert message.lines() == range(1, 3)
        assert [t.start_line for t in tree.tokens() if t.text == "y"] == [3]

    def test_other_directives_keep_their_arguments_as_code(self, lexer):
        tree = lexer.parse("a.m", "#define X 1\n")
        assert [t.type for t in tree.tokens()] == [
            "preproc_directive",
            "identifier",
            "number_literal",
        ]


class TestFindLineComment:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("1 // note", 2),
            ("// note", 0),
            ('"a // b" // c', 9),
            ("'/' // c", 4),
            ("Don't // c", 6),
            ("a /* b */ c", None),
            ("1", None),
            ("", None),
        ],
    )
    def test_offsets(self, text, expected):
        assert find_line_comment(text) == expected
