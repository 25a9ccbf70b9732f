"""Tests for comment analysis (scanning/comments.py)."""

import pytest

from codetally.exceptions import InvariantViolation
from codetally.scanning.comments import (
    BLOCK_COMMENT,
    LINE_COMMENT,
    CommentAnalyzer,
    CommentSyntax,
)


class TestIsBlank:
    """is_blank is true iff no character is a letter or digit."""

    @pytest.mark.parametrize(
        "line, expected",
        [
            ("   ", True),
            ("*", True),
            ("", True),
            (" * ---- * ", True),
            ("a", False),
            ("  7 ", False),
            (" * Greeter.", False),
            ("é", False),
        ],
    )
    def test_truth_table(self, line, expected):
        assert CommentAnalyzer.is_blank(line) is expected


class TestGetContents:
    """Delimiter stripping removes exactly the delimiter length."""

    def setup_method(self):
        self.analyzer = CommentAnalyzer()

    def test_line_comment(self):
        assert self.analyzer.get_contents("// hello") == " hello"

    def test_block_comment(self):
        assert self.analyzer.get_contents("/* hi */") == " hi "

    def test_empty_block_comment(self):
        assert self.analyzer.get_contents("/**/") == ""

    def test_doc_block_keeps_extra_star(self):
        """Only two characters are stripped, so '/** x */' keeps its second star."""
        assert self.analyzer.get_contents("/** x */") == "* x "

    def test_multiline_block(self):
        contents = self.analyzer.get_contents("/*\n * a\n */")
        assert contents == "\n * a\n "

    def test_too_short_block_is_contract_violation(self):
        with pytest.raises(InvariantViolation):
            self.analyzer.get_contents("/*/")

    def test_unterminated_block_is_contract_violation(self):
        with pytest.raises(InvariantViolation):
            self.analyzer.get_contents("/* open")

    def test_unknown_delimiter_is_contract_violation(self):
        with pytest.raises(InvariantViolation):
            self.analyzer.get_contents("# shell")


class TestSyntaxFamilies:
    """Families are data; longer prefixes win."""

    def test_default_families(self):
        analyzer = CommentAnalyzer()
        assert analyzer.syntax_of("// x") == LINE_COMMENT
        assert analyzer.syntax_of("/* x */") == BLOCK_COMMENT

    def test_custom_family_strips_its_own_length(self):
        analyzer = CommentAnalyzer([CommentSyntax("hash", "#")])
        assert analyzer.get_contents("# note") == " note"

    def test_longest_prefix_wins(self):
        doc = CommentSyntax("doc", "///")
        analyzer = CommentAnalyzer([LINE_COMMENT, doc])
        assert analyzer.syntax_of("/// docs") == doc
        assert analyzer.get_contents("/// docs") == " docs"

    def test_empty_family_list_rejected(self):
        with pytest.raises(ValueError):
            CommentAnalyzer([])


class TestSplitLines:
    def test_all_line_break_styles(self):
        assert CommentAnalyzer.split_lines("a\r\nb\rc\nd") == ["a", "b", "c", "d"]

    def test_keeps_empty_segments(self):
        assert CommentAnalyzer.split_lines("\n x\n ") == ["", " x", " "]
