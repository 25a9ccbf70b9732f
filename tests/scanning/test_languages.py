"""Tests for language configuration and parser selection."""

from pathlib import Path

import pytest

from codetally.config import ScanConfig
from codetally.exceptions import UnsupportedLanguageError
from codetally.scanning import (
    CFamilyLexer,
    create_parser,
    detect_language,
    get_language_config,
    get_supported_languages,
)


class TestLanguages:
    def test_objc_extensions(self):
        assert ".m" in get_language_config("objc").extensions

    def test_unknown_language(self):
        with pytest.raises(UnsupportedLanguageError) as exc_info:
            get_language_config("cobol")
        assert "objc" in exc_info.value.supported_languages

    @pytest.mark.parametrize(
        "name, expected",
        [("Foo.m", "objc"), ("Foo.mm", "objc"), ("foo.c", "c"), ("Foo.h", "objc"), ("x.txt", "objc")],
    )
    def test_detect_language(self, name, expected):
        assert detect_language(Path(name)) == expected

    def test_detect_language_shared_extension_follows_default(self):
        assert detect_language(Path("foo.h"), default="c") == "c"


class TestCreateParser:
    def test_lexer_backend(self):
        parser = create_parser(ScanConfig(parser_backend="lexer"))
        assert isinstance(parser, CFamilyLexer)
        assert parser.language.name == "objc"

    @pytest.mark.skipif("objc" in get_supported_languages(), reason="objc grammar installed")
    def test_auto_falls_back_to_lexer(self):
        assert isinstance(create_parser(ScanConfig()), CFamilyLexer)

    @pytest.mark.skipif("objc" in get_supported_languages(), reason="objc grammar installed")
    def test_explicit_tree_sitter_requires_grammar(self):
        with pytest.raises(UnsupportedLanguageError):
            create_parser(ScanConfig(parser_backend="tree-sitter"))

    def test_explicit_language_beats_config(self):
        parser = create_parser(ScanConfig(language="objc", parser_backend="lexer"), "c")
        assert parser.language.name == "c"
