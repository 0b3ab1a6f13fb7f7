"""Tests for the delimiter tokenizer."""

import pytest

from nsloader.errors import ConfigurationError
from nsloader.tokenizer import DEFAULT_DELIMITER
from nsloader.tokenizer import DelimiterTokenizer


def test_default_delimiter_is_namespace_separator():
    tokenizer = DelimiterTokenizer()
    assert tokenizer.get_delimiters() == ["\\"]
    assert tokenizer.tokenize("Vendor\\Widgets\\Button") == ["Vendor", "Widgets", "Button"]


def test_unqualified_identifier_is_single_token():
    assert DelimiterTokenizer().tokenize("Button") == ["Button"]


def test_extra_delimiters_are_equivalent():
    tokenizer = DelimiterTokenizer(["_"])
    assert tokenizer.tokenize("Foo_Bar") == tokenizer.tokenize("Foo\\Bar") == ["Foo", "Bar"]
    assert tokenizer.tokenize("Vendor\\Widgets_Button") == ["Vendor", "Widgets", "Button"]


def test_multi_character_delimiter():
    tokenizer = DelimiterTokenizer(["::"])
    assert tokenizer.tokenize("Vendor::Widgets\\Button") == ["Vendor", "Widgets", "Button"]


def test_remove_delimiter():
    tokenizer = DelimiterTokenizer(["_"])
    tokenizer.remove_delimiter("_")
    assert tokenizer.get_delimiters() == ["\\"]
    assert tokenizer.tokenize("Foo_Bar") == ["Foo_Bar"]


def test_remove_unknown_delimiter_is_ignored():
    tokenizer = DelimiterTokenizer()
    tokenizer.remove_delimiter("-")
    assert tokenizer.get_delimiters() == ["\\"]


def test_removing_last_delimiter_restores_default():
    tokenizer = DelimiterTokenizer()
    tokenizer.remove_delimiter(DEFAULT_DELIMITER)
    assert tokenizer.get_delimiters() == [DEFAULT_DELIMITER]


def test_canonical_delimiter_follows_removal():
    tokenizer = DelimiterTokenizer(["_"])
    tokenizer.remove_delimiter("\\")
    assert tokenizer.canonical == "_"
    assert tokenizer.tokenize("Foo_Bar") == ["Foo", "Bar"]


def test_empty_delimiter_rejected():
    with pytest.raises(ConfigurationError):
        DelimiterTokenizer().add_delimiter("")


def test_get_delimiters_returns_copy():
    tokenizer = DelimiterTokenizer()
    tokenizer.get_delimiters().append("_")
    assert tokenizer.get_delimiters() == ["\\"]
