"""
Unit tests for token normalization
"""

import pytest

from invindex.worker.normalizer import normalize_char, normalize_word, normalized_words


class TestNormalizeChar:
    """Tests for single-character normalization"""

    @pytest.mark.parametrize("ch,expected", [("a", "a"), ("z", "z"), ("A", "a"), ("Q", "q")])
    def test_letters_are_lowercased(self, ch, expected):
        assert normalize_char(ch) == expected

    @pytest.mark.parametrize("ch", ["0", "9", "-", "'", ".", " ", "\t", "_", "é", "ß"])
    def test_non_letters_are_discarded(self, ch):
        assert normalize_char(ch) is None


class TestNormalizeWord:
    """Tests for building normalized words"""

    def test_lowercases_whole_token(self):
        assert normalize_word("HeLLo") == "hello"

    def test_removes_inner_punctuation(self):
        """Non-letters are removed, not replaced"""
        assert normalize_word("don't") == "dont"
        assert normalize_word("e-mail") == "email"
        assert normalize_word("C3PO") == "cpo"

    def test_strips_surrounding_punctuation(self):
        assert normalize_word("(hello),") == "hello"

    def test_token_without_letters_is_empty(self):
        assert normalize_word("1984") == ""
        assert normalize_word("...!?") == ""

    def test_non_ascii_letters_are_dropped(self):
        assert normalize_word("café") == "caf"


class TestNormalizedWords:
    """Tests for normalizing a token stream"""

    def test_drops_empty_words(self):
        tokens = ["The", "42", "cat", "--", "sat."]
        assert list(normalized_words(tokens)) == ["the", "cat", "sat"]

    def test_keeps_repeats(self):
        assert list(normalized_words(["a", "A", "a!"])) == ["a", "a", "a"]

    def test_empty_stream(self):
        assert list(normalized_words([])) == []
