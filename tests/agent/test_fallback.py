"""Tests for edit distance and the fallback suggestion."""

from vat.agent import CAPABILITIES, levenshtein, suggest
from vat.agent.fallback import first_token


class TestLevenshtein:
    """Tests for levenshtein."""

    def test_classic_example(self):
        assert levenshtein("kitten", "sitting") == 3

    def test_empty_string(self):
        assert levenshtein("", "abc") == 3
        assert levenshtein("abc", "") == 3
        assert levenshtein("", "") == 0

    def test_identical(self):
        assert levenshtein("rotate", "rotate") == 0

    def test_symmetric(self):
        assert levenshtein("flaw", "lawn") == levenshtein("lawn", "flaw") == 2

    def test_transposition_costs_two(self):
        assert levenshtein("opne", "open") == 2


def test_first_token():
    assert first_token("  Open a model.") == "Open"
    assert first_token("   ") == ""


class TestSuggest:
    """Tests for suggest."""

    def test_closest_first_word(self):
        assert suggest("Opens the model", CAPABILITIES) == "Open a model."

    def test_first_word_compared_case_insensitively(self):
        assert suggest("ROTAT it", CAPABILITIES) == "Rotate selection by 90 degrees."

    def test_tie_goes_to_later_capability(self):
        assert suggest("xyz", ["abc one", "def two"]) == "def two"

    def test_no_capabilities(self):
        assert suggest("anything", []) == ""

    def test_blank_capabilities_are_skipped(self):
        assert suggest("open", ["", "Open a model."]) == "Open a model."
