"""
Tests for ordered (version-style) comparison (conditions/comparison.py).
"""

import pytest

from conditional_validation.conditions.comparison import (
    canonicalize,
    compare,
    compare_segments,
    compare_versions,
    to_comparable,
    tokenize,
)
from conditional_validation.conditions.errors import IncomparableValues
from conditional_validation.conditions.operators import Operator


# =============================================================================
# TOKENIZING
# =============================================================================

class TestTokenize:
    """Tests for canonicalize() and tokenize()"""

    def test_inserts_separator_between_runs(self):
        assert canonicalize("1.0rc1") == "1.0.rc.1"
        assert canonicalize("abc10def") == "abc.10.def"

    def test_special_characters_become_separators(self):
        assert canonicalize("1-2_3+4") == "1.2.3.4"
        assert canonicalize("1..2") == "1.2"

    def test_first_character_kept(self):
        assert canonicalize("-1") == "-1"

    def test_empty(self):
        assert canonicalize("") == ""
        assert tokenize("") == []

    def test_tokenize(self):
        assert tokenize("1.10.0beta2") == ["1", "10", "0", "beta", "2"]
        assert tokenize("file") == ["file"]
        assert tokenize("1.") == ["1"]


# =============================================================================
# COMPARING
# =============================================================================

class TestCompareVersions:
    """Tests for compare_versions()"""

    @pytest.mark.parametrize("left,right", [
        ("9", "10"),
        ("2", "10"),
        ("1.9", "1.10"),
        ("1.0", "1.0.1"),
        ("1.0alpha", "1.0"),
        ("1.0dev", "1.0alpha"),
        ("1.0alpha", "1.0beta"),
        ("1.0beta", "1.0RC1"),
        ("1.0RC1", "1.0"),
        ("1.0", "1.0pl1"),
        ("apple", "banana"),
        ("file", "image"),
        ("", "0"),
        ("abc", "1"),
    ])
    def test_ordering(self, left, right):
        assert compare_versions(left, right) == -1
        assert compare_versions(right, left) == 1

    @pytest.mark.parametrize("left,right", [
        ("1", "1"),
        ("01", "1"),
        ("1.0", "1-0"),
        ("file", "file"),
        ("a", "alpha"),
        ("", ""),
    ])
    def test_equal(self, left, right):
        assert compare_versions(left, right) == 0

    def test_numeric_not_lexical(self):
        # Plain string comparison would say "10" < "9"
        assert "10" < "9"
        assert compare_versions("10", "9") == 1

    def test_text_words_are_distinguished(self):
        assert compare_versions("file", "url") != 0
        assert compare_versions("pdf", "png") != 0

    def test_number_beats_plain_text(self):
        assert compare_segments("1", "file") == 1
        assert compare_segments("file", "1") == -1

    def test_patch_level_beats_number(self):
        assert compare_segments("pl", "1") == 1
        assert compare_segments("p", "1") == 1

    def test_sign_is_text(self):
        # "-5" is one text run, so it compares lexically
        assert tokenize("-5") == ["-5"]
        assert compare_versions("-5", "-1") == 1


# =============================================================================
# COERCION AND OPERATORS
# =============================================================================

class TestToComparable:
    """Tests for to_comparable()"""

    @pytest.mark.parametrize("value,expected", [
        ("abc", "abc"),
        (True, "1"),
        (False, ""),
        (None, ""),
        (10, "10"),
        (1.0, "1"),
        (1.5, "1.5"),
        (b"1", "1"),
    ])
    def test_coercion(self, value, expected):
        assert to_comparable(value) == expected


class TestCompare:
    """Tests for compare() with operators"""

    @pytest.mark.parametrize("operator,expected", [
        (Operator.EQUAL, False),
        (Operator.NOT_EQUAL, True),
        (Operator.GREATER_OR_EQUAL, True),
        (Operator.LESS_OR_EQUAL, False),
        (Operator.GREATER_THAN, True),
        (Operator.LESS_THAN, False),
    ])
    def test_operators_on_10_vs_9(self, operator, expected):
        assert compare("10", "9", operator) is expected

    def test_nine_less_than_ten(self):
        assert compare("9", "10", Operator.LESS_THAN) is True

    def test_mixed_types(self):
        assert compare(10, "10", Operator.EQUAL) is True
        assert compare(True, "1", Operator.EQUAL) is True
        assert compare(None, "", Operator.EQUAL) is True

    @pytest.mark.parametrize("value", [["a"], ("a",), {"a": 1}, {"a"}])
    def test_incomparable_record_value(self, value):
        with pytest.raises(IncomparableValues) as exc_info:
            compare(value, "a", Operator.EQUAL, path="tags")
        assert exc_info.value.path == "tags"
        assert "tags" in str(exc_info.value)

    def test_incomparable_expected_value(self):
        with pytest.raises(IncomparableValues):
            compare("a", ["a"], Operator.EQUAL)
