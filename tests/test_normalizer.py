"""
Tests for condition parsing (conditions/normalizer.py) and operators.
"""

import pytest

from conditional_validation.conditions.errors import InvalidOperator, MalformedCondition
from conditional_validation.conditions.normalizer import (
    Condition,
    MultipleConditions,
    SingleCondition,
    normalize,
    parse_condition_spec,
)
from conditional_validation.conditions.operators import Operator


# =============================================================================
# NORMALIZE
# =============================================================================

class TestNormalize:
    """Tests for normalize()"""

    def test_one_element(self):
        assert normalize(["has_categories"]) == Condition("has_categories", "", "not-equal")

    def test_two_elements(self):
        assert normalize(["has_categories", "1"]) == Condition("has_categories", "1", "equal")

    def test_three_elements(self):
        condition = normalize(("count", "9", "greater-or-equal"))
        assert condition.path == "count"
        assert condition.value == "9"
        assert condition.operator == "greater-or-equal"

    def test_none_value_is_existence_check(self):
        assert normalize(["has_categories", None]) == normalize(["has_categories"])
        assert normalize(["has_categories", None, "greater-or-equal"]) == Condition(
            "has_categories", "", "not-equal"
        )

    def test_none_operator_is_equal(self):
        assert normalize(["has_categories", "1", None]) == Condition("has_categories", "1", "equal")

    def test_bare_string(self):
        assert normalize("has_categories") == normalize(["has_categories"])

    def test_unknown_operator_passes_through(self):
        assert normalize(["a", "1", "~="]).operator == "~="

    @pytest.mark.parametrize("raw", [[], ["a", "1", ">=", "extra"]])
    def test_wrong_length(self, raw):
        with pytest.raises(MalformedCondition):
            normalize(raw)

    def test_path_must_be_string(self):
        with pytest.raises(MalformedCondition, match="path must be a string"):
            normalize([1, "1"])

    def test_not_a_sequence(self):
        with pytest.raises(MalformedCondition):
            normalize({"path": "a"})

    def test_to_dict(self):
        assert normalize(["a", "1"]).to_dict() == {
            "path": "a", "value": "1", "operator": "equal"
        }


# =============================================================================
# PARSE CONDITION SPEC
# =============================================================================

class TestParseConditionSpec:
    """Tests for parse_condition_spec()"""

    def test_single(self):
        spec = parse_condition_spec(["has_categories", "1"])
        assert isinstance(spec, SingleCondition)
        assert spec.conditions == (Condition("has_categories", "1", "equal"),)

    def test_single_bare_string(self):
        spec = parse_condition_spec("has_categories")
        assert isinstance(spec, SingleCondition)

    def test_multiple(self):
        spec = parse_condition_spec([["type", "file"], ["overwrite_file", "1"]])
        assert isinstance(spec, MultipleConditions)
        assert [c.path for c in spec.conditions] == ["type", "overwrite_file"]

    def test_multiple_with_tuples_and_strings(self):
        spec = parse_condition_spec((("type", "file"), "overwrite_file"))
        assert isinstance(spec, MultipleConditions)
        assert spec.conditions[1] == Condition("overwrite_file", "", "not-equal")

    def test_empty_list(self):
        with pytest.raises(MalformedCondition, match="empty"):
            parse_condition_spec([])

    def test_multiple_with_invalid_element(self):
        with pytest.raises(MalformedCondition):
            parse_condition_spec([["type", "file"], 42])

    def test_multiple_with_malformed_condition(self):
        with pytest.raises(MalformedCondition):
            parse_condition_spec([["type", "file"], []])


# =============================================================================
# OPERATORS
# =============================================================================

class TestOperator:
    """Tests for Operator.resolve()"""

    @pytest.mark.parametrize("raw,expected", [
        ("equal", Operator.EQUAL),
        ("==", Operator.EQUAL),
        ("eq", Operator.EQUAL),
        ("not-equal", Operator.NOT_EQUAL),
        ("<>", Operator.NOT_EQUAL),
        ("!=", Operator.NOT_EQUAL),
        (">=", Operator.GREATER_OR_EQUAL),
        ("ge", Operator.GREATER_OR_EQUAL),
        ("<=", Operator.LESS_OR_EQUAL),
        (">", Operator.GREATER_THAN),
        ("lt", Operator.LESS_THAN),
        ("less_than", Operator.LESS_THAN),
        (Operator.GREATER_THAN, Operator.GREATER_THAN),
    ])
    def test_aliases(self, raw, expected):
        assert Operator.resolve(raw) is expected

    @pytest.mark.parametrize("raw", ["~=", "like", "", None, 1])
    def test_unknown(self, raw):
        with pytest.raises(InvalidOperator) as exc_info:
            Operator.resolve(raw, "count")
        assert exc_info.value.operator == raw
        assert exc_info.value.path == "count"

    def test_accepts(self):
        assert Operator.EQUAL.accepts(0)
        assert not Operator.EQUAL.accepts(1)
        assert Operator.LESS_OR_EQUAL.accepts(-1)
        assert not Operator.GREATER_THAN.accepts(0)
