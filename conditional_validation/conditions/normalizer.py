"""
Parsing of raw rule conditions into their canonical form.

A rule carries its condition under the configured key (``"if"`` by
default) in one of these shapes:

    "has_categories"                                  # exists and != ""
    ["has_categories"]                                # same
    ["has_categories", "1"]                           # exists and == "1"
    ["has_categories", "1", ">="]                     # exists and >= "1"
    [["type", "file"], ["overwrite_file", "1"]]       # AND of both

The shape is decided once here. Everything downstream works with a
ConditionSpec and never looks at the raw value again.
"""

from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple, Union

from conditional_validation.conditions.errors import MalformedCondition
from conditional_validation.conditions.operators import Operator


# Raw forms accepted from rule definitions
RawCondition = Union[str, Sequence[Any]]
RawConditionSpec = Union[RawCondition, Sequence[RawCondition]]


@dataclass(frozen=True)
class Condition:
    """
    Normalized condition: always has path, value and operator.

    The operator is kept as written; it is resolved (and rejected if
    unknown) at evaluation time.
    """
    path: str
    value: Any = ""
    operator: Any = Operator.NOT_EQUAL.value

    def to_dict(self) -> dict:
        return {"path": self.path, "value": self.value, "operator": self.operator}

    def __str__(self) -> str:
        return f"{self.path} {self.operator} {self.value!r}"


@dataclass(frozen=True)
class SingleCondition:
    condition: Condition

    @property
    def conditions(self) -> Tuple[Condition, ...]:
        return (self.condition,)


@dataclass(frozen=True)
class MultipleConditions:
    """Conditions combined with AND."""
    conditions: Tuple[Condition, ...]


ConditionSpec = Union[SingleCondition, MultipleConditions]


def _is_tuple_like(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def normalize(raw: RawCondition) -> Condition:
    """
    Expand a 1, 2 or 3 element raw condition.

    - [path]                  -> (path, "", not-equal)
    - [path, value]           -> (path, value, equal)
    - [path, value, operator] -> as given

    A None slot counts as missing: a None value means the existence check
    (whatever the operator), a None operator means equal.

    Raises:
        MalformedCondition: If the shape is not one of the above
    """
    if isinstance(raw, str):
        raw = (raw,)

    if not _is_tuple_like(raw):
        raise MalformedCondition(raw, "expected a list of 1 to 3 elements")
    if not 1 <= len(raw) <= 3:
        raise MalformedCondition(raw, f"expected 1 to 3 elements, got {len(raw)}")

    path = raw[0]
    if not isinstance(path, str):
        raise MalformedCondition(raw, "path must be a string")

    value = raw[1] if len(raw) > 1 else None
    operator = raw[2] if len(raw) > 2 else None

    if value is None:
        return Condition(path=path, value="", operator=Operator.NOT_EQUAL.value)
    if operator is None:
        return Condition(path=path, value=value, operator=Operator.EQUAL.value)
    return Condition(path=path, value=value, operator=operator)


def parse_condition_spec(raw: RawConditionSpec) -> ConditionSpec:
    """
    Decide between a single condition and a list of AND-ed conditions.

    A list whose first element is itself a list/tuple is a list of
    conditions; anything else is a single condition.

    Raises:
        MalformedCondition: If the value or any of its conditions is malformed
    """
    if _is_tuple_like(raw) and len(raw) == 0:
        raise MalformedCondition(raw, "condition list is empty")

    if _is_tuple_like(raw) and _is_tuple_like(raw[0]):
        conditions: List[Condition] = []
        for item in raw:
            if not (_is_tuple_like(item) or isinstance(item, str)):
                raise MalformedCondition(raw, f"element {item!r} is not a condition")
            conditions.append(normalize(item))
        return MultipleConditions(tuple(conditions))

    return SingleCondition(normalize(raw))
