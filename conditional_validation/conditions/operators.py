"""
Comparison operators usable in rule conditions.

The canonical names are the six relational outcomes. Rule files written
by hand often use the symbolic or short spellings instead, so those are
accepted as aliases and resolved to the canonical member.
"""

from enum import Enum
from typing import Any, Callable, Dict

from conditional_validation.conditions.errors import InvalidOperator


class Operator(str, Enum):
    EQUAL = "equal"
    NOT_EQUAL = "not-equal"
    GREATER_OR_EQUAL = "greater-or-equal"
    LESS_OR_EQUAL = "less-or-equal"
    GREATER_THAN = "greater-than"
    LESS_THAN = "less-than"

    @classmethod
    def resolve(cls, raw: Any, path: str = "") -> "Operator":
        """
        Resolve a canonical name or alias to an Operator.

        Raises:
            InvalidOperator: If ``raw`` is not a known operator spelling
        """
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, str):
            operator = _ALIASES.get(raw.strip())
            if operator is not None:
                return operator
        raise InvalidOperator(raw, path)

    def accepts(self, ordering: int) -> bool:
        """Whether a comparison result (-1, 0, 1) satisfies this operator."""
        return _PREDICATES[self](ordering)


_PREDICATES: Dict[Operator, Callable[[int], bool]] = {
    Operator.EQUAL: lambda c: c == 0,
    Operator.NOT_EQUAL: lambda c: c != 0,
    Operator.GREATER_OR_EQUAL: lambda c: c >= 0,
    Operator.LESS_OR_EQUAL: lambda c: c <= 0,
    Operator.GREATER_THAN: lambda c: c > 0,
    Operator.LESS_THAN: lambda c: c < 0,
}

_ALIASES: Dict[str, Operator] = {
    # equal
    "equal": Operator.EQUAL,
    "equals": Operator.EQUAL,
    "==": Operator.EQUAL,
    "=": Operator.EQUAL,
    "eq": Operator.EQUAL,
    # not equal
    "not-equal": Operator.NOT_EQUAL,
    "not_equal": Operator.NOT_EQUAL,
    "!=": Operator.NOT_EQUAL,
    "<>": Operator.NOT_EQUAL,
    "ne": Operator.NOT_EQUAL,
    # greater or equal
    "greater-or-equal": Operator.GREATER_OR_EQUAL,
    "greater_or_equal": Operator.GREATER_OR_EQUAL,
    ">=": Operator.GREATER_OR_EQUAL,
    "ge": Operator.GREATER_OR_EQUAL,
    # less or equal
    "less-or-equal": Operator.LESS_OR_EQUAL,
    "less_or_equal": Operator.LESS_OR_EQUAL,
    "<=": Operator.LESS_OR_EQUAL,
    "le": Operator.LESS_OR_EQUAL,
    # greater than
    "greater-than": Operator.GREATER_THAN,
    "greater_than": Operator.GREATER_THAN,
    ">": Operator.GREATER_THAN,
    "gt": Operator.GREATER_THAN,
    # less than
    "less-than": Operator.LESS_THAN,
    "less_than": Operator.LESS_THAN,
    "<": Operator.LESS_THAN,
    "lt": Operator.LESS_THAN,
}
