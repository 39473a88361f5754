"""
Ordered (version-style) comparison of condition operands.

Record values arrive as form input, so ``"10"`` and ``"9"`` are strings
that must still order as numbers. Both operands are split into numeric
and text runs and compared run by run:

- numeric vs numeric: by integer value ("9" < "10", "01" == "1")
- text vs text: release keywords by rank (dev < alpha < beta < RC < pl),
  any other pair lexically
- numeric vs text: the number wins, except against "pl"/"p"
- when one side runs out, an extra numeric run makes the longer side
  greater and an extra text run makes it smaller ("1.0alpha" < "1.0")

Signs are not numeric: a leading "-" stays part of the first run, so
"-5" is a text run and negative numbers do not order by value.

Example:
    compare_versions("10", "9")          # 1
    compare_versions("1.0rc1", "1.0")    # -1
    compare("10", "9", Operator.GREATER_OR_EQUAL)  # True
"""

import math
from collections.abc import Mapping, Set
from typing import Any, Dict, List, Optional, Sequence

from conditional_validation.conditions.errors import IncomparableValues
from conditional_validation.conditions.operators import Operator


SEPARATOR = "."
DIGITS = "0123456789"

# Rank of a numeric run among the release keywords
NUMBER_RANK = 4

KEYWORD_RANKS: Dict[str, int] = {
    "dev": 0,
    "alpha": 1,
    "a": 1,
    "beta": 2,
    "b": 2,
    "RC": 3,
    "rc": 3,
    "pl": 5,
    "p": 5,
}


def _kind(char: str) -> Optional[str]:
    if char in DIGITS:
        return "digit"
    if char.isalnum():
        return "text"
    return None


def canonicalize(value: str) -> str:
    """
    Put separators between runs.

    Every non-alphanumeric character after the first becomes a single
    separator and a separator is inserted wherever a digit run meets a
    text run. The first character is kept as is.
    """
    if not value:
        return value

    out = [value[0]]
    previous = _kind(value[0])
    for char in value[1:]:
        kind = _kind(char)
        if kind is None:
            if out[-1] != SEPARATOR:
                out.append(SEPARATOR)
        else:
            if previous is not None and kind != previous and out[-1] != SEPARATOR:
                out.append(SEPARATOR)
            out.append(char)
        previous = kind
    return "".join(out)


def tokenize(value: str) -> List[str]:
    """Split a value into its numeric and text runs."""
    return [segment for segment in canonicalize(value).split(SEPARATOR) if segment]


def _is_numeric(segment: str) -> bool:
    return segment != "" and segment[0] in DIGITS


def _leading_int(segment: str) -> int:
    end = 0
    while end < len(segment) and segment[end] in DIGITS:
        end += 1
    return int(segment[:end])


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _rank(segment: str) -> int:
    if _is_numeric(segment):
        return NUMBER_RANK
    return KEYWORD_RANKS.get(segment, -1)


def compare_segments(left: str, right: str) -> int:
    """Compare two runs, returning -1, 0 or 1."""
    if _is_numeric(left) and _is_numeric(right):
        return _sign(_leading_int(left) - _leading_int(right))

    if not _is_numeric(left) and not _is_numeric(right):
        if left in KEYWORD_RANKS and right in KEYWORD_RANKS:
            return _sign(KEYWORD_RANKS[left] - KEYWORD_RANKS[right])
        return (left > right) - (left < right)

    return _sign(_rank(left) - _rank(right))


def _compare_extra(segment: str) -> int:
    # An unmatched trailing run compared against "no run at all"
    if _is_numeric(segment):
        return 1
    return _sign(_rank(segment) - NUMBER_RANK)


def compare_tokens(left: Sequence[str], right: Sequence[str]) -> int:
    """Compare two tokenized values run by run."""
    for left_segment, right_segment in zip(left, right):
        result = compare_segments(left_segment, right_segment)
        if result != 0:
            return result

    common = min(len(left), len(right))
    if len(left) > common:
        return _compare_extra(left[common])
    if len(right) > common:
        return -_compare_extra(right[common])
    return 0


def compare_versions(left: str, right: str) -> int:
    """
    Ordered comparison of two strings.

    Returns:
        -1, 0 or 1 as ``left`` is lower, equal or higher than ``right``
    """
    if not left or not right:
        return (bool(left)) - (bool(right))
    return compare_tokens(tokenize(left), tokenize(right))


def is_comparable(value: Any) -> bool:
    """Whether ``value`` can be coerced to a comparable string."""
    if isinstance(value, (str, bytes)):
        return True
    return not isinstance(value, (Mapping, Set, list, tuple))


def to_comparable(value: Any) -> str:
    """
    Coerce a scalar record value to its string form.

    Booleans become "1"/"", None becomes "", integral floats drop the
    fraction. Callers check ``is_comparable`` first.
    """
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def compare(left: Any, right: Any, operator: Operator, path: str = "") -> bool:
    """
    Apply ``operator`` to the ordered comparison of two operands.

    Raises:
        IncomparableValues: If either operand is a mapping, sequence or set
    """
    if not (is_comparable(left) and is_comparable(right)):
        raise IncomparableValues(left, right, path)
    ordering = compare_versions(to_comparable(left), to_comparable(right))
    return operator.accepts(ordering)
