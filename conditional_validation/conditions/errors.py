"""
Exceptions raised while parsing and evaluating rule conditions.

All of them derive from ConditionalValidationError so a host can catch
the whole family at the validation boundary. The pruner fills in
``field`` and ``rule`` before letting an error propagate.
"""

from typing import Any, Optional


class ConditionalValidationError(Exception):
    """Base class for all conditional validation errors."""

    field: Optional[str] = None
    rule: Optional[str] = None

    def attach_rule(self, field: str, rule: str) -> "ConditionalValidationError":
        """Remember which field/rule pair the error came from."""
        self.field = field
        self.rule = rule
        return self

    @property
    def location(self) -> str:
        if self.field is None:
            return ""
        return f"{self.field}.{self.rule}"


class InvalidOperator(ConditionalValidationError):
    """Raised when a condition uses an operator outside the known set."""

    def __init__(self, operator: Any, path: str = ""):
        self.operator = operator
        self.path = path
        message = f"Invalid operator {operator!r}"
        if path:
            message += f" in condition on '{path}'"
        super().__init__(message)


class IncomparableValues(ConditionalValidationError):
    """Raised when an operand cannot take part in an ordered comparison."""

    def __init__(self, left: Any, right: Any, path: str = ""):
        self.left = left
        self.right = right
        self.path = path
        message = (
            f"Cannot compare {type(left).__name__} {left!r} "
            f"with {type(right).__name__} {right!r}"
        )
        if path:
            message += f" (path: {path})"
        super().__init__(message)


class MalformedCondition(ConditionalValidationError):
    """Raised when a raw condition does not have a recognised shape."""

    def __init__(self, raw: Any, reason: str):
        self.raw = raw
        self.reason = reason
        message = f"Malformed condition {raw!r}: {reason}"
        super().__init__(message)
