"""
Static validation of conditions in a rule set.

Pruning only finds a bad operator or a malformed condition when a record
reaches that rule. Validating at setup time catches them up front.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List

from conditional_validation.conditions.errors import ConditionalValidationError
from conditional_validation.conditions.normalizer import parse_condition_spec
from conditional_validation.conditions.operators import Operator
from conditional_validation.registry import DEFAULT_CONDITION_KEY
from conditional_validation.rules.pruner import has_condition


@dataclass
class ValidationError:
    """Single validation error."""
    field: str
    rule: str
    message: str
    error: ConditionalValidationError

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "rule": self.rule,
            "type": type(self.error).__name__,
            "message": self.message,
        }


@dataclass
class ValidationResult:
    """
    Result of rule set validation.

    Attributes:
        errors: Conditions that would fail at pruning time
        checked_rules: Rules carrying a condition
        checked_conditions: Individual conditions checked
    """
    errors: List[ValidationError] = field(default_factory=list)
    checked_rules: int = 0
    checked_conditions: int = 0

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def raise_first(self) -> None:
        """Raise the first recorded error, if any."""
        if self.errors:
            raise self.errors[0].error

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "checked_rules": self.checked_rules,
            "checked_conditions": self.checked_conditions,
            "errors": [e.to_dict() for e in self.errors],
        }


def validate_rule_set(
    rule_set: Mapping,
    condition_key: str = DEFAULT_CONDITION_KEY,
) -> ValidationResult:
    """
    Check the shape and operator of every condition in a rule set.

    Args:
        rule_set: field -> rule name -> rule definition
        condition_key: Key under which conditions are attached

    Returns:
        ValidationResult listing every problem found
    """
    result = ValidationResult()

    for field_name, rules in rule_set.items():
        if not isinstance(rules, Mapping):
            continue
        for rule_name, definition in rules.items():
            if not has_condition(definition, condition_key):
                continue
            result.checked_rules += 1

            try:
                spec = parse_condition_spec(definition[condition_key])
                for condition in spec.conditions:
                    result.checked_conditions += 1
                    Operator.resolve(condition.operator, condition.path)
            except ConditionalValidationError as e:
                e.attach_rule(field_name, rule_name)
                result.errors.append(ValidationError(
                    field=field_name,
                    rule=rule_name,
                    message=str(e),
                    error=e,
                ))

    return result
