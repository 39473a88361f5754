"""
Rule set pruning and static validation of rule conditions.
"""

from conditional_validation.rules.pruner import (
    RuleDefinition,
    FieldRules,
    RuleSet,
    RulePruner,
    prune,
    rule_is_active,
    has_condition,
)
from conditional_validation.rules.validation import (
    ValidationError,
    ValidationResult,
    validate_rule_set,
)

__all__ = [
    "RuleDefinition",
    "FieldRules",
    "RuleSet",
    "RulePruner",
    "prune",
    "rule_is_active",
    "has_condition",
    "ValidationError",
    "ValidationResult",
    "validate_rule_set",
]
