"""
Conditional validation: rules that only run when their conditions hold.

A validation rule may carry a condition under a configurable key
(``"if"`` by default). Before validation, the rule set is pruned so
that only rules whose conditions are all true for the current record
remain.

    rules = {
        "category_csv_field": {
            "isSet": {"rule": "notEmpty", "if": ["has_categories", "1"]},
        },
    }
    active = prune(rules, {"has_categories": "0"})
    # {"category_csv_field": {}}
"""

from conditional_validation.conditions import (
    ABSENT,
    Condition,
    ConditionalValidationError,
    EvaluationTrace,
    IncomparableValues,
    InvalidOperator,
    MalformedCondition,
    MultipleConditions,
    Operator,
    SingleCondition,
    TraceCollector,
    compare_versions,
    evaluate,
    exists,
    extract,
    normalize,
    parse_condition_spec,
)
from conditional_validation.registry import RecordSettings, SettingsRegistry
from conditional_validation.rules import RulePruner, prune, validate_rule_set
from conditional_validation.behavior import ConditionalValidationBehavior

__version__ = "1.0.0"

__all__ = [
    "ABSENT",
    "Condition",
    "ConditionalValidationBehavior",
    "ConditionalValidationError",
    "EvaluationTrace",
    "IncomparableValues",
    "InvalidOperator",
    "MalformedCondition",
    "MultipleConditions",
    "Operator",
    "RecordSettings",
    "RulePruner",
    "SettingsRegistry",
    "SingleCondition",
    "TraceCollector",
    "compare_versions",
    "evaluate",
    "exists",
    "extract",
    "normalize",
    "parse_condition_spec",
    "prune",
    "validate_rule_set",
]
