"""
Condition layer: path access, ordered comparison, parsing and evaluation.

Main components:
- exists / extract: dot-path access into nested records
- compare_versions: ordered comparison of numeric and text runs
- Operator: the six relational operators and their aliases
- normalize / parse_condition_spec: raw rule conditions to Condition objects
- evaluate / evaluate_spec: conditions against a record
- EvaluationTrace / TraceCollector: record of what was evaluated and why
"""

from conditional_validation.conditions.errors import (
    ConditionalValidationError,
    InvalidOperator,
    IncomparableValues,
    MalformedCondition,
)
from conditional_validation.conditions.paths import (
    ABSENT,
    exists,
    extract,
    resolve,
)
from conditional_validation.conditions.operators import Operator
from conditional_validation.conditions.comparison import (
    canonicalize,
    tokenize,
    compare_versions,
    compare,
    to_comparable,
)
from conditional_validation.conditions.normalizer import (
    Condition,
    SingleCondition,
    MultipleConditions,
    ConditionSpec,
    normalize,
    parse_condition_spec,
)
from conditional_validation.conditions.evaluator import evaluate, evaluate_spec
from conditional_validation.conditions.trace import (
    RuleOutcome,
    ConditionEntry,
    EvaluationTrace,
    TraceSummary,
    TraceCollector,
)


__all__ = [
    # Errors
    "ConditionalValidationError",
    "InvalidOperator",
    "IncomparableValues",
    "MalformedCondition",
    # Paths
    "ABSENT",
    "exists",
    "extract",
    "resolve",
    # Comparison
    "Operator",
    "canonicalize",
    "tokenize",
    "compare_versions",
    "compare",
    "to_comparable",
    # Parsing
    "Condition",
    "SingleCondition",
    "MultipleConditions",
    "ConditionSpec",
    "normalize",
    "parse_condition_spec",
    # Evaluation
    "evaluate",
    "evaluate_spec",
    # Tracing
    "RuleOutcome",
    "ConditionEntry",
    "EvaluationTrace",
    "TraceSummary",
    "TraceCollector",
]
