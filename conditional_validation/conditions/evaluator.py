"""
Evaluation of normalized conditions against a record.

A condition whose path does not exist is false whatever its operator,
including the "not-equal to empty string" existence check. Existing
values are compared with ordered (version-style) comparison.
"""

import logging
from typing import Any, Optional, TYPE_CHECKING

from conditional_validation.conditions.comparison import compare
from conditional_validation.conditions.normalizer import Condition, ConditionSpec
from conditional_validation.conditions.operators import Operator
from conditional_validation.conditions.paths import resolve

if TYPE_CHECKING:
    from conditional_validation.conditions.trace import EvaluationTrace

logger = logging.getLogger(__name__)


def evaluate(
    record: Any,
    condition: Condition,
    trace: Optional["EvaluationTrace"] = None,
    field: str = "",
    rule: str = "",
) -> bool:
    """
    Evaluate one condition.

    Args:
        record: Record the condition is checked against
        condition: Normalized condition
        trace: Optional trace to record the evaluation in
        field: Field name, for the trace
        rule: Rule name, for the trace

    Raises:
        InvalidOperator: If the operator is not recognised
        IncomparableValues: If the record value cannot be compared
    """
    operator = Operator.resolve(condition.operator, condition.path)

    found, actual = resolve(record, condition.path)
    if not found:
        result = False
    else:
        result = compare(actual, condition.value, operator, condition.path)

    if trace is not None:
        trace.record(
            field=field,
            rule=rule,
            condition=condition,
            actual=actual,
            exists=found,
            result=result,
        )

    return result


def evaluate_spec(
    record: Any,
    spec: ConditionSpec,
    trace: Optional["EvaluationTrace"] = None,
    field: str = "",
    rule: str = "",
) -> bool:
    """
    Evaluate every condition of a spec and AND the results.

    Evaluation stops at the first false condition.
    """
    for condition in spec.conditions:
        if not evaluate(record, condition, trace=trace, field=field, rule=rule):
            logger.debug("Condition failed: %s", condition)
            return False
    return True
