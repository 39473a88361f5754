"""
Rule pruning - drops rules whose activation conditions do not hold.

A rule set maps field names to rule definitions:

    {
        "category_csv_field": {
            "isSet": {
                "rule": "notEmpty",
                "message": "Category CSV Field must be mapped.",
                "if": ["has_categories", "1"],
            },
        },
    }

Before validation runs, every rule carrying a condition under the
configured key is checked against the record. The rule survives only if
all its conditions are true. Pruning returns a new rule set; the input
is never modified, so one rule set can be reused across passes.
"""

import time
from collections.abc import Mapping
from typing import Any, Dict, Optional, TYPE_CHECKING, Union

from conditional_validation.conditions.errors import ConditionalValidationError
from conditional_validation.conditions.evaluator import evaluate_spec
from conditional_validation.conditions.normalizer import parse_condition_spec
from conditional_validation.conditions.trace import RuleOutcome
from conditional_validation.logger import logger
from conditional_validation.registry import (
    DEFAULT_CONDITION_KEY,
    RecordSettings,
    SettingsRegistry,
)

if TYPE_CHECKING:
    from conditional_validation.conditions.trace import EvaluationTrace


# Type aliases for rule set structures
RuleDefinition = Dict[str, Any]
FieldRules = Dict[str, RuleDefinition]
RuleSet = Dict[str, Union[FieldRules, Any]]


def _condition_key(settings: Union[RecordSettings, str, None]) -> str:
    if settings is None:
        return DEFAULT_CONDITION_KEY
    if isinstance(settings, str):
        return settings
    return settings.condition_key


def has_condition(definition: Any, condition_key: str = DEFAULT_CONDITION_KEY) -> bool:
    """Whether a rule definition carries a condition. A None entry counts as none."""
    return isinstance(definition, Mapping) and definition.get(condition_key) is not None


def rule_is_active(
    definition: Any,
    record: Any,
    condition_key: str = DEFAULT_CONDITION_KEY,
    trace: Optional["EvaluationTrace"] = None,
    field: str = "",
    rule: str = "",
) -> bool:
    """
    Decide whether one rule definition stays active for a record.

    Definitions that are not mappings, or carry no condition (or a None
    condition), are always active.

    Raises:
        ConditionalValidationError: If the condition is malformed or
            cannot be evaluated (field/rule are attached to the error)
    """
    if not has_condition(definition, condition_key):
        if trace is not None:
            trace.set_outcome(field, rule, RuleOutcome.UNCONDITIONAL)
        return True

    try:
        spec = parse_condition_spec(definition[condition_key])
        active = evaluate_spec(record, spec, trace=trace, field=field, rule=rule)
    except ConditionalValidationError as e:
        e.attach_rule(field, rule)
        raise

    if trace is not None:
        trace.set_outcome(field, rule, RuleOutcome.KEPT if active else RuleOutcome.PRUNED)
    return active


def prune(
    rule_set: RuleSet,
    record: Any,
    settings: Union[RecordSettings, str, None] = None,
    trace: Optional["EvaluationTrace"] = None,
) -> RuleSet:
    """
    Return a copy of ``rule_set`` without the rules whose conditions fail.

    Every field of the input is present in the result. Field entries that
    are not mappings (e.g. a bare rule name) are copied through as is.
    Rule definitions themselves are shared with the input, not copied.

    Args:
        rule_set: field -> rule name -> rule definition
        record: Record the conditions are evaluated against
        settings: RecordSettings or a condition key ("if" when omitted)
        trace: Optional trace recording every evaluation

    Returns:
        New rule set with failed rules removed

    Raises:
        InvalidOperator: If a condition uses an unknown operator
        IncomparableValues: If a record value cannot be compared
        MalformedCondition: If a condition has an unrecognised shape
    """
    condition_key = _condition_key(settings)
    start_time = time.perf_counter()
    checked = 0
    pruned_count = 0

    pruned: RuleSet = {}
    for field, rules in rule_set.items():
        if not isinstance(rules, Mapping):
            pruned[field] = rules
            continue

        kept: FieldRules = {}
        for rule_name, definition in rules.items():
            if has_condition(definition, condition_key):
                checked += 1
            if rule_is_active(definition, record, condition_key, trace, field, rule_name):
                kept[rule_name] = definition
            else:
                pruned_count += 1
                logger.event("rule_pruned", field=field, rule=rule_name)
        pruned[field] = kept

    if trace is not None:
        trace.finish()

    logger.debug(
        "Rule set pruned",
        fields=len(rule_set),
        checked=checked,
        pruned=pruned_count,
        elapsed_ms=round((time.perf_counter() - start_time) * 1000, 3),
    )
    return pruned


class RulePruner:
    """
    Prunes rule sets using per record type settings from a registry.

    Example:
        registry = SettingsRegistry()
        registry.configure("Import", condition_key="if")
        pruner = RulePruner(registry)

        active_rules = pruner.prune(rule_set, record, "Import")
    """

    def __init__(self, registry: Optional[SettingsRegistry] = None):
        self.registry = registry if registry is not None else SettingsRegistry()

    def prune(
        self,
        rule_set: RuleSet,
        record: Any,
        record_type: str,
        trace: Optional["EvaluationTrace"] = None,
    ) -> RuleSet:
        """Prune ``rule_set`` with the settings configured for ``record_type``."""
        return prune(rule_set, record, self.registry.get(record_type), trace=trace)

    def __repr__(self) -> str:
        return f"RulePruner(registry={self.registry!r})"
