"""
Host lifecycle adapter for conditional validation.

The host calls ``setup`` once per record type and ``before_validate``
right before running field validations; the rule set it gets back is the
one it should validate with.

Example:
    behavior = ConditionalValidationBehavior()
    behavior.setup("Import", rule_set=IMPORT_RULES)

    active = behavior.before_validate("Import", IMPORT_RULES, form_data)
    errors = host_validator.run(active, form_data)
"""

import logging
from typing import Any, Optional

from conditional_validation.conditions.trace import EvaluationTrace
from conditional_validation.logger import logger
from conditional_validation.registry import RecordSettings, SettingsRegistry
from conditional_validation.rules.pruner import RuleSet, prune
from conditional_validation.rules.validation import validate_rule_set
from conditional_validation.settings import DotDict, get_settings


class ConditionalValidationBehavior:
    """
    Prunes a record type's rule set before each validation pass.

    Attributes:
        registry: Per record type settings
        settings: Loaded settings.yaml values
        last_trace: Trace of the latest pass (when tracing is enabled)
    """

    def __init__(
        self,
        registry: Optional[SettingsRegistry] = None,
        settings: Optional[DotDict] = None,
    ):
        self.settings = settings if settings is not None else get_settings()
        self.registry = (
            registry if registry is not None
            else SettingsRegistry.from_settings(self.settings)
        )
        self.last_trace: Optional[EvaluationTrace] = None

    def _flag(self, name: str) -> bool:
        return bool(self.settings.get_nested(f"conditional_validation.{name}", False))

    def setup(
        self,
        record_type: str,
        rule_set: Optional[RuleSet] = None,
        **options: Any,
    ) -> RecordSettings:
        """
        Configure a record type and optionally check its rule set.

        Args:
            record_type: Record type being configured
            rule_set: Rule set to validate against the configured key
            **options: Settings to merge (condition_key)

        Raises:
            MalformedCondition: If validate_on_setup is on and a condition is malformed
            InvalidOperator: If validate_on_setup is on and an operator is unknown
        """
        record_settings = self.registry.configure(record_type, **options)

        if rule_set is not None and self._flag("validate_on_setup"):
            result = validate_rule_set(rule_set, record_settings.condition_key)
            if not result.is_valid:
                logger.error(
                    "Invalid rule conditions",
                    record_type=record_type,
                    errors=len(result.errors),
                )
                result.raise_first()

        return record_settings

    def before_validate(self, record_type: str, rule_set: RuleSet, record: Any) -> RuleSet:
        """
        Return the rules that apply to ``record`` for this pass.

        Raises:
            ConditionalValidationError: If a condition cannot be evaluated
        """
        log_conditions = self._flag("log_each_condition")
        trace = None
        if self._flag("enable_tracing") or log_conditions:
            trace = EvaluationTrace(record_type=record_type)

        token = logger.set_record_type(record_type)
        try:
            active = prune(rule_set, record, self.registry.get(record_type), trace=trace)
        finally:
            logger.reset_record_type(token)

        if trace is not None:
            self.last_trace = trace
            if log_conditions and logger.is_enabled_for(logging.DEBUG):
                for entry in trace.entries:
                    logger.debug(
                        "Condition evaluated",
                        record_type=record_type,
                        field=entry.field,
                        rule=entry.rule,
                        path=entry.path,
                        result=entry.result,
                    )

        return active

    def __repr__(self) -> str:
        return f"ConditionalValidationBehavior(registry={self.registry!r})"
