"""
Evaluation trace and trace collector for rule pruning.

Answers "why did this rule not run?" after a validation pass: every
condition evaluated is recorded with the value found in the record, and
every rule gets an outcome.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, TYPE_CHECKING

from conditional_validation.conditions.paths import ABSENT

if TYPE_CHECKING:
    from conditional_validation.conditions.normalizer import Condition


class RuleOutcome(str, Enum):
    """
    What happened to a rule during pruning.

    - UNCONDITIONAL: Rule has no condition, always kept
    - KEPT: All conditions passed
    - PRUNED: At least one condition failed, rule removed
    """
    UNCONDITIONAL = "unconditional"
    KEPT = "kept"
    PRUNED = "pruned"


@dataclass
class ConditionEntry:
    """
    Record of a single condition evaluation.

    Attributes:
        field: Field the rule belongs to
        rule: Rule name
        path: Path the condition checked
        operator: Operator as written in the rule
        expected: Expected value from the condition
        actual: Value found in the record (ABSENT if the path was missing)
        exists: Whether the path existed
        result: Boolean result of the evaluation
        timestamp: When the evaluation occurred
    """
    field: str
    rule: str
    path: str
    operator: Any
    expected: Any
    actual: Any
    exists: bool
    result: bool
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "field": self.field,
            "rule": self.rule,
            "path": self.path,
            "operator": str(self.operator),
            "expected": self.expected,
            "actual": None if self.actual is ABSENT else self.actual,
            "exists": self.exists,
            "result": self.result,
            "timestamp": self.timestamp.isoformat(),
        }

    def to_compact_string(self) -> str:
        """Convert to compact string representation."""
        result_str = "PASS" if self.result else "FAIL"
        actual_str = "<missing>" if not self.exists else repr(self.actual)
        return (
            f"  {self.path} {self.operator} {self.expected!r}: "
            f"{result_str} (actual={actual_str})"
        )


@dataclass
class EvaluationTrace:
    """
    Trace of one pruning pass over a rule set.

    Attributes:
        record_type: Record type the pass ran for
        entries: Condition evaluations in order
        outcomes: Outcome per (field, rule)
        start_time: When the pass started
        end_time: When the pass completed
    """
    record_type: str = ""
    entries: List[ConditionEntry] = field(default_factory=list)
    outcomes: Dict[Tuple[str, str], RuleOutcome] = field(default_factory=dict)
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None

    def record(
        self,
        field: str,
        rule: str,
        condition: "Condition",
        actual: Any,
        exists: bool,
        result: bool,
    ) -> None:
        """Record a condition evaluation."""
        self.entries.append(ConditionEntry(
            field=field,
            rule=rule,
            path=condition.path,
            operator=condition.operator,
            expected=condition.value,
            actual=actual,
            exists=exists,
            result=result,
        ))

    def set_outcome(self, field: str, rule: str, outcome: RuleOutcome) -> None:
        self.outcomes[(field, rule)] = outcome

    def finish(self) -> None:
        self.end_time = datetime.now()

    def _rules_with(self, outcome: RuleOutcome) -> List[str]:
        return [
            f"{field_name}.{rule}"
            for (field_name, rule), value in self.outcomes.items()
            if value == outcome
        ]

    @property
    def pruned_rules(self) -> List[str]:
        """``field.rule`` names removed in this pass."""
        return self._rules_with(RuleOutcome.PRUNED)

    @property
    def kept_rules(self) -> List[str]:
        """``field.rule`` names whose conditions all passed."""
        return self._rules_with(RuleOutcome.KEPT)

    @property
    def conditions_checked(self) -> int:
        return len(self.entries)

    @property
    def conditions_passed(self) -> int:
        return sum(1 for e in self.entries if e.result)

    def entries_for(self, field: str, rule: str) -> List[ConditionEntry]:
        return [e for e in self.entries if e.field == field and e.rule == rule]

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert trace to dictionary representation.

        Suitable for JSON serialization and storage.
        """
        return {
            "record_type": self.record_type,
            "conditions_checked": self.conditions_checked,
            "conditions_passed": self.conditions_passed,
            "pruned_rules": self.pruned_rules,
            "kept_rules": self.kept_rules,
            "entries": [e.to_dict() for e in self.entries],
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
        }

    def to_compact_string(self) -> str:
        """
        Convert to compact string for debugging output.

        Format:
        [RULE] field.rule -> outcome
          path operator 'expected': PASS (actual='value')
        """
        lines = []
        for (field_name, rule), outcome in self.outcomes.items():
            lines.append(f"[RULE] {field_name}.{rule} -> {outcome.value}")
            for entry in self.entries_for(field_name, rule):
                lines.append(entry.to_compact_string())
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"EvaluationTrace(record_type={self.record_type!r}, "
            f"checked={self.conditions_checked}, "
            f"pruned={len(self.pruned_rules)})"
        )


@dataclass
class TraceSummary:
    """
    Summary statistics for a collection of traces.

    Attributes:
        total_traces: Total number of traces
        total_conditions_checked: Total conditions evaluated
        pruned_counts: How often each ``field.rule`` was pruned
    """
    total_traces: int = 0
    total_conditions_checked: int = 0
    pruned_counts: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "total_traces": self.total_traces,
            "total_conditions_checked": self.total_conditions_checked,
            "avg_conditions_per_trace": (
                round(self.total_conditions_checked / self.total_traces, 2)
                if self.total_traces > 0 else 0
            ),
            "pruned_counts": self.pruned_counts,
        }


class TraceCollector:
    """
    Collector for pruning traces across many validation passes.

    Example:
        collector = TraceCollector()
        trace = collector.create_trace("Import")
        pruner.prune(rule_set, record, "Import", trace=trace)
        summary = collector.get_summary()
    """

    def __init__(self):
        self._traces: List[EvaluationTrace] = []

    def create_trace(self, record_type: str = "") -> EvaluationTrace:
        """Create a new trace and add it to the collection."""
        trace = EvaluationTrace(record_type=record_type)
        self._traces.append(trace)
        return trace

    def add_trace(self, trace: EvaluationTrace) -> None:
        self._traces.append(trace)

    def get_traces(self) -> List[EvaluationTrace]:
        """Get all collected traces."""
        return list(self._traces)

    def get_summary(self) -> TraceSummary:
        """Get summary statistics for all traces."""
        summary = TraceSummary(total_traces=len(self._traces))

        for trace in self._traces:
            summary.total_conditions_checked += trace.conditions_checked
            for name in trace.pruned_rules:
                summary.pruned_counts[name] = summary.pruned_counts.get(name, 0) + 1

        return summary

    def clear(self) -> None:
        """Clear all collected traces."""
        self._traces.clear()

    def __len__(self) -> int:
        return len(self._traces)

    def __iter__(self):
        return iter(self._traces)

    def __repr__(self) -> str:
        return f"TraceCollector(traces={len(self._traces)})"
