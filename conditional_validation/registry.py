"""
Per record type settings for conditional validation.

The registry is an ordinary object owned by the host application and
handed to the pruner, so tests and separate applications can each have
their own. It is read on every pruning pass and written at setup time;
concurrent writes for the same record type must be serialized by the
caller.

Example:
    registry = SettingsRegistry()
    registry.configure("Import", condition_key="when")

    registry.get("Import").condition_key   # "when"
    registry.get("Export").condition_key   # "if" (default, not stored)
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, List

DEFAULT_CONDITION_KEY = "if"


@dataclass(frozen=True)
class RecordSettings:
    """
    Settings for one record type.

    Attributes:
        condition_key: Key under which a rule definition carries its condition(s)
    """
    condition_key: str = DEFAULT_CONDITION_KEY

    def to_dict(self) -> Dict[str, Any]:
        return {"condition_key": self.condition_key}


_OPTION_NAMES = frozenset(f.name for f in fields(RecordSettings))


class SettingsRegistry:
    """Settings store keyed by record type."""

    def __init__(self, default_condition_key: str = DEFAULT_CONDITION_KEY):
        """
        Initialize an empty registry.

        Args:
            default_condition_key: Condition key for record types never configured
        """
        if not default_condition_key:
            raise ValueError("default_condition_key cannot be empty")
        self._defaults = RecordSettings(condition_key=default_condition_key)
        self._settings: Dict[str, RecordSettings] = {}

    @classmethod
    def from_settings(cls, settings) -> "SettingsRegistry":
        """Create a registry using the defaults from loaded settings.yaml."""
        key = settings.get_nested(
            "conditional_validation.default_condition_key", DEFAULT_CONDITION_KEY
        )
        return cls(default_condition_key=key)

    @property
    def defaults(self) -> RecordSettings:
        return self._defaults

    def configure(self, record_type: str, **options: Any) -> RecordSettings:
        """
        Merge options over the current settings of a record type.

        The first call for a record type starts from the defaults.

        Raises:
            TypeError: If an option name is unknown
            ValueError: If condition_key is empty
        """
        unknown = set(options) - _OPTION_NAMES
        if unknown:
            raise TypeError(
                f"Unknown setting(s) for '{record_type}': {', '.join(sorted(unknown))}"
            )
        if "condition_key" in options and not options["condition_key"]:
            raise ValueError("condition_key cannot be empty")

        current = self._settings.get(record_type, self._defaults)
        updated = replace(current, **options)
        self._settings[record_type] = updated
        return updated

    def get(self, record_type: str) -> RecordSettings:
        """Settings for a record type, the defaults if it was never configured."""
        return self._settings.get(record_type, self._defaults)

    def is_configured(self, record_type: str) -> bool:
        return record_type in self._settings

    def record_types(self) -> List[str]:
        return list(self._settings.keys())

    def __contains__(self, record_type: str) -> bool:
        return record_type in self._settings

    def __len__(self) -> int:
        return len(self._settings)

    def __repr__(self) -> str:
        return (
            f"SettingsRegistry(default_condition_key={self._defaults.condition_key!r}, "
            f"record_types={len(self._settings)})"
        )
