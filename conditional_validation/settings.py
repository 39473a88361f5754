"""
Settings loader for settings.yaml.

Usage:
    from conditional_validation.settings import get_settings

    key = get_settings().conditional_validation.default_condition_key
    level = get_settings().get_nested("logging.level", "INFO")
"""

import logging
from pathlib import Path
from typing import Any, List, Optional

import yaml


# Path to the settings file shipped with the package
SETTINGS_FILE = Path(__file__).parent / "settings.yaml"

# Defaults (used when a key is missing from the YAML)
DEFAULTS = {
    "logging": {
        "level": "INFO",
    },
    "conditional_validation": {
        "default_condition_key": "if",
        "enable_tracing": False,
        "log_each_condition": False,
        "validate_on_setup": True,
    },
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class DotDict(dict):
    """Dict with attribute access: d.key instead of d['key']"""

    def __getattr__(self, key: str) -> Any:
        try:
            value = self[key]
            if isinstance(value, dict):
                return DotDict(value)
            return value
        except KeyError:
            raise AttributeError(f"Setting '{key}' not found")

    def __setattr__(self, key: str, value: Any) -> None:
        self[key] = value

    def get_nested(self, path: str, default: Any = None) -> Any:
        """Get a value by path: 'logging.level'"""
        keys = path.split('.')
        value = self
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge (override wins over base)"""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_settings(filepath: Optional[Path] = None) -> DotDict:
    """
    Load settings from a YAML file.

    Priority:
    1. Values from the YAML file
    2. DEFAULTS

    Args:
        filepath: Settings file (settings.yaml next to this module by default)

    Returns:
        DotDict with settings
    """
    filepath = Path(filepath) if filepath else SETTINGS_FILE

    config = _deep_merge({}, DEFAULTS)

    if filepath.exists():
        with open(filepath, "r", encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}
        config = _deep_merge(config, yaml_config)
    else:
        logging.getLogger(__name__).warning(
            "Settings file not found: %s, using defaults", filepath
        )

    return DotDict(config)


def validate_settings(settings: DotDict) -> List[str]:
    """
    Validate settings.

    Returns:
        List of errors (empty if everything is OK)
    """
    errors = []

    level = settings.get_nested("logging.level", "INFO")
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        errors.append(f"logging.level must be one of {', '.join(LOG_LEVELS)}")

    key = settings.get_nested("conditional_validation.default_condition_key")
    if not isinstance(key, str) or not key:
        errors.append("conditional_validation.default_condition_key must be a non-empty string")

    for flag in ("enable_tracing", "log_each_condition", "validate_on_setup"):
        value = settings.get_nested(f"conditional_validation.{flag}")
        if not isinstance(value, bool):
            errors.append(f"conditional_validation.{flag} must be true or false")

    return errors


# Process settings (lazy)
_settings = None


def get_settings() -> DotDict:
    """Get process settings (singleton)"""
    global _settings
    if _settings is None:
        _settings = load_settings()
        errors = validate_settings(_settings)
        if errors:
            log = logging.getLogger(__name__)
            for err in errors:
                log.warning("Invalid setting: %s", err)
    return _settings


def reload_settings() -> DotDict:
    """Reload settings from the file"""
    global _settings
    _settings = None
    return get_settings()
