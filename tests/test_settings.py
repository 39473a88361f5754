"""
Tests for the settings loader.
"""

import pytest
from pathlib import Path

from conditional_validation.settings import (
    DEFAULTS,
    DotDict,
    load_settings,
    validate_settings,
)


class TestDotDict:
    """Tests for DotDict"""

    def test_dot_access(self):
        d = DotDict({"a": 1, "b": {"c": 2}})
        assert d.a == 1
        assert d.b.c == 2

    def test_missing_key_raises(self):
        d = DotDict({"a": 1})
        with pytest.raises(AttributeError):
            _ = d.nonexistent

    def test_get_nested(self):
        d = DotDict({"a": {"b": {"c": 3}}})
        assert d.get_nested("a.b.c") == 3
        assert d.get_nested("a.b.x", "default") == "default"

    def test_set_attr(self):
        d = DotDict({})
        d.foo = "bar"
        assert d["foo"] == "bar"


class TestLoadSettings:
    """Tests for loading settings.yaml"""

    def test_load_defaults_when_no_file(self):
        settings = load_settings(Path("/nonexistent/path.yaml"))
        assert settings.conditional_validation.default_condition_key == "if"
        assert settings.logging.level == DEFAULTS["logging"]["level"]

    def test_shipped_settings_file_is_valid(self):
        settings = load_settings()
        assert validate_settings(settings) == []

    def test_load_from_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(
            "conditional_validation:\n"
            "  default_condition_key: when\n",
            encoding="utf-8",
        )

        settings = load_settings(path)

        assert settings.conditional_validation.default_condition_key == "when"
        # Untouched keys keep their defaults
        assert settings.conditional_validation.validate_on_setup is True
        assert settings.logging.level == "INFO"

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("", encoding="utf-8")

        settings = load_settings(path)

        assert settings.conditional_validation.enable_tracing is False


class TestValidateSettings:
    """Tests for validate_settings"""

    def test_defaults_are_valid(self):
        assert validate_settings(DotDict(DEFAULTS)) == []

    def test_empty_condition_key(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(
            "conditional_validation:\n"
            "  default_condition_key: ''\n",
            encoding="utf-8",
        )

        errors = validate_settings(load_settings(path))

        assert any("default_condition_key" in e for e in errors)

    def test_unknown_log_level(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("logging:\n  level: LOUD\n", encoding="utf-8")

        errors = validate_settings(load_settings(path))

        assert any("logging.level" in e for e in errors)

    def test_non_boolean_flag(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(
            "conditional_validation:\n"
            "  enable_tracing: sometimes\n",
            encoding="utf-8",
        )

        errors = validate_settings(load_settings(path))

        assert errors == ["conditional_validation.enable_tracing must be true or false"]
