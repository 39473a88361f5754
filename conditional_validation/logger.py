"""
Structured logging for conditional validation.

JSON logs for production, readable lines for development.
Every line of a pruning pass carries the record type being validated.

Usage:
    from conditional_validation.logger import logger

    token = logger.set_record_type("Import")
    logger.info("Pruning rule set", fields=3)
    logger.event("rule_pruned", field="category_csv_field", rule="isSet")
    logger.reset_record_type(token)
"""

import json
import logging
import os
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from conditional_validation.settings import get_settings


# Context-local record type, isolated between concurrent validation passes
_record_type_var: ContextVar[Optional[str]] = ContextVar('record_type', default=None)


class StructuredLogger:
    """
    Structured logger with JSON output and record type tracing.

    - JSON format for production (LOG_FORMAT=json)
    - Readable format for development (default)
    - Record type added to every line while set
    - event() for pruning events
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(name)

        if not self.logger.handlers:
            self._setup_logger()

    def _setup_logger(self) -> None:
        """Configure level and handler from settings and environment"""
        level_name = get_settings().get_nested("logging.level", "INFO")
        level = getattr(logging, str(level_name).upper(), logging.INFO)
        self.logger.setLevel(level)

        handler = logging.StreamHandler()
        handler.setLevel(level)

        if os.environ.get("LOG_FORMAT", "readable") == "json":
            formatter = logging.Formatter("%(message)s")
        else:
            formatter = logging.Formatter(
                "[%(asctime)s] %(levelname)s - %(message)s",
                datefmt="%H:%M:%S"
            )

        handler.setFormatter(formatter)
        self.logger.addHandler(handler)

        self.logger.propagate = False

    @property
    def record_type(self) -> Optional[str]:
        """Context-local record type"""
        return _record_type_var.get()

    def set_record_type(self, record_type: str) -> Token:
        """Set the record type; pass the returned token to reset_record_type"""
        return _record_type_var.set(record_type)

    def reset_record_type(self, token: Token) -> None:
        """Restore the record type that was current before set_record_type"""
        _record_type_var.reset(token)

    def clear_record_type(self) -> None:
        _record_type_var.set(None)

    def _format_structured(self, level: str, message: str, **kwargs: Any) -> Dict[str, Any]:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": level,
            "logger": self.name,
            "message": message,
        }

        if self.record_type:
            log_entry["record_type"] = self.record_type

        if kwargs:
            log_entry.update(kwargs)

        return log_entry

    def _should_use_json(self) -> bool:
        return os.environ.get("LOG_FORMAT", "readable") == "json"

    def _log(self, level: str, message: str, log_method, **kwargs: Any) -> None:
        if self._should_use_json():
            structured = self._format_structured(level, message, **kwargs)
            log_method(json.dumps(structured, ensure_ascii=False, default=str))
        else:
            if kwargs:
                extras = ", ".join(f"{k}={v}" for k, v in kwargs.items())
                full_message = f"{message} [{extras}]"
            else:
                full_message = message

            if self.record_type:
                full_message = f"[{self.record_type}] {full_message}"

            log_method(full_message)

    def is_enabled_for(self, level: int) -> bool:
        return self.logger.isEnabledFor(level)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log("DEBUG", message, self.logger.debug, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log("INFO", message, self.logger.info, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log("WARNING", message, self.logger.warning, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log("ERROR", message, self.logger.error, **kwargs)

    def event(self, event_type: str, **kwargs: Any) -> None:
        """
        Log a pruning event at debug level.

        Example:
            logger.event("rule_pruned", field="file", rule="extension")
        """
        self._log("EVENT", event_type, self.logger.debug, **kwargs)


# Singleton logger
logger = StructuredLogger("conditional_validation")


def create_test_logger(name: str = "test") -> StructuredLogger:
    """Isolated logger for tests"""
    return StructuredLogger(f"conditional_validation.{name}")
