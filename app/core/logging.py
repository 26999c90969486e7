"""
Logging utilities shared by every layer.

Modules obtain their logger through `get_logger(__name__)`; handlers and
formatters are wired in `app.config.logging`.
"""

import logging
from typing import Any, Dict

REDACTED = "[REDACTED]"

SENSITIVE_KEYS = (
    "password",
    "token",
    "secret",
    "authorization",
    "cookie",
    "credentials",
)


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return any(sensitive in lowered for sensitive in SENSITIVE_KEYS)


def sanitize(data: Any) -> Any:
    """Return a copy of ``data`` with values under sensitive keys masked."""
    if isinstance(data, dict):
        return {
            key: REDACTED if _is_sensitive(str(key)) else sanitize(value)
            for key, value in data.items()
        }
    if isinstance(data, (list, tuple)):
        return type(data)(sanitize(item) for item in data)
    return data


class SensitiveDataFilter(logging.Filter):
    """Mask sensitive values passed to the logger through ``extra``."""

    _STANDARD_ATTRS = frozenset(
        logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
    ) | {"message", "asctime"}

    def filter(self, record: logging.LogRecord) -> bool:
        extras: Dict[str, Any] = {
            key: value
            for key, value in record.__dict__.items()
            if key not in self._STANDARD_ATTRS
        }
        for key, value in extras.items():
            if _is_sensitive(key):
                setattr(record, key, REDACTED)
            elif isinstance(value, (dict, list, tuple)):
                setattr(record, key, sanitize(value))
        return True


def get_logger(name: str) -> logging.Logger:
    """Get logger with context"""
    return logging.getLogger(name)
