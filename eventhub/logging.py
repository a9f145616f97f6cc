"""
Logging for EventHub.

The root logger is configured once, on first import:
- level from LOG_LEVEL (default INFO)
- one-line format when EVENTHUB_ENV=production, timestamps otherwise

Values that come from the shopper or the events API (ids, names, phone
numbers) go through the sanitizers below before being logged.
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

_CONTROL_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": ""})


def _configure_root_logger() -> None:
    root = logging.getLogger()
    if root.handlers:
        return

    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    production = os.environ.get("EVENTHUB_ENV") == "production"

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if production else LOG_FORMAT))
    root.setLevel(level)
    root.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    """Get a named logger (typically __name__)."""
    return logging.getLogger(name)


def _escape_log_injection(value: str) -> str:
    """Neutralize characters that could forge log lines (CWE-117)."""
    return value.translate(_CONTROL_CHARS)


def sanitize_id_for_logging(id_value: str | int | None) -> str:
    """Escaped id, cut to 8 characters; "N/A" when missing."""
    if id_value is None or id_value == "":
        return "N/A"
    return _escape_log_injection(str(id_value))[:8]


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """
    Escape free text for logging.

    Args:
        value: Text supplied by a user or the API
        max_length: Longer values are cut and suffixed with "..."
    """
    if not value:
        return "N/A"
    safe_value = _escape_log_injection(str(value))
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


def mask_phone_for_logging(phone: str | None) -> str:
    """Keep the country prefix and last 3 digits of a phone number."""
    if not phone:
        return "N/A"
    safe_value = _escape_log_injection(phone)
    if len(safe_value) <= 7:
        return "***"
    return f"{safe_value[:4]}***{safe_value[-3:]}"
