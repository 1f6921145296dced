"""
Log Sanitization

Redacts credentials from log records before they are emitted: API keys,
bearer tokens, x402 payment payloads and wallet private keys.
"""

from __future__ import annotations

import logging
import re
import sys
from re import Pattern
from typing import Any

# Patterns for sensitive data that should be redacted
SENSITIVE_PATTERNS: list[tuple[str, Pattern[str]]] = [
    (
        "API_KEY",
        re.compile(r"(api[_-]?key|apikey)\s*[=:]\s*['\"]?[\w\-]{16,}['\"]?", re.IGNORECASE),
    ),
    (
        "SECRET",
        re.compile(
            r"(secret|password|private[_-]?key)\s*[=:]\s*['\"]?[^\s'\"]{8,}['\"]?",
            re.IGNORECASE,
        ),
    ),
    # x402 payment headers carry signed authorizations
    (
        "X_PAYMENT",
        re.compile(
            r"X-PAYMENT(-RESPONSE)?['\"]?\s*[=:]\s*['\"]?[A-Za-z0-9+/=_\-]{16,}['\"]?",
            re.IGNORECASE,
        ),
    ),
    # EVM private keys: 0x followed by 64 hex chars
    ("WALLET_KEY", re.compile(r"\b0x[0-9a-fA-F]{64}\b")),
    ("BEARER", re.compile(r"Bearer\s+[a-zA-Z0-9\-_\.]+", re.IGNORECASE)),
    ("BASIC_AUTH", re.compile(r"Basic\s+[a-zA-Z0-9+/=]{20,}", re.IGNORECASE)),
]

# Placeholder for redacted content
REDACTION_PLACEHOLDER = "[REDACTED]"


class SanitizingFilter(logging.Filter):
    """
    A logging filter that redacts credentials from log messages.

    Usage:
        logger = logging.getLogger(__name__)
        logger.addFilter(SanitizingFilter())
    """

    def __init__(
        self,
        name: str = "",
        additional_patterns: list[tuple[str, Pattern[str]]] | None = None,
        redaction_placeholder: str = REDACTION_PLACEHOLDER,
    ):
        """
        Initialize the sanitizing filter.

        Args:
            name: Filter name (passed to parent)
            additional_patterns: Extra patterns to redact beyond defaults
            redaction_placeholder: Text to replace sensitive data with
        """
        super().__init__(name)
        self._patterns = list(SENSITIVE_PATTERNS)
        if additional_patterns:
            self._patterns.extend(additional_patterns)
        self._placeholder = redaction_placeholder

    def filter(self, record: logging.LogRecord) -> bool:
        """Sanitize the record in place; never drops it."""
        if record.msg:
            record.msg = self.sanitize(str(record.msg))

        if record.args:
            if isinstance(record.args, dict):
                record.args = {k: self._sanitize_value(v) for k, v in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(self._sanitize_value(arg) for arg in record.args)

        return True

    def sanitize(self, text: str) -> str:
        """Replace every sensitive match with ``NAME=[REDACTED]``."""
        result = text
        for pattern_name, pattern in self._patterns:
            result = pattern.sub(f"{pattern_name}={self._placeholder}", result)
        return result

    def _sanitize_value(self, value: Any) -> Any:
        if isinstance(value, str):
            return self.sanitize(value)
        return value


def configure_sanitized_logging(
    level: int = logging.INFO,
    format_string: str | None = None,
    additional_patterns: list[tuple[str, Pattern[str]]] | None = None,
) -> None:
    """
    Configure the root logger to write to stdout with sanitization enabled.

    Args:
        level: Logging level
        format_string: Log format string (uses default if not specified)
        additional_patterns: Extra patterns to redact
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(level=level, format=format_string, stream=sys.stdout)

    root_logger = logging.getLogger()
    sanitizing_filter = SanitizingFilter(additional_patterns=additional_patterns)
    root_logger.addFilter(sanitizing_filter)

    # Records from child loggers skip root filters, so handlers need it too
    for handler in root_logger.handlers:
        handler.addFilter(sanitizing_filter)
