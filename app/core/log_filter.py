"""Logging filter for redacting sensitive data from log messages."""

import logging
import re
from typing import Pattern


class SensitiveDataFilter(logging.Filter):
    """Filter to redact sensitive data from log messages.

    Redacts:
    - Google API keys (``AIza...``) and ``GOOGLE_API_KEY`` assignments
    - The service's own ``X-API-Key`` header
    - Bearer tokens and Authorization headers
    - Inline audio payloads (base64 data URLs)
    """

    def __init__(self):
        """Initialize filter with redaction patterns."""
        super().__init__()

        # Order matters - more specific patterns should come first
        self.patterns: list[tuple[Pattern, str]] = [
            (
                re.compile(r"(Authorization):\s+(Bearer\s+)?([^\s,]+)", re.IGNORECASE),
                r"\1: ***REDACTED***",
            ),
            (
                re.compile(r"(X-API-Key):\s*([^\s,]+)", re.IGNORECASE),
                r"\1: ***REDACTED***",
            ),
            (
                re.compile(r"(GOOGLE_API_KEY|API_KEY)=([^\s,\)]+)", re.IGNORECASE),
                r"\1=***REDACTED***",
            ),
            (
                re.compile(
                    r"(api[_-]?key|apikey|token|secret|password)['\"]?\s*[:=]\s*['\"]?"
                    r"([A-Za-z0-9_\-\.]{20,})",
                    re.IGNORECASE,
                ),
                r"\1=***REDACTED***",
            ),
            (
                re.compile(r"\bBearer\s+([A-Za-z0-9_\-\.=]+)", re.IGNORECASE),
                r"Bearer ***REDACTED***",
            ),
            (
                re.compile(r"\bAIza[A-Za-z0-9_\-]{15,}\b"),
                r"***REDACTED***",
            ),
            # Inline audio must never end up in the log files
            (
                re.compile(r"(data:audio/[\w.+-]+;base64,)[A-Za-z0-9+/=]+", re.IGNORECASE),
                r"\1***REDACTED***",
            ),
        ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter log record by redacting sensitive data.

        Args:
            record: Log record to filter

        Returns:
            True (always pass the record after redaction)
        """
        if record.msg:
            record.msg = self.redact(str(record.msg))

        if record.args:
            if isinstance(record.args, dict):
                record.args = {k: self._redact_value(v) for k, v in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(self._redact_value(arg) for arg in record.args)

        if record.exc_text:
            record.exc_text = self.redact(record.exc_text)

        return True

    def _redact_value(self, value):
        # Only strings are redacted so %d / %f formatting keeps working
        if isinstance(value, str):
            return self.redact(value)
        return value

    def redact(self, text: str) -> str:
        """Apply redaction patterns to text."""
        for pattern, replacement in self.patterns:
            text = pattern.sub(replacement, text)
        return text
