"""Logging filters that scrub sensitive content."""

from __future__ import annotations

import logging
import re

_SENSITIVE_PATTERN = re.compile(
    r"(Authorization: Bearer\s+[\w\.-]+|access_token\"\s*:\s*\"[^\"]+\"|password\"\s*:\s*\"[^\"]+\")",
    re.IGNORECASE,
)
_EMAIL_PATTERN = re.compile(r"[\w.+-]+@[\w-]+(\.[\w-]+)+")


def redact(message: str) -> str:
    """Mask tokens, passwords and e-mail addresses in a log line."""
    message = _SENSITIVE_PATTERN.sub("**REDACTED**", message)
    return _EMAIL_PATTERN.sub("**EMAIL**", message)


class SensitiveFilter(logging.Filter):
    """Replace sensitive values in log records with redaction markers."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact(record.getMessage())
            record.args = ()
        return True


__all__ = ["SensitiveFilter", "redact"]
