"""Logging helpers for the triage core."""
from __future__ import annotations

import logging
import re
from typing import Optional

from .config import get_settings

_RE_SENSITIVE = re.compile(
    r"(\b[\w.+-]+@[\w-]+\.[\w.-]+\b"
    r"|(?<![\w-])(?:\+\d{1,3}[\s.-]?)?(?:\(\d{2,3}\)|\d{2,3})[\s.-]\d{3,5}[\s.-]\d{4}(?![\w-]))"
)


def _redact(value: object) -> object:
    if isinstance(value, str):
        return _RE_SENSITIVE.sub("[REDACTED]", value)
    return value


class PHIRedactor(logging.Filter):
    """Filter that redacts phone numbers and e-mail addresses from log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        record.msg = _redact(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(_redact(arg) for arg in record.args)
        return True


def setup_logging(level: Optional[str] = None) -> None:
    """Configure global logging handlers."""

    settings = get_settings()
    logging.basicConfig(
        level=level or settings.log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    if not settings.log_redact_phi:
        return
    for handler in logging.getLogger().handlers:
        if not any(isinstance(existing, PHIRedactor) for existing in handler.filters):
            handler.addFilter(PHIRedactor())
