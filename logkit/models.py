"""Log entry model and severity levels."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

NOTICE = 25
logging.addLevelName(NOTICE, "NOTICE")

# Stdlib levels onto unified-logging severities.
# WARNING and CRITICAL are aliases of error and fault there.
_LEVELNO_TO_SEVERITY: dict[int, str] = {
    logging.NOTSET: "undefined",
    logging.DEBUG: "debug",
    logging.INFO: "info",
    NOTICE: "notice",
    logging.WARNING: "error",
    logging.ERROR: "error",
    logging.CRITICAL: "fault",
}


class Severity(Enum):
    UNDEFINED = "undefined"
    DEBUG = "debug"
    INFO = "info"
    NOTICE = "notice"
    ERROR = "error"
    FAULT = "fault"
    UNKNOWN = "unknown"

    @classmethod
    def from_levelno(cls, levelno: int) -> Severity:
        """Map a ``logging`` level number; unmapped levels become UNKNOWN."""
        return cls(_LEVELNO_TO_SEVERITY.get(levelno, "unknown"))

    @classmethod
    def parse(cls, value: Severity | str) -> Severity:
        """Accept a Severity or its string value (case-insensitive)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(value.strip().lower())
        raise ValueError(f"Invalid severity: {value!r}")


@dataclass(frozen=True)
class LogEntry:
    timestamp: datetime   # timezone-aware
    subsystem: str
    category: str
    severity: str         # Severity value, e.g. "error"
    message: str
