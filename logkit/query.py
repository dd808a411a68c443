"""Query engine: read the process log store and filter by severity and context."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Callable

from logkit.context import LogContext
from logkit.errors import QueryError, StoreReadError
from logkit.models import LogEntry, Severity
from logkit.store import RawEntry

logger = logging.getLogger(__name__)


def to_log_entry(raw: RawEntry) -> LogEntry:
    return LogEntry(
        timestamp=raw.timestamp,
        subsystem=raw.subsystem,
        category=raw.category,
        severity=Severity.from_levelno(raw.levelno).value,
        message=raw.message,
    )


def filter_by_severity(entry: LogEntry, severity: Severity) -> bool:
    """True if the entry has exactly this severity."""
    return entry.severity == severity.value


def filter_by_context(entry: LogEntry, subsystem: str, category: str) -> bool:
    """True if both subsystem and category match exactly."""
    return entry.subsystem == subsystem and entry.category == category


def build_filter_chain(
    severity: Severity | str | None = None,
    context: LogContext | None = None,
) -> Callable[[LogEntry], bool]:
    """Combine the active filters into a single callable.

    An omitted filter matches everything. Returns a function that ANDs all
    active predicates together.
    """
    predicates = []

    if severity is not None:
        wanted = Severity.parse(severity)
        predicates.append(lambda entry, s=wanted: filter_by_severity(entry, s))

    if context is not None:
        # Display strings are resolved once per query, not per entry.
        subsystem = context.bundle_description
        category = context.category_description
        predicates.append(
            lambda entry, s=subsystem, c=category: filter_by_context(entry, s, c)
        )

    if not predicates:
        return lambda entry: True

    def combined(entry: LogEntry) -> bool:
        return all(p(entry) for p in predicates)

    return combined


def query(
    store,
    start: datetime,
    severity: Severity | str | None = None,
    context: LogContext | None = None,
    pid: int | None = None,
) -> list[LogEntry]:
    """Return entries of the current process since ``start`` that pass the filters.

    ``store`` is anything with ``entries_since(start, pid)``. Results keep the
    store's order. Raises StoreUnavailable or StoreReadError.
    """
    matches = build_filter_chain(severity, context)
    pid = os.getpid() if pid is None else pid

    try:
        raw_entries = store.entries_since(start, pid)
        entries = [to_log_entry(raw) for raw in raw_entries]
    except QueryError:
        raise
    except Exception as e:
        raise StoreReadError(f"Failed to read log entries: {e}") from e

    result = [entry for entry in entries if matches(entry)]
    logger.debug("Query since %s matched %d of %d entries", start, len(result), len(entries))
    return result
