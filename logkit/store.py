"""In-process log store fed by the stdlib ``logging`` machinery.

``ProcessLogStore`` is a ``logging.Handler`` that keeps a bounded, ordered
record of what the process has emitted. It plays the role of the system log
store: the query engine asks it for everything since a start instant and
filters the result.
"""

from __future__ import annotations

import collections
import logging
import os
import threading
from dataclasses import dataclass
from datetime import datetime, timezone

from logkit.errors import StoreUnavailable


@dataclass(frozen=True)
class RawEntry:
    timestamp: datetime
    subsystem: str
    category: str
    levelno: int
    message: str
    pid: int


class _SkipOwnRecords(logging.Filter):
    """Drop records from logkit's own loggers so reads never feed the store."""

    def filter(self, record: logging.LogRecord) -> bool:
        return not (record.name == "logkit" or record.name.startswith("logkit."))


class ProcessLogStore(logging.Handler):
    """Thread-safe in-memory log store backed by a bounded deque."""

    def __init__(self, capacity: int = 10_000, level: int = logging.NOTSET):
        super().__init__(level)
        self._entries: collections.deque[RawEntry] = collections.deque(maxlen=capacity)
        self._store_lock = threading.Lock()
        self._shut = False
        self.addFilter(_SkipOwnRecords())

    @property
    def capacity(self) -> int:
        return self._entries.maxlen

    @property
    def size(self) -> int:
        return len(self._entries)

    @property
    def closed(self) -> bool:
        return self._shut

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = RawEntry(
                timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc),
                subsystem=getattr(record, "subsystem", record.name),
                category=getattr(record, "category", ""),
                levelno=record.levelno,
                message=record.getMessage(),
                pid=record.process if record.process is not None else os.getpid(),
            )
        except Exception:
            self.handleError(record)
            return

        with self._store_lock:
            if not self._shut:
                self._entries.append(entry)

    def entries_since(self, start: datetime, pid: int) -> list[RawEntry]:
        """Snapshot of entries written by ``pid`` at or after ``start``, oldest first."""
        if self._shut:
            raise StoreUnavailable("Log store has been closed")
        if start.tzinfo is None:
            start = start.astimezone()

        with self._store_lock:
            snapshot = list(self._entries)
        return [e for e in snapshot if e.pid == pid and e.timestamp >= start]

    def install(self, logger: logging.Logger | None = None) -> ProcessLogStore:
        """Attach to ``logger`` (root by default) and return self."""
        target = logger if logger is not None else logging.getLogger()
        if self not in target.handlers:
            target.addHandler(self)
        return self

    def uninstall(self, logger: logging.Logger | None = None) -> None:
        target = logger if logger is not None else logging.getLogger()
        target.removeHandler(self)

    def clear(self) -> None:
        with self._store_lock:
            self._entries.clear()

    def close(self) -> None:
        with self._store_lock:
            self._shut = True
            self._entries.clear()
        super().close()
