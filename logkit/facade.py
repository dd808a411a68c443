"""AppLogger: context-scoped logger handles plus log retrieval and export.

Retrieval is strict: store failures propagate as ``QueryError``. Export comes
in two flavours. ``export_json`` is strict like retrieval, while ``export``
is lenient and turns every failure into ``None``.

When the instance runs in a test environment, ``handle`` returns ``None``
and the fixed-window conveniences (``development_logs`` and friends) return
empty results without reading the store.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from logkit.config import Config
from logkit.context import LogContext
from logkit.environment import is_test_environment
from logkit.errors import LogKitError
from logkit.exporter import export_entries
from logkit.handles import HandleProvider, LoggerHandle
from logkit.models import LogEntry, Severity
from logkit.query import query
from logkit.time_range import LastHours, LastMinutes, TimeRange, resolve

logger = logging.getLogger(__name__)


class AppLogger:
    def __init__(
        self,
        config: Config,
        store,
        provider: HandleProvider | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._config = config
        self._store = store
        self._provider = provider or HandleProvider(config.capture_levelno)
        self._clock = clock
        if config.test_environment is None:
            self._test_environment = is_test_environment()
        else:
            self._test_environment = config.test_environment

    @property
    def config(self) -> Config:
        return self._config

    @property
    def test_environment(self) -> bool:
        return self._test_environment

    def _now(self) -> datetime | None:
        return self._clock() if self._clock is not None else None

    # --- emission ------------------------------------------------------

    def handle(self, context: LogContext | None = None) -> LoggerHandle | None:
        """Logger handle bound to ``context``; None in a test environment.

        Without a context, the category is derived from the caller's file
        and function.
        """
        if self._test_environment:
            return None
        if context is None:
            context = LogContext.default(depth=2)
        return self._provider.handle(context.bundle_description, context.category_description)

    def development(self) -> LoggerHandle | None:
        return self.handle(LogContext.development())

    def production(self) -> LoggerHandle | None:
        return self.handle(LogContext.production())

    # --- retrieval -----------------------------------------------------

    def retrieve(
        self,
        time_range: TimeRange | None = None,
        severity: Severity | str | None = None,
        context: LogContext | None = None,
    ) -> list[LogEntry]:
        """Entries of this process in ``time_range`` matching all given filters.

        Defaults to the last ``retrieve_window_minutes`` with no filters.
        Raises StoreUnavailable or StoreReadError.
        """
        if time_range is None:
            time_range = LastMinutes(self._config.retrieve_window_minutes)
        start = resolve(time_range, self._now())
        return query(self._store, start, severity=severity, context=context)

    def export_json(
        self,
        time_range: TimeRange | None = None,
        severity: Severity | str | None = None,
        context: LogContext | None = None,
    ) -> bytes | None:
        """Strict export: None when nothing matched, raises on any failure.

        Defaults to the last ``export_window_hours``. Raises QueryError or
        ExportEncodingError.
        """
        if time_range is None:
            time_range = LastHours(self._config.export_window_hours)
        entries = self.retrieve(time_range, severity=severity, context=context)
        return export_entries(entries)

    def export(
        self,
        time_range: TimeRange | None = None,
        severity: Severity | str | None = None,
        context: LogContext | None = None,
    ) -> bytes | None:
        """Lenient export: like ``export_json`` but never raises.

        Store, encoding and argument errors are logged and mapped to None.
        """
        try:
            return self.export_json(time_range, severity=severity, context=context)
        except (LogKitError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Log export failed: %s", e)
            return None

    # --- fixed-window conveniences -------------------------------------

    def development_logs(self) -> list[LogEntry]:
        """Development entries from the default retrieval window."""
        if self._test_environment:
            return []
        return self.retrieve(context=LogContext.development())

    def production_logs(self) -> list[LogEntry]:
        """Production entries from the default retrieval window."""
        if self._test_environment:
            return []
        return self.retrieve(context=LogContext.production())

    def export_development_logs(self) -> bytes | None:
        if self._test_environment:
            return None
        return self.export(context=LogContext.development())

    def export_production_logs(self) -> bytes | None:
        if self._test_environment:
            return None
        return self.export(context=LogContext.production())
