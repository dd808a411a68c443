"""logkit: context-scoped logger handles and in-process log retrieval/export."""

from logkit.config import Config, load_config
from logkit.context import (
    DEVELOPMENT,
    PRODUCTION,
    CustomBundle,
    CustomCategory,
    DerivedCategory,
    LogContext,
    MainBundle,
    NamedCategory,
)
from logkit.devtools import get_logger
from logkit.errors import (
    ExportEncodingError,
    InvalidExportError,
    LogKitError,
    QueryError,
    StoreReadError,
    StoreUnavailable,
)
from logkit.exporter import export_entries, load_export, save_export
from logkit.facade import AppLogger
from logkit.handles import HandleProvider, LoggerHandle
from logkit.models import NOTICE, LogEntry, Severity
from logkit.store import ProcessLogStore
from logkit.time_range import AllAvailable, LastDays, LastHours, LastMinutes, Since, resolve

__all__ = [
    "AllAvailable",
    "AppLogger",
    "Config",
    "CustomBundle",
    "CustomCategory",
    "DEVELOPMENT",
    "DerivedCategory",
    "ExportEncodingError",
    "HandleProvider",
    "InvalidExportError",
    "LastDays",
    "LastHours",
    "LastMinutes",
    "LogContext",
    "LogEntry",
    "LogKitError",
    "LoggerHandle",
    "MainBundle",
    "NOTICE",
    "NamedCategory",
    "PRODUCTION",
    "ProcessLogStore",
    "QueryError",
    "Severity",
    "Since",
    "StoreReadError",
    "StoreUnavailable",
    "export_entries",
    "get_logger",
    "load_config",
    "load_export",
    "resolve",
    "save_export",
]
