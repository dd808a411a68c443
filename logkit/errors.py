"""Exception hierarchy for log retrieval and export."""


class LogKitError(Exception):
    """Base class for all logkit errors."""


class QueryError(LogKitError):
    """Raised when log entries cannot be retrieved from the store."""


class StoreUnavailable(QueryError):
    """Raised when the log store cannot be opened."""


class StoreReadError(QueryError):
    """Raised when enumerating store entries fails after opening."""


class ExportEncodingError(LogKitError):
    """Raised when an entry set cannot be serialized for export."""


class InvalidExportError(LogKitError, ValueError):
    """Raised when previously exported data does not match the export format."""
