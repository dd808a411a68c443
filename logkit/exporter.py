"""Deterministic JSON export of log entries, and reading exports back."""

from __future__ import annotations

import json
import os
import tempfile
from datetime import datetime, timezone
from typing import Sequence

import jsonschema

from logkit.errors import ExportEncodingError, InvalidExportError
from logkit.models import LogEntry

DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

EXPORT_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "date": {
                "type": "string",
                "pattern": r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$",
            },
            "subsystem": {"type": "string"},
            "category": {"type": "string"},
            "level": {"type": "string"},
            "composedMessage": {"type": "string"},
        },
        "required": ["date", "subsystem", "category", "level", "composedMessage"],
        "additionalProperties": False,
    },
}

_validator = jsonschema.Draft202012Validator(EXPORT_SCHEMA)


def format_date(timestamp: datetime) -> str:
    """ISO 8601 in UTC with second precision, e.g. ``2025-07-08T09:15:00Z``."""
    if timestamp.tzinfo is None:
        timestamp = timestamp.astimezone()
    return timestamp.astimezone(timezone.utc).strftime(DATE_FORMAT)


def entry_to_record(entry: LogEntry) -> dict:
    return {
        "date": format_date(entry.timestamp),
        "subsystem": entry.subsystem,
        "category": entry.category,
        "level": entry.severity,
        "composedMessage": entry.message,
    }


def export_entries(entries: Sequence[LogEntry]) -> bytes | None:
    """Serialize entries to pretty-printed JSON with sorted keys.

    Returns None when there is nothing to export. Identical input always
    yields identical bytes. Raises ExportEncodingError on any encode failure.
    """
    if not entries:
        return None

    try:
        records = [entry_to_record(entry) for entry in entries]
        text = json.dumps(
            records,
            indent=2,
            sort_keys=True,
            separators=(",", " : "),
            ensure_ascii=False,
        )
        # Slashes are escaped to stay byte-compatible with earlier exports.
        return text.replace("/", "\\/").encode("utf-8")
    except (TypeError, ValueError, AttributeError, OverflowError) as e:
        raise ExportEncodingError(f"Failed to encode log export: {e}") from e


def _parse_date(value: str) -> datetime:
    return datetime.strptime(value, DATE_FORMAT).replace(tzinfo=timezone.utc)


def load_export(data: bytes | str) -> list[LogEntry]:
    """Parse a previous export back into entries.

    Raises InvalidExportError if the data is not JSON or does not match
    EXPORT_SCHEMA.
    """
    try:
        records = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidExportError(f"Export is not valid JSON: {e}") from e

    errors = list(_validator.iter_errors(records))
    if errors:
        messages = "; ".join(err.message for err in errors[:5])
        raise InvalidExportError(f"Export does not match schema: {messages}")

    try:
        return [
            LogEntry(
                timestamp=_parse_date(record["date"]),
                subsystem=record["subsystem"],
                category=record["category"],
                severity=record["level"],
                message=record["composedMessage"],
            )
            for record in records
        ]
    except ValueError as e:
        raise InvalidExportError(f"Invalid date in export: {e}") from e


def save_export(data: bytes, directory: str, filename: str | None = None) -> str:
    """Atomically write export bytes into ``directory``. Returns the file path."""
    if filename is None:
        stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S_%f")
        filename = f"logs-{stamp}.json"

    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, filename)
    fd, tmp = tempfile.mkstemp(dir=directory, suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp, path)
    except Exception:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise
    return path
