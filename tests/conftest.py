"""Shared pytest fixtures for the logkit test suite."""

from __future__ import annotations

import logging
import os
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from logkit.config import Config
from logkit.context import main_bundle_identifier
from logkit.facade import AppLogger
from logkit.store import ProcessLogStore, RawEntry

T0 = datetime(2025, 7, 8, 9, 15, 0, tzinfo=timezone.utc)


def make_raw(
    offset_seconds: float = 0,
    subsystem: str = "com.app",
    category: str = "Production",
    levelno: int = logging.INFO,
    message: str = "ok",
    pid: int | None = None,
) -> RawEntry:
    """Build a RawEntry at T0 + offset for the current process."""
    return RawEntry(
        timestamp=T0 + timedelta(seconds=offset_seconds),
        subsystem=subsystem,
        category=category,
        levelno=levelno,
        message=message,
        pid=os.getpid() if pid is None else pid,
    )


class FakeStore:
    """Store double returning fixed entries, honouring start and pid."""

    def __init__(self, entries: list[RawEntry] | None = None, error: Exception | None = None):
        self.entries = list(entries or [])
        self.error = error
        self.calls: list[tuple[datetime, int]] = []

    def entries_since(self, start: datetime, pid: int) -> list[RawEntry]:
        self.calls.append((start, pid))
        if self.error is not None:
            raise self.error
        return [e for e in self.entries if e.pid == pid and e.timestamp >= start]


@pytest.fixture()
def subsystem() -> str:
    """A subsystem name unique to the test, so loggers never collide."""
    return f"com.logkit.test.{uuid.uuid4().hex[:8]}"


@pytest.fixture()
def fresh_bundle_identifier():
    """Forget the cached main bundle identifier before and after the test."""
    main_bundle_identifier.cache_clear()
    yield
    main_bundle_identifier.cache_clear()


@pytest.fixture()
def store():
    """ProcessLogStore installed on the root logger for the test's duration."""
    log_store = ProcessLogStore(capacity=1000).install()
    yield log_store
    log_store.uninstall()
    log_store.close()


@pytest.fixture()
def app_logger(store) -> AppLogger:
    """AppLogger with the test-environment gate forced off."""
    return AppLogger(Config(test_environment=False), store)


@pytest.fixture()
def gated_logger(store) -> AppLogger:
    """AppLogger with the test-environment gate forced on."""
    return AppLogger(Config(test_environment=True), store)
