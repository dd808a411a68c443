"""Tests for logkit.facade."""

import json
import logging
from datetime import datetime, timedelta, timezone

import pytest

from conftest import FakeStore, make_raw
from logkit.config import Config
from logkit.context import (
    CustomBundle,
    CustomCategory,
    LogContext,
    MainBundle,
    NamedCategory,
)
from logkit.errors import StoreReadError, StoreUnavailable
from logkit.exporter import load_export
from logkit.facade import AppLogger
from logkit.models import Severity
from logkit.time_range import AllAvailable, LastMinutes, Since


def _context(subsystem, category="Production"):
    return LogContext(CustomBundle(subsystem), CustomCategory(category))


class TestEmissionGate:
    @pytest.mark.parametrize(
        "context",
        [
            None,
            LogContext.development(),
            LogContext.production(),
            LogContext(CustomBundle("com.test.app"), CustomCategory("Any")),
            LogContext.default(file="x.py", function="f"),
        ],
    )
    def test_handle_absent_for_every_context(self, gated_logger, context):
        assert gated_logger.handle(context) is None

    def test_named_handles_absent(self, gated_logger):
        assert gated_logger.development() is None
        assert gated_logger.production() is None

    def test_conveniences_empty_without_reading_store(self):
        store = FakeStore([make_raw(subsystem="x", category="Development")])
        app_logger = AppLogger(Config(test_environment=True), store)
        assert app_logger.development_logs() == []
        assert app_logger.production_logs() == []
        assert app_logger.export_development_logs() is None
        assert app_logger.export_production_logs() is None
        assert store.calls == []

    def test_strict_retrieval_still_reads_store(self):
        store = FakeStore([make_raw()])
        app_logger = AppLogger(Config(test_environment=True), store)
        assert len(app_logger.retrieve(AllAvailable())) == 1

    def test_auto_detected_under_pytest(self, store, monkeypatch):
        from logkit import environment

        monkeypatch.delenv("LOGKIT_TEST_ENVIRONMENT", raising=False)
        monkeypatch.setattr(environment, "_is_test_environment", None)
        app_logger = AppLogger(Config(), store)
        assert app_logger.test_environment is True
        assert app_logger.handle() is None

    def test_explicit_config_wins(self, app_logger):
        assert app_logger.test_environment is False


class TestHandle:
    def test_bound_to_context_strings(self, app_logger, subsystem):
        handle = app_logger.handle(_context(subsystem, "Payments"))
        assert handle.subsystem == subsystem
        assert handle.category == "Payments"

    def test_default_context_derived_from_caller(self, app_logger):
        handle = app_logger.handle()
        assert handle.category == (
            "File: test_facade.py, Function: test_default_context_derived_from_caller"
        )

    def test_development_and_production(self, app_logger):
        assert app_logger.development().category == "Development"
        assert app_logger.production().category == "Production"
        assert app_logger.production().subsystem == LogContext.production().bundle_description


class TestRetrieve:
    def test_emitted_entries_are_retrievable(self, app_logger, subsystem):
        context = _context(subsystem)
        handle = app_logger.handle(context)
        handle.error("boom")
        app_logger.handle(_context(subsystem, "Development")).info("ok")

        result = app_logger.retrieve(context=context)
        assert [(e.severity, e.message) for e in result] == [("error", "boom")]
        assert result[0].subsystem == subsystem
        assert result[0].category == "Production"

    def test_severity_filter(self, app_logger, subsystem):
        handle = app_logger.handle(_context(subsystem))
        handle.debug("trace")
        handle.notice("noted")
        handle.fault("down")
        result = app_logger.retrieve(severity=Severity.NOTICE, context=_context(subsystem))
        assert [e.message for e in result] == ["noted"]
        result = app_logger.retrieve(severity="fault", context=_context(subsystem))
        assert [e.message for e in result] == ["down"]

    def test_without_context_returns_all_subsystems(self, app_logger, subsystem):
        app_logger.handle(_context(subsystem, "A")).info("one")
        app_logger.handle(_context(subsystem + ".other", "B")).info("two")
        messages = [e.message for e in app_logger.retrieve()]
        assert "one" in messages and "two" in messages

    def test_since_future_is_empty(self, app_logger, subsystem):
        app_logger.handle(_context(subsystem)).info("now")
        future = datetime.now(timezone.utc) + timedelta(minutes=5)
        assert app_logger.retrieve(Since(future)) == []

    def test_default_window_uses_config_and_clock(self):
        now = datetime(2025, 7, 8, 12, 0, tzinfo=timezone.utc)
        store = FakeStore()
        app_logger = AppLogger(
            Config(test_environment=False, retrieve_window_minutes=20), store, clock=lambda: now
        )
        app_logger.retrieve()
        [(start, _)] = store.calls
        assert start == now - timedelta(minutes=20)

    def test_store_errors_propagate(self, app_logger, store):
        store.close()
        with pytest.raises(StoreUnavailable):
            app_logger.retrieve()

    def test_live_conveniences(self, store, monkeypatch, fresh_bundle_identifier):
        monkeypatch.setenv("LOGKIT_BUNDLE_IDENTIFIER", "com.logkit.convenience")
        app_logger = AppLogger(Config(test_environment=False), store)
        app_logger.development().info("dev entry")
        app_logger.production().error("prod entry")
        assert [e.message for e in app_logger.development_logs()] == ["dev entry"]
        assert [e.message for e in app_logger.production_logs()] == ["prod entry"]
        records = json.loads(app_logger.export_production_logs())
        assert [r["composedMessage"] for r in records] == ["prod entry"]
        records = json.loads(app_logger.export_development_logs())
        assert [r["level"] for r in records] == ["info"]


class TestExport:
    def test_strict_export_round_trip(self, app_logger, subsystem):
        context = _context(subsystem)
        app_logger.handle(context).error("GET /checkout failed")
        data = app_logger.export_json(context=context)
        [entry] = load_export(data)
        assert entry.message == "GET /checkout failed"
        assert entry.severity == "error"

    def test_export_is_deterministic(self, app_logger, subsystem):
        context = _context(subsystem)
        app_logger.handle(context).info("first")
        app_logger.handle(context).info("second")
        assert app_logger.export(AllAvailable(), context=context) == app_logger.export(
            AllAvailable(), context=context
        )

    def test_nothing_to_export_is_none(self, app_logger, subsystem):
        assert app_logger.export_json(context=_context(subsystem)) is None
        assert app_logger.export(context=_context(subsystem)) is None

    def test_default_window_is_export_hours(self):
        now = datetime(2025, 7, 8, 12, 0, tzinfo=timezone.utc)
        store = FakeStore()
        app_logger = AppLogger(
            Config(test_environment=False, export_window_hours=2), store, clock=lambda: now
        )
        app_logger.export()
        [(start, _)] = store.calls
        assert start == now - timedelta(hours=2)

    def test_strict_export_raises(self):
        app_logger = AppLogger(
            Config(test_environment=False), FakeStore(error=RuntimeError("read failed"))
        )
        with pytest.raises(StoreReadError):
            app_logger.export_json()

    def test_lenient_export_swallows_query_errors(self, caplog):
        app_logger = AppLogger(
            Config(test_environment=False), FakeStore(error=StoreUnavailable("restricted"))
        )
        with caplog.at_level(logging.WARNING, logger="logkit.facade"):
            assert app_logger.export() is None
        assert "Log export failed" in caplog.text

    def test_lenient_export_swallows_encoding_errors(self):
        store = FakeStore([make_raw(message="bad \ud800")])
        app_logger = AppLogger(Config(test_environment=False), store)
        assert app_logger.export(AllAvailable()) is None

    def test_lenient_export_with_range(self):
        store = FakeStore([make_raw(message="kept")])
        app_logger = AppLogger(Config(test_environment=False), store)
        assert app_logger.export(LastMinutes(1)) is None
        assert b"kept" in app_logger.export(AllAvailable())

    def test_lenient_export_swallows_argument_errors(self, caplog):
        app_logger = AppLogger(Config(test_environment=False), FakeStore([make_raw()]))
        with caplog.at_level(logging.WARNING, logger="logkit.facade"):
            assert app_logger.export("15m") is None
            assert app_logger.export(AllAvailable(), context=object()) is None
        assert caplog.text.count("Log export failed") == 2

    def test_strict_export_rejects_unknown_range(self):
        app_logger = AppLogger(Config(test_environment=False), FakeStore([make_raw()]))
        with pytest.raises(TypeError):
            app_logger.export_json("15m")
