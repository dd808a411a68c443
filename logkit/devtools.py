"""Process-wide AppLogger for application code.

This is the outermost composition point: it reads configuration, installs a
ProcessLogStore on the root logger and builds one AppLogger. Library modules
take their AppLogger as an argument instead of importing this one.
"""

from __future__ import annotations

import threading

from logkit.config import load_config
from logkit.facade import AppLogger
from logkit.store import ProcessLogStore

_lock = threading.Lock()
_app_logger: AppLogger | None = None


def get_logger() -> AppLogger:
    """Return the shared AppLogger, creating it on first call."""
    global _app_logger
    if _app_logger is None:
        with _lock:
            if _app_logger is None:
                config = load_config()
                store = ProcessLogStore(
                    capacity=config.store_capacity, level=config.capture_levelno
                ).install()
                _app_logger = AppLogger(config, store)
    return _app_logger
