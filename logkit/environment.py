"""Detect whether the process is running under an automated test harness."""

from __future__ import annotations

import os
import sys
import threading

_TEST_RUNNERS = ("pytest", "py.test", "nose2", "unittest")

_lock = threading.Lock()
_is_test_environment: bool | None = None


def parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


def _launched_by_runner() -> bool:
    main = sys.modules.get("__main__")
    spec = getattr(main, "__spec__", None)
    if spec is not None and spec.name.split(".")[0] in _TEST_RUNNERS:
        return True
    argv0 = os.path.basename(sys.argv[0]) if sys.argv else ""
    return os.path.splitext(argv0)[0] in _TEST_RUNNERS


def detect_test_environment() -> bool:
    """Evaluate the test-harness checks now, without memoizing.

    ``LOGKIT_TEST_ENVIRONMENT`` overrides detection when set.
    """
    override = os.environ.get("LOGKIT_TEST_ENVIRONMENT")
    if override is not None and override.strip():
        return parse_bool(override)
    if "pytest" in sys.modules or "PYTEST_CURRENT_TEST" in os.environ:
        return True
    return _launched_by_runner()


def is_test_environment() -> bool:
    """Process-wide test-harness flag, computed once on first use."""
    global _is_test_environment
    if _is_test_environment is None:
        with _lock:
            if _is_test_environment is None:
                _is_test_environment = detect_test_environment()
    return _is_test_environment
