"""Configuration loading from an optional YAML file and environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields

import yaml

from logkit.environment import parse_bool
from logkit.models import NOTICE

logger = logging.getLogger(__name__)

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "NOTICE": NOTICE,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class Config:
    retrieve_window_minutes: int = 15
    export_window_hours: int = 1
    store_capacity: int = 10_000
    capture_level: str = "DEBUG"
    test_environment: bool | None = None   # None means auto-detect
    export_dir: str = "exports"

    @property
    def capture_levelno(self) -> int:
        return _LEVELS[self.capture_level]

    def __post_init__(self):
        if self.capture_level not in _LEVELS:
            raise ValueError(
                f"capture_level must be one of {', '.join(_LEVELS)}, "
                f"got {self.capture_level!r}"
            )
        if self.store_capacity <= 0:
            raise ValueError("store_capacity must be positive")


def load_yaml_config(path: str | None) -> dict:
    """Load the ``logkit`` settings mapping from a YAML file. Empty if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        logger.info("Loaded YAML config from %s", path)
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, using defaults", path)
        return {}
    # Settings may live at the top level or under a ``logkit`` key.
    section = data.get("logkit", data)
    return section if isinstance(section, dict) else {}


def load_config(path: str | None = None) -> Config:
    """Build Config from defaults, then YAML, then env vars (highest precedence).

    ``LOGKIT_CONFIG`` names the YAML file when ``path`` is not given.
    """
    path = path or os.environ.get("LOGKIT_CONFIG")
    yaml_data = load_yaml_config(path)

    known = {f.name for f in fields(Config)}
    unknown = sorted(set(yaml_data) - known)
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
    values = {k: v for k, v in yaml_data.items() if k in known}

    env = os.environ
    if "LOGKIT_RETRIEVE_WINDOW_MINUTES" in env:
        values["retrieve_window_minutes"] = env["LOGKIT_RETRIEVE_WINDOW_MINUTES"]
    if "LOGKIT_EXPORT_WINDOW_HOURS" in env:
        values["export_window_hours"] = env["LOGKIT_EXPORT_WINDOW_HOURS"]
    if "LOGKIT_STORE_CAPACITY" in env:
        values["store_capacity"] = env["LOGKIT_STORE_CAPACITY"]
    if "LOGKIT_CAPTURE_LEVEL" in env:
        values["capture_level"] = env["LOGKIT_CAPTURE_LEVEL"]
    if env.get("LOGKIT_TEST_ENVIRONMENT", "").strip():
        values["test_environment"] = env["LOGKIT_TEST_ENVIRONMENT"]
    if "LOGKIT_EXPORT_DIR" in env:
        values["export_dir"] = env["LOGKIT_EXPORT_DIR"]

    test_environment = values.get("test_environment", Config.test_environment)
    return Config(
        retrieve_window_minutes=int(
            values.get("retrieve_window_minutes", Config.retrieve_window_minutes)
        ),
        export_window_hours=int(
            values.get("export_window_hours", Config.export_window_hours)
        ),
        store_capacity=int(values.get("store_capacity", Config.store_capacity)),
        capture_level=str(values.get("capture_level", Config.capture_level)).upper(),
        test_environment=None if test_environment is None else parse_bool(test_environment),
        export_dir=str(values.get("export_dir", Config.export_dir)),
    )
