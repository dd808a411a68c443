"""Logger handles bound to a subsystem/category pair."""

from __future__ import annotations

import logging

from logkit.models import NOTICE


class LoggerHandle(logging.LoggerAdapter):
    """Adapter that tags every record with ``subsystem`` and ``category``.

    Adds ``notice`` and ``fault`` to the stdlib leveled methods so callers can
    use the full unified-logging severity set.
    """

    def __init__(self, logger: logging.Logger, subsystem: str, category: str):
        super().__init__(logger, {"subsystem": subsystem, "category": category})

    @property
    def subsystem(self) -> str:
        return self.extra["subsystem"]

    @property
    def category(self) -> str:
        return self.extra["category"]

    def process(self, msg, kwargs):
        extra = dict(kwargs.get("extra") or {})
        extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs

    def notice(self, msg, *args, **kwargs) -> None:
        self.log(NOTICE, msg, *args, **kwargs)

    def fault(self, msg, *args, **kwargs) -> None:
        self.critical(msg, *args, **kwargs)


class HandleProvider:
    """Creates handles over ``logging.getLogger(subsystem)``.

    A subsystem logger with no level of its own is lowered to ``level`` so
    handle records reach store handlers further up the hierarchy.
    """

    def __init__(self, level: int = logging.DEBUG):
        self._level = level

    def handle(self, subsystem: str, category: str) -> LoggerHandle:
        logger = logging.getLogger(subsystem)
        if logger.level == logging.NOTSET:
            logger.setLevel(self._level)
        return LoggerHandle(logger, subsystem, category)
