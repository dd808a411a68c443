"""Symbolic query windows and their resolution to a start instant."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

# Earliest and latest instants representable by an aware datetime.
DISTANT_PAST = datetime.min.replace(tzinfo=timezone.utc)
DISTANT_FUTURE = datetime.max.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class LastMinutes:
    minutes: int


@dataclass(frozen=True)
class LastHours:
    hours: int


@dataclass(frozen=True)
class LastDays:
    days: int


@dataclass(frozen=True)
class Since:
    instant: datetime


@dataclass(frozen=True)
class AllAvailable:
    pass


TimeRange = LastMinutes | LastHours | LastDays | Since | AllAvailable


def _seconds_back(now: datetime, seconds: int) -> datetime:
    """``now - seconds``, clamped to the representable range.

    Negative counts move the start into the future; nothing is validated.
    """
    try:
        return now - timedelta(seconds=seconds)
    except OverflowError:
        return DISTANT_PAST if seconds > 0 else DISTANT_FUTURE


def resolve(time_range: TimeRange, now: datetime | None = None) -> datetime:
    """Return the start instant for ``time_range``, evaluated against ``now``.

    ``now`` defaults to the current UTC time and is read fresh on every call.
    """
    if isinstance(time_range, Since):
        return time_range.instant
    if isinstance(time_range, AllAvailable):
        return DISTANT_PAST

    if now is None:
        now = datetime.now(timezone.utc)

    if isinstance(time_range, LastMinutes):
        return _seconds_back(now, 60 * time_range.minutes)
    if isinstance(time_range, LastHours):
        return _seconds_back(now, 3600 * time_range.hours)
    if isinstance(time_range, LastDays):
        return _seconds_back(now, 86400 * time_range.days)
    raise TypeError(f"Unsupported time range: {type(time_range).__name__}")
