"""
Clock capability.

Every operation that needs "now" receives a Clock and reads it once, so a
single assessment or selection works from one immutable timestamp.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol


SECONDS_PER_DAY = 86400.0

# Assumed age of a skill that has never been practiced
NEVER_PRACTICED_DAYS = 30.0


class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:
        """Return the current timezone-aware time."""
        ...


class SystemClock:
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedClock:
    """
    Clock frozen at a given instant.

    Used by tests and replays; advance() moves it forward explicitly.
    """

    def __init__(self, instant: datetime):
        self._instant = ensure_aware(instant)

    def now(self) -> datetime:
        return self._instant

    def advance(self, days: float = 0.0, **kwargs: float) -> datetime:
        """Move the clock forward and return the new instant."""
        self._instant = self._instant + timedelta(days=days, **kwargs)
        return self._instant


def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def days_between(earlier: datetime, later: datetime) -> float:
    """Signed number of days from earlier to later."""
    delta = ensure_aware(later) - ensure_aware(earlier)
    return delta.total_seconds() / SECONDS_PER_DAY


def calculate_days_since(last_practiced: datetime | None, now: datetime) -> float:
    """
    Calculate days elapsed since a skill was last practiced.

    Args:
        last_practiced: Timestamp of the last attempt (naive values are UTC)
        now: Snapshot of the current time

    Returns:
        Days elapsed as float, NEVER_PRACTICED_DAYS when there is no history
    """
    if last_practiced is None:
        return NEVER_PRACTICED_DAYS
    return days_between(last_practiced, now)
