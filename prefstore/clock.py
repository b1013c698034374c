"""Clock collaborators supplying "now" to the preference engine.

All instants handled by the store are naive UTC datetimes, matching the
``DateTime`` columns on the preference tables.
"""

from datetime import datetime, timedelta, timezone
from typing import Protocol


def utc_now() -> datetime:
    """Current time as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock."""

    def now(self) -> datetime:
        return utc_now()


class FixedClock:
    """Clock pinned to a settable instant.

    Usage:
        clock = FixedClock(datetime(2026, 1, 1))
        clock.advance(hours=2)
    """

    def __init__(self, current: datetime | None = None):
        self.current = current or utc_now()

    def now(self) -> datetime:
        return self.current

    def set(self, current: datetime) -> None:
        self.current = current

    def advance(self, **kwargs) -> datetime:
        self.current = self.current + timedelta(**kwargs)
        return self.current
