"""Time sources for the staking ledger."""
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Optional


def _as_utc(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


class Clock(ABC):
    """Source of the current time."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as an aware UTC datetime."""


class SystemClock(Clock):
    """Wall-clock time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class ManualClock(Clock):
    """Clock that only moves when told to.

    Used to drive the enrollment deadline in tests without waiting days.
    """

    def __init__(self, start: Optional[datetime] = None):
        """Initialize manual clock.

        Args:
            start: Initial instant; defaults to the current wall-clock time
        """
        self._now = _as_utc(start) if start is not None else datetime.now(timezone.utc)

    def now(self) -> datetime:
        return self._now

    def set(self, moment: datetime) -> None:
        """Jump to an absolute instant."""
        self._now = _as_utc(moment)

    def advance(self, delta: Optional[timedelta] = None, **kwargs) -> datetime:
        """Move the clock forward.

        Args:
            delta: Amount of time to add
            **kwargs: timedelta keyword arguments, used when delta is omitted

        Returns:
            The new current time
        """
        if delta is None:
            delta = timedelta(**kwargs)
        self._now = self._now + delta
        return self._now
