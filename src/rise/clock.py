"""Clock sources and calendar helpers.

Every date-dependent rule (streaks, weekly boss rotation, monthly grace
tokens) takes the current time from a :class:`ClockSource` so callers can
pin or advance it.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta


class ClockSource:
    """Supplies the current wall-clock time."""

    def now(self) -> datetime:
        raise NotImplementedError

    def today(self) -> date:
        return self.now().date()


class SystemClock(ClockSource):
    """Local wall-clock time."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock(ClockSource):
    """A clock that only moves when told to."""

    def __init__(self, current: datetime) -> None:
        self.current = current

    def now(self) -> datetime:
        return self.current

    def set(self, current: datetime) -> None:
        self.current = current

    def advance(self, **kwargs: float) -> datetime:
        """Move forward by a ``timedelta(**kwargs)`` and return the new time."""
        self.current = self.current + timedelta(**kwargs)
        return self.current


def week_number(day: date) -> int:
    """Zero-based week of the year, counted in whole weeks from 1 January."""
    return (day.timetuple().tm_yday - 1) // 7


def month_key(day: date) -> str:
    """``YYYY-MM`` bucket used for monthly allowances."""
    return f"{day.year:04d}-{day.month:02d}"


def minutes_since_midnight(moment: datetime) -> int:
    return moment.hour * 60 + moment.minute


def format_minutes(minutes: int | None) -> str:
    """Render minutes-since-midnight as ``HH:MM`` (``--:--`` when unknown)."""
    if minutes is None:
        return "--:--"
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
