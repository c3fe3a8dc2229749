"""
Local calendar-day helpers and the injectable Clock.

Scheduling math (missed-workout detection, cycle windows, calendar
materialization) is calendar-day granular. "Today" always means the user's
local calendar day, never the UTC date of the server.

Usage:
    from shared.local_dates import SystemClock, FixedClock, parse_local_date

    clock = SystemClock("America/New_York")
    today = clock.today()

    # Tests pin the date
    clock = FixedClock(parse_local_date("2026-03-02"))
    clock.advance(days=1)
"""

from datetime import date, datetime, timedelta
from typing import List, Optional, Protocol
from zoneinfo import ZoneInfo

CYCLE_LENGTH_DAYS = 7


class Clock(Protocol):
    """Source of the current local calendar day."""

    def today(self) -> date:
        ...


class SystemClock:
    """Clock reading the wall clock in a fixed IANA timezone."""

    def __init__(self, timezone_name: str = "UTC"):
        self._tz = ZoneInfo(timezone_name)

    def today(self) -> date:
        return datetime.now(self._tz).date()

    def now(self) -> datetime:
        return datetime.now(self._tz)


class FixedClock:
    """Clock pinned to a given day, for deterministic tests and replays."""

    def __init__(self, current: date):
        self._current = current

    def today(self) -> date:
        return self._current

    def set(self, current: date) -> None:
        self._current = current

    def advance(self, days: int = 1) -> date:
        self._current = self._current + timedelta(days=days)
        return self._current


def parse_local_date(value: str) -> date:
    """Parse YYYY-MM-DD as a calendar day (no timezone conversion)."""
    year, month, day = (int(part) for part in value.split("-"))
    return date(year, month, day)


def format_local_date(value: date) -> str:
    """Format a calendar day as YYYY-MM-DD."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def as_calendar_day(value) -> date:
    """Reduce a datetime or date to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def is_same_calendar_day(first, second) -> bool:
    return as_calendar_day(first) == as_calendar_day(second)


def is_before_calendar_day(first, second) -> bool:
    return as_calendar_day(first) < as_calendar_day(second)


def is_after_calendar_day(first, second) -> bool:
    return as_calendar_day(first) > as_calendar_day(second)


def cycle_dates(anchor: date, length: int = CYCLE_LENGTH_DAYS) -> List[date]:
    """The consecutive calendar days of the cycle starting at `anchor`."""
    return [anchor + timedelta(days=offset) for offset in range(length)]


def resolve_today(clock: Clock, current_date: Optional[date] = None) -> date:
    """Prefer the caller-supplied local date, falling back to the clock."""
    return current_date if current_date is not None else clock.today()
