"""Wall-clock time in the operating timezone.

Booking timestamps are stored as naive datetimes holding the wall-clock time
of the single operating timezone. Every "now" comparison in the services goes
through a Clock so tests can pin the current time.
"""
from datetime import date, datetime
from typing import Optional

import pytz

from app.core.config import settings


class Clock:
    """Current time in the configured operating timezone."""

    def __init__(self, timezone_name: Optional[str] = None):
        self.timezone = pytz.timezone(timezone_name or settings.TIMEZONE)

    def now(self) -> datetime:
        """Return the current naive wall-clock time."""
        return datetime.now(self.timezone).replace(tzinfo=None, microsecond=0)

    def today(self) -> date:
        return self.now().date()


def to_local_naive(value: datetime, timezone_name: Optional[str] = None) -> datetime:
    """
    Normalize a datetime to naive wall-clock time in the operating timezone.

    Naive input is assumed to already be local. Aware input is converted.
    """
    if value.tzinfo is None:
        return value

    tz = pytz.timezone(timezone_name or settings.TIMEZONE)
    return value.astimezone(tz).replace(tzinfo=None)


def day_of_week(value: date) -> int:
    """Day of week with 0 = Sunday .. 6 = Saturday."""
    return value.isoweekday() % 7


def time_to_minutes(value: str) -> int:
    """Convert "HH:MM" to minutes after midnight."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(value: int) -> str:
    """Convert minutes after midnight to "HH:MM"."""
    return f"{value // 60:02d}:{value % 60:02d}"
