"""Dynamic pricing for a court at a given start time."""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.clock import day_of_week, time_to_minutes
from app.models.court import Court
from app.models.schedule import ScheduleWindow

logger = logging.getLogger(__name__)


def window_sort_key(window: ScheduleWindow):
    """Earliest start first, then narrowest window, then lowest id."""
    width = time_to_minutes(window.end_time) - time_to_minutes(window.start_time)
    return (window.start_time, width, window.id or 0)


def pick_window(
    windows: Iterable[ScheduleWindow], time_of_day: str
) -> Optional[ScheduleWindow]:
    """
    Pick the window covering ``time_of_day`` ("HH:MM").

    The interval is half-open: a window ending exactly at ``time_of_day``
    does not match, one starting exactly at it does.
    """
    matches = [w for w in windows if w.start_time <= time_of_day < w.end_time]
    if not matches:
        return None
    return min(matches, key=window_sort_key)


class PricingResolver:
    """Resolves the authoritative price of a slot."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def resolve_price(self, court: Court, start_time: datetime) -> Decimal:
        """
        Price of a booking on ``court`` starting at ``start_time``.

        A matching schedule window overrides the court's base hourly price.
        """
        time_of_day = start_time.strftime("%H:%M")

        result = await self.db.execute(
            select(ScheduleWindow).where(
                ScheduleWindow.court_id == court.id,
                ScheduleWindow.day_of_week == day_of_week(start_time.date()),
                ScheduleWindow.start_time <= time_of_day,
                ScheduleWindow.end_time > time_of_day,
            )
        )
        window = pick_window(result.scalars().all(), time_of_day)

        if window is None:
            logger.debug(
                f"No schedule window for court {court.id} at {start_time}, "
                f"using base price {court.price_per_hour}"
            )
            return Decimal(court.price_per_hour)

        return Decimal(window.price)
