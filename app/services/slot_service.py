"""Hourly slot generation from schedule windows."""
import logging
from datetime import date, datetime, time as dt_time, timedelta
from decimal import Decimal
from typing import Iterable, List, Optional, Set

from sqlalchemy import select

from app.core.clock import day_of_week, minutes_to_time, time_to_minutes
from app.core.config import settings
from app.core.errors import ServiceResult
from app.models.booking import Booking, BLOCKING_STATUSES
from app.models.schedule import ScheduleWindow
from app.schemas.availability import AvailabilitySlot, AvailabilityResponse
from app.services.base import BaseService, service_operation
from app.services.booking_service import BookingService
from app.services.schedule_service import ScheduleService

logger = logging.getLogger(__name__)


def expand_window(start_time: str, end_time: str, slot_minutes: int = 60) -> List[str]:
    """
    Start times of the whole slots that fit in a window.

    A trailing remainder shorter than a slot is dropped.

    >>> expand_window("14:00", "17:30")
    ['14:00', '15:00', '16:00']
    """
    current = time_to_minutes(start_time)
    end = time_to_minutes(end_time)

    starts = []
    while current + slot_minutes <= end:
        starts.append(minutes_to_time(current))
        current += slot_minutes
    return starts


def build_slots(
    windows: Iterable[ScheduleWindow],
    booked_times: Set[str],
    slot_minutes: Optional[int] = None,
) -> List[AvailabilitySlot]:
    """Expand windows, in order, into priced slots flagged against booked start times."""
    slot_minutes = slot_minutes or settings.SLOT_MINUTES

    slots = []
    for window in windows:
        for start in expand_window(window.start_time, window.end_time, slot_minutes):
            slots.append(
                AvailabilitySlot(
                    time=start,
                    price=Decimal(window.price),
                    is_booked=start in booked_times,
                )
            )
    return slots


class SlotService(BaseService):
    """Service computing a court's availability for a date."""

    @service_operation("load availability")
    async def generate_slots(self, court_id: int, target_date: date) -> ServiceResult:
        """
        Slots of a court on a calendar date.

        Ended bookings are swept to COMPLETED first. That never frees a slot,
        since completed bookings still occupy it.

        Args:
            court_id: Court ID
            target_date: Civil date to expand

        Returns:
            ServiceResult with an AvailabilityResponse
        """
        await self._get_court(court_id)

        sweep = await BookingService(self.db, self.clock).expire_bookings()
        if not sweep.success:
            logger.warning(f"Expiration sweep failed before availability read: {sweep.message}")

        weekday = day_of_week(target_date)
        windows = await ScheduleService(self.db, self.clock).get_day_windows(court_id, weekday)

        day_start = datetime.combine(target_date, dt_time.min)
        result = await self.db.execute(
            select(Booking.start_time).where(
                Booking.court_id == court_id,
                Booking.status.in_(BLOCKING_STATUSES),
                Booking.start_time >= day_start,
                Booking.start_time < day_start + timedelta(days=1),
            )
        )
        booked_times = {start.strftime("%H:%M") for start in result.scalars().all()}

        slots = build_slots(windows, booked_times)
        logger.debug(
            f"Court {court_id} on {target_date}: {len(slots)} slot(s), "
            f"{sum(1 for s in slots if s.is_booked)} booked"
        )

        return ServiceResult.ok(
            AvailabilityResponse(
                court_id=court_id,
                date=target_date,
                day_of_week=weekday,
                slots=slots,
            )
        )
