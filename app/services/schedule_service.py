"""Weekly schedule windows per court."""
import logging
from typing import List, Optional, Sequence

from sqlalchemy import select, delete
from sqlalchemy.orm import selectinload

from app.core.errors import ErrorKind, ServiceResult
from app.models.court import Court
from app.models.schedule import ScheduleWindow
from app.schemas.auth import Principal
from app.schemas.schedule import ScheduleWindowIn
from app.services.base import BaseService, ServiceError, service_operation

logger = logging.getLogger(__name__)


def find_overlap(windows: Sequence[ScheduleWindowIn]):
    """Return the first pair of overlapping windows, or None."""
    ordered = sorted(windows, key=lambda w: (w.start_time, w.end_time))
    for previous, current in zip(ordered, ordered[1:]):
        if current.start_time < previous.end_time:
            return previous, current
    return None


class ScheduleService(BaseService):
    """Service for reading and replacing schedule windows."""

    @service_operation("list schedules")
    async def list_windows(
        self, court_id: int, day_of_week: Optional[int] = None
    ) -> ServiceResult:
        """Windows of a court, optionally for one day, ordered by day and start."""
        await self._get_court(court_id)

        query = select(ScheduleWindow).where(ScheduleWindow.court_id == court_id)
        if day_of_week is not None:
            query = query.where(ScheduleWindow.day_of_week == day_of_week)

        result = await self.db.execute(
            query.order_by(ScheduleWindow.day_of_week, ScheduleWindow.start_time)
        )
        return ServiceResult.ok(list(result.scalars().all()))

    async def get_day_windows(self, court_id: int, day_of_week: int) -> List[ScheduleWindow]:
        """Windows of one court and day ordered by start time."""
        result = await self.db.execute(
            select(ScheduleWindow)
            .where(
                ScheduleWindow.court_id == court_id,
                ScheduleWindow.day_of_week == day_of_week,
            )
            .order_by(ScheduleWindow.start_time, ScheduleWindow.end_time, ScheduleWindow.id)
        )
        return list(result.scalars().all())

    @service_operation("save schedules")
    async def replace_day_schedule(
        self,
        court_id: int,
        day_of_week: int,
        windows: Sequence[ScheduleWindowIn],
        actor: Optional[Principal],
    ) -> ServiceResult:
        """
        Replace every window of a court for one day of the week.

        The old windows are deleted and the new ones inserted in a single
        transaction. Overlapping windows are rejected before anything changes.

        Args:
            court_id: Court ID
            day_of_week: 0 = Sunday .. 6 = Saturday
            windows: Validated windows for that day (may be empty)
            actor: Owner of the court's venue

        Returns:
            ServiceResult with the stored windows
        """
        if not 0 <= day_of_week <= 6:
            raise ServiceError(ErrorKind.VALIDATION_FAILED, "day_of_week must be between 0 and 6")

        court = await self._get_owned_court(court_id, actor)

        overlap = find_overlap(windows)
        if overlap:
            first, second = overlap
            raise ServiceError(
                ErrorKind.VALIDATION_FAILED,
                f"Windows {first.start_time}-{first.end_time} and "
                f"{second.start_time}-{second.end_time} overlap",
            )

        await self.db.execute(
            delete(ScheduleWindow).where(
                ScheduleWindow.court_id == court.id,
                ScheduleWindow.day_of_week == day_of_week,
            )
        )
        self.db.add_all(
            [
                ScheduleWindow(
                    court_id=court.id,
                    day_of_week=day_of_week,
                    start_time=w.start_time,
                    end_time=w.end_time,
                    price=w.price,
                )
                for w in windows
            ]
        )
        await self.db.commit()

        logger.info(
            f"Saved {len(windows)} window(s) for court {court.id} on day {day_of_week}"
        )

        return ServiceResult.ok(
            await self.get_day_windows(court.id, day_of_week), "Schedules saved"
        )

    @service_operation("delete schedule")
    async def delete_window(self, schedule_id: int, actor: Optional[Principal]) -> ServiceResult:
        """Delete a single window."""
        actor = self._require_actor(actor)

        result = await self.db.execute(
            select(ScheduleWindow)
            .options(selectinload(ScheduleWindow.court).selectinload(Court.venue))
            .where(ScheduleWindow.id == schedule_id)
        )
        window = result.scalar_one_or_none()

        if window is None:
            raise ServiceError(ErrorKind.NOT_FOUND, f"Schedule {schedule_id} not found")
        if window.court.venue.owner_id != actor.id:
            raise ServiceError(ErrorKind.FORBIDDEN, "You do not own this court's venue")

        await self.db.delete(window)
        await self.db.commit()
        logger.info(f"Deleted schedule {schedule_id} of court {window.court_id}")

        return ServiceResult.ok(message="Schedule deleted")
