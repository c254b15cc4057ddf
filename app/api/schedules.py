"""Schedule endpoints."""
from typing import List, Optional
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_clock, get_principal, unwrap
from app.core.clock import Clock
from app.core.database import get_db
from app.schemas.auth import Principal
from app.schemas.schedule import DayScheduleUpdate, ScheduleWindowInDB
from app.services.schedule_service import ScheduleService

router = APIRouter(tags=["schedules"])


def get_schedule_service(
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> ScheduleService:
    return ScheduleService(db, clock)


@router.get("/courts/{court_id}/schedules", response_model=List[ScheduleWindowInDB])
async def list_schedules(
    court_id: int,
    day_of_week: Optional[int] = Query(default=None, ge=0, le=6, description="0 = Sunday"),
    service: ScheduleService = Depends(get_schedule_service),
):
    """List a court's weekly schedule windows."""
    result = await service.list_windows(court_id, day_of_week)
    return unwrap(result)


@router.put(
    "/courts/{court_id}/schedules/{day_of_week}",
    response_model=List[ScheduleWindowInDB],
)
async def save_day_schedules(
    court_id: int,
    schedule: DayScheduleUpdate,
    day_of_week: int = Path(..., ge=0, le=6, description="0 = Sunday .. 6 = Saturday"),
    principal: Optional[Principal] = Depends(get_principal),
    service: ScheduleService = Depends(get_schedule_service),
):
    """
    Replace all windows of a court for one day of the week.

    Sending an empty list closes the court on that day.

    Args:
        court_id: Court ID
        schedule: New windows for the day
        day_of_week: 0 = Sunday .. 6 = Saturday
        principal: Owner of the venue

    Returns:
        Stored windows for the day
    """
    result = await service.replace_day_schedule(
        court_id, day_of_week, schedule.windows, principal
    )
    return unwrap(result)


@router.delete("/schedules/{schedule_id}", status_code=204)
async def delete_schedule(
    schedule_id: int,
    principal: Optional[Principal] = Depends(get_principal),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Delete a single schedule window."""
    result = await service.delete_window(schedule_id, principal)
    unwrap(result)
