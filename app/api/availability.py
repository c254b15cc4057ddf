"""Availability endpoints."""
from datetime import date
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_clock, unwrap
from app.core.clock import Clock
from app.core.database import get_db
from app.schemas.availability import AvailabilityResponse
from app.services.slot_service import SlotService

router = APIRouter(prefix="/courts/{court_id}", tags=["availability"])


@router.get("/availability", response_model=AvailabilityResponse)
async def get_availability(
    court_id: int,
    target_date: date = Query(..., alias="date", description="Calendar date (YYYY-MM-DD)"),
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """
    Get hourly slots of a court for a date.

    Each slot carries its price and whether it is already taken. Days without
    schedule windows return no slots.

    Args:
        court_id: Court ID
        target_date: Date to show
        db: Database session

    Returns:
        Slots for the date
    """
    result = await SlotService(db, clock).generate_slots(court_id, target_date)
    return unwrap(result)
