"""Booking endpoints."""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_clock, get_principal, unwrap
from app.core.clock import Clock
from app.core.database import get_db
from app.schemas.auth import Principal
from app.schemas.booking import (
    BookingCreate,
    BookingReschedule,
    BookingStatusUpdate,
    BookingInDB,
    OwnerBookingPage,
)
from app.services.booking_service import BookingService

router = APIRouter(tags=["bookings"])


def get_booking_service(
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> BookingService:
    return BookingService(db, clock)


@router.post("/bookings", response_model=BookingInDB, status_code=201)
async def create_booking(
    booking: BookingCreate,
    principal: Optional[Principal] = Depends(get_principal),
    service: BookingService = Depends(get_booking_service),
):
    """
    Reserve an hourly slot.

    The booking starts as PENDING and its price is taken from the court's
    schedule, whatever price the client displayed.

    Args:
        booking: Court and start time
        principal: Authenticated client

    Returns:
        Created booking
    """
    result = await service.create_booking(booking, principal)
    return unwrap(result)


@router.get("/bookings/me", response_model=List[BookingInDB])
async def list_my_bookings(
    principal: Optional[Principal] = Depends(get_principal),
    service: BookingService = Depends(get_booking_service),
):
    """List the caller's bookings, newest first."""
    result = await service.list_user_bookings(principal)
    return unwrap(result)


@router.get("/bookings/upcoming", response_model=List[BookingInDB])
async def list_upcoming_bookings(
    principal: Optional[Principal] = Depends(get_principal),
    service: BookingService = Depends(get_booking_service),
):
    """
    List the caller's pending and confirmed bookings starting soon.

    Used by the notification bell.
    """
    result = await service.get_upcoming_bookings(principal)
    return unwrap(result)


@router.patch("/bookings/{booking_id}/reschedule", response_model=BookingInDB)
async def reschedule_booking(
    booking_id: int,
    reschedule: BookingReschedule,
    principal: Optional[Principal] = Depends(get_principal),
    service: BookingService = Depends(get_booking_service),
):
    """
    Move a booking to another start time.

    Args:
        booking_id: Booking ID
        reschedule: New start time
        principal: Booking's client or the venue owner

    Returns:
        Updated booking
    """
    result = await service.reschedule_booking(booking_id, reschedule, principal)
    return unwrap(result)


@router.patch("/bookings/{booking_id}/status", response_model=BookingInDB)
async def update_booking_status(
    booking_id: int,
    status_update: BookingStatusUpdate,
    principal: Optional[Principal] = Depends(get_principal),
    service: BookingService = Depends(get_booking_service),
):
    """
    Change a booking's status.

    Only the owner of the venue may do this.
    """
    result = await service.update_booking_status(booking_id, status_update, principal)
    return unwrap(result)


@router.get("/owner/bookings", response_model=OwnerBookingPage)
async def list_owner_bookings(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=10, ge=1, le=100),
    court_id: Optional[int] = Query(default=None, description="Only bookings of this court"),
    principal: Optional[Principal] = Depends(get_principal),
    service: BookingService = Depends(get_booking_service),
):
    """
    Page through bookings across all venues of the caller.

    Args:
        page: 1-based page number
        page_size: Bookings per page
        court_id: Optional court filter

    Returns:
        Bookings and pagination info
    """
    result = await service.list_owner_bookings(principal, page, page_size, court_id)
    return unwrap(result)
