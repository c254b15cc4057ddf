"""Venue and court endpoints."""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_clock, get_principal, unwrap
from app.core.clock import Clock
from app.core.database import get_db
from app.schemas.auth import Principal
from app.schemas.stats import VenueStats
from app.schemas.venue import (
    CourtCreate,
    CourtInDB,
    CourtUpdate,
    VenueCreate,
    VenueDetail,
    VenueInDB,
    VenueUpdate,
)
from app.services.stats_service import StatsService
from app.services.venue_service import VenueService

router = APIRouter(tags=["venues"])


def get_venue_service(
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> VenueService:
    return VenueService(db, clock)


@router.post("/venues", response_model=VenueInDB, status_code=201)
async def create_venue(
    venue: VenueCreate,
    principal: Optional[Principal] = Depends(get_principal),
    service: VenueService = Depends(get_venue_service),
):
    """
    Create a venue owned by the caller.

    Args:
        venue: Venue data
        principal: Authenticated owner

    Returns:
        Created venue
    """
    result = await service.create_venue(venue, principal)
    return unwrap(result)


@router.get("/venues", response_model=List[VenueInDB])
async def list_venues(
    city: Optional[str] = Query(default=None, description="Filter by city"),
    owner_id: Optional[int] = Query(default=None, description="Filter by owner"),
    skip: int = 0,
    limit: int = 100,
    service: VenueService = Depends(get_venue_service),
):
    """
    List venues.

    Args:
        city: Optional city filter (case insensitive)
        owner_id: Optional owner filter
        skip: Number of records to skip
        limit: Maximum number of records to return

    Returns:
        List of venues
    """
    result = await service.list_venues(city, owner_id, skip, limit)
    return unwrap(result)


@router.get("/venues/{venue_id}", response_model=VenueDetail)
async def get_venue(
    venue_id: int,
    service: VenueService = Depends(get_venue_service),
):
    """Get a venue with its courts."""
    result = await service.get_venue(venue_id)
    return unwrap(result)


@router.patch("/venues/{venue_id}", response_model=VenueInDB)
async def update_venue(
    venue_id: int,
    venue_update: VenueUpdate,
    principal: Optional[Principal] = Depends(get_principal),
    service: VenueService = Depends(get_venue_service),
):
    """Update a venue's information."""
    result = await service.update_venue(venue_id, venue_update, principal)
    return unwrap(result)


@router.post("/venues/{venue_id}/courts", response_model=CourtInDB, status_code=201)
async def create_court(
    venue_id: int,
    court: CourtCreate,
    principal: Optional[Principal] = Depends(get_principal),
    service: VenueService = Depends(get_venue_service),
):
    """Add a court to a venue."""
    result = await service.create_court(venue_id, court, principal)
    return unwrap(result)


@router.patch("/courts/{court_id}", response_model=CourtInDB)
async def update_court(
    court_id: int,
    court_update: CourtUpdate,
    principal: Optional[Principal] = Depends(get_principal),
    service: VenueService = Depends(get_venue_service),
):
    """Update a court's information."""
    result = await service.update_court(court_id, court_update, principal)
    return unwrap(result)


@router.delete("/courts/{court_id}", status_code=204)
async def delete_court(
    court_id: int,
    principal: Optional[Principal] = Depends(get_principal),
    service: VenueService = Depends(get_venue_service),
):
    """
    Delete a court and all associated data.

    Refused while the court has upcoming pending or confirmed bookings.
    """
    result = await service.delete_court(court_id, principal)
    unwrap(result)


@router.get("/venues/{venue_id}/stats", response_model=VenueStats)
async def get_venue_stats(
    venue_id: int,
    principal: Optional[Principal] = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """
    Get revenue and booking statistics for a venue.

    Covers the last months up to the current one, counting only confirmed
    and completed bookings.
    """
    result = await StatsService(db, clock).compute_venue_stats(venue_id, principal)
    return unwrap(result)
