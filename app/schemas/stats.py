"""Venue statistics schemas."""
from pydantic import BaseModel
from typing import Optional, List
from decimal import Decimal

from app.schemas.booking import BookingInDB


class MonthlyCount(BaseModel):
    month: str  # "YYYY-MM"
    count: int


class CourtStats(BaseModel):
    """Per-court breakdown over the stats window."""

    id: int
    name: str
    total_bookings: int
    revenue: Decimal
    histogram: List[MonthlyCount]


class VenueStats(BaseModel):
    """Schema for a venue's revenue dashboard."""

    venue_id: int
    from_month: str
    to_month: str
    revenue: Decimal
    total_bookings: int
    popular_court_id: Optional[int] = None
    popular_court_name: Optional[str] = None
    recent_bookings: List[BookingInDB]
    histogram: List[MonthlyCount]
    courts: List[CourtStats]
