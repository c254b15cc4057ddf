"""Availability schemas."""
from pydantic import BaseModel
from typing import List
from datetime import date
from decimal import Decimal


class AvailabilitySlot(BaseModel):
    """Schema for a single hourly slot."""

    time: str  # "HH:MM"
    price: Decimal
    is_booked: bool


class AvailabilityResponse(BaseModel):
    """Schema for a court's slots on one date."""

    court_id: int
    date: date
    day_of_week: int
    slots: List[AvailabilitySlot]
