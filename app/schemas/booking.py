"""Booking schemas."""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from app.core.clock import to_local_naive


class BookingCreate(BaseModel):
    """Schema for reserving a slot."""

    court_id: int
    start_time: datetime
    proposed_price: Optional[Decimal] = Field(default=None, ge=0)  # Display price; never stored

    @field_validator("start_time")
    @classmethod
    def normalize_start(cls, value: datetime) -> datetime:
        return to_local_naive(value)


class BookingReschedule(BaseModel):
    """Schema for moving a booking to another start time."""

    start_time: datetime

    @field_validator("start_time")
    @classmethod
    def normalize_start(cls, value: datetime) -> datetime:
        return to_local_naive(value)


class BookingStatusUpdate(BaseModel):
    """Schema for an owner changing a booking's status."""

    status: str = Field(min_length=1)

    @field_validator("status")
    @classmethod
    def normalize_status(cls, value: str) -> str:
        return value.strip().upper()


class BookingInDB(BaseModel):
    """Schema for booking from database."""

    id: int
    user_id: int
    court_id: int
    start_time: datetime
    end_time: datetime
    total_price: Decimal
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class Pagination(BaseModel):
    current_page: int
    total_pages: int
    total_count: int
    page_size: int


class OwnerBookingPage(BaseModel):
    """Schema for a page of bookings across an owner's venues."""

    bookings: List[BookingInDB]
    pagination: Pagination
