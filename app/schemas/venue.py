"""Venue and court schemas."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal


class VenueBase(BaseModel):
    """Base venue schema."""

    name: str = Field(min_length=2)
    description: str = ""
    address: str = Field(min_length=5)
    city: str = Field(min_length=2)
    district: str = ""
    image_url: Optional[str] = None
    payment_qr_url: Optional[str] = None
    google_maps_url: Optional[str] = None


class VenueCreate(VenueBase):
    """Schema for creating a venue."""

    pass


class VenueUpdate(BaseModel):
    """Schema for updating a venue."""

    name: Optional[str] = Field(default=None, min_length=2)
    description: Optional[str] = None
    address: Optional[str] = Field(default=None, min_length=5)
    city: Optional[str] = Field(default=None, min_length=2)
    district: Optional[str] = None
    image_url: Optional[str] = None
    payment_qr_url: Optional[str] = None
    google_maps_url: Optional[str] = None


class VenueInDB(VenueBase):
    """Schema for venue from database."""

    id: int
    owner_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CourtBase(BaseModel):
    """Base court schema."""

    name: str = Field(min_length=2)
    sport: str = Field(min_length=2)
    surface_type: Optional[str] = None
    price_per_hour: Decimal = Field(ge=0)


class CourtCreate(CourtBase):
    """Schema for creating a court."""

    pass


class CourtUpdate(BaseModel):
    """Schema for updating a court."""

    name: Optional[str] = Field(default=None, min_length=2)
    sport: Optional[str] = Field(default=None, min_length=2)
    surface_type: Optional[str] = None
    price_per_hour: Optional[Decimal] = Field(default=None, ge=0)


class CourtInDB(CourtBase):
    """Schema for court from database."""

    id: int
    venue_id: int

    model_config = ConfigDict(from_attributes=True)


class VenueDetail(VenueInDB):
    """Venue with its courts."""

    courts: List[CourtInDB] = []
