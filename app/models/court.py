"""Court model."""
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Numeric
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class Court(Base):
    """Represents a bookable court at a venue."""

    __tablename__ = "courts"

    id = Column(Integer, primary_key=True, index=True)
    venue_id = Column(Integer, ForeignKey("venues.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    sport = Column(String, nullable=False)  # e.g., "football", "padel"
    surface_type = Column(String, nullable=True)  # e.g., "synthetic", "clay"
    price_per_hour = Column(Numeric(10, 2), nullable=False)  # Fallback when no schedule window matches
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    venue = relationship("Venue", back_populates="courts")
    schedules = relationship("ScheduleWindow", back_populates="court", cascade="all, delete-orphan")
    bookings = relationship("Booking", back_populates="court", cascade="all, delete-orphan")
