"""Booking model."""
import enum

from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Numeric, Index, text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class BookingStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    REJECTED = "REJECTED"
    COMPLETED = "COMPLETED"


# Statuses that occupy a slot
BLOCKING_STATUSES = (
    BookingStatus.PENDING.value,
    BookingStatus.CONFIRMED.value,
    BookingStatus.COMPLETED.value,
)

# Statuses of bookings that have not yet been played or refused
ACTIVE_STATUSES = (
    BookingStatus.PENDING.value,
    BookingStatus.CONFIRMED.value,
)

# Statuses counted as revenue
REVENUE_STATUSES = (
    BookingStatus.CONFIRMED.value,
    BookingStatus.COMPLETED.value,
)


class Booking(Base):
    """A one-hour reservation of a court."""

    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    court_id = Column(Integer, ForeignKey("courts.id", ondelete="CASCADE"), nullable=False, index=True)
    start_time = Column(DateTime, nullable=False)  # Naive wall-clock time in the operating timezone
    end_time = Column(DateTime, nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)  # Snapshot at creation
    status = Column(String(20), nullable=False, default=BookingStatus.PENDING.value)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="bookings")
    court = relationship("Court", back_populates="bookings")

    __table_args__ = (
        # At most one slot-occupying booking per court and start time
        Index(
            "uq_bookings_court_start_active",
            "court_id",
            "start_time",
            unique=True,
            postgresql_where=text("status != 'REJECTED'"),
            sqlite_where=text("status != 'REJECTED'"),
        ),
        Index("ix_bookings_status_end", "status", "end_time"),
    )
