"""User model."""
import enum

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class UserRole(str, enum.Enum):
    CLIENT = "CLIENT"
    OWNER = "OWNER"


class SubscriptionPlan(str, enum.Enum):
    FREE = "FREE"
    PRO = "PRO"


class SubscriptionStatus(str, enum.Enum):
    INACTIVE = "INACTIVE"
    ACTIVE = "ACTIVE"


class User(Base):
    """Represents a client or a venue owner."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False, index=True)
    name = Column(String, nullable=True)
    password_hash = Column(String, nullable=True)
    role = Column(String(20), nullable=False, default=UserRole.CLIENT.value)
    plan = Column(String(20), nullable=False, default=SubscriptionPlan.FREE.value)  # Owners only
    subscription_status = Column(String(20), nullable=False, default=SubscriptionStatus.INACTIVE.value)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    venues = relationship("Venue", back_populates="owner", cascade="all, delete-orphan")
    bookings = relationship("Booking", back_populates="user", cascade="all, delete-orphan")

    @property
    def is_owner(self) -> bool:
        return self.role == UserRole.OWNER.value
