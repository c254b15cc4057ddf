"""Database models."""
from app.models.user import User, UserRole, SubscriptionPlan, SubscriptionStatus
from app.models.venue import Venue
from app.models.court import Court
from app.models.schedule import ScheduleWindow
from app.models.booking import (
    Booking,
    BookingStatus,
    BLOCKING_STATUSES,
    ACTIVE_STATUSES,
    REVENUE_STATUSES,
)

__all__ = [
    "User",
    "UserRole",
    "SubscriptionPlan",
    "SubscriptionStatus",
    "Venue",
    "Court",
    "ScheduleWindow",
    "Booking",
    "BookingStatus",
    "BLOCKING_STATUSES",
    "ACTIVE_STATUSES",
    "REVENUE_STATUSES",
]
