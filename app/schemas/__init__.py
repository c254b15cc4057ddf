"""API schemas."""
from app.schemas.auth import Principal
from app.schemas.venue import (
    VenueCreate,
    VenueUpdate,
    VenueInDB,
    VenueDetail,
    CourtCreate,
    CourtUpdate,
    CourtInDB,
)
from app.schemas.schedule import (
    ScheduleWindowIn,
    DayScheduleUpdate,
    ScheduleWindowInDB,
)
from app.schemas.booking import (
    BookingCreate,
    BookingReschedule,
    BookingStatusUpdate,
    BookingInDB,
    OwnerBookingPage,
    Pagination,
)
from app.schemas.availability import (
    AvailabilitySlot,
    AvailabilityResponse,
)
from app.schemas.stats import (
    MonthlyCount,
    CourtStats,
    VenueStats,
)

__all__ = [
    "Principal",
    "VenueCreate",
    "VenueUpdate",
    "VenueInDB",
    "VenueDetail",
    "CourtCreate",
    "CourtUpdate",
    "CourtInDB",
    "ScheduleWindowIn",
    "DayScheduleUpdate",
    "ScheduleWindowInDB",
    "BookingCreate",
    "BookingReschedule",
    "BookingStatusUpdate",
    "BookingInDB",
    "OwnerBookingPage",
    "Pagination",
    "AvailabilitySlot",
    "AvailabilityResponse",
    "MonthlyCount",
    "CourtStats",
    "VenueStats",
]
