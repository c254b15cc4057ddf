"""Seed helpers and a fixed clock shared by the tests."""
from datetime import datetime, timedelta
from decimal import Decimal

from sqlalchemy import select

from app.core.clock import Clock
from app.models import Booking, BookingStatus, ScheduleWindow, User, UserRole
from app.schemas.auth import Principal

# Tuesday 17 June 2025, 09:00 local time
NOW = datetime(2025, 6, 17, 9, 0)

SUNDAY = 0
MONDAY = 1
TUESDAY = 2


class FixedClock(Clock):
    """Clock pinned to a settable instant."""

    def __init__(self, now: datetime):
        super().__init__("UTC")
        self.current = now

    def now(self) -> datetime:
        return self.current


async def add_user(session, email: str, role: UserRole) -> Principal:
    user = User(email=email, name=email.split("@")[0], role=role.value)
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return Principal.model_validate(user)


async def add_window(session, court_id: int, day: int, start: str, end: str, price) -> ScheduleWindow:
    window = ScheduleWindow(
        court_id=court_id,
        day_of_week=day,
        start_time=start,
        end_time=end,
        price=Decimal(str(price)),
    )
    session.add(window)
    await session.commit()
    await session.refresh(window)
    return window


async def add_booking(
    session,
    court_id: int,
    user_id: int,
    start: datetime,
    status: BookingStatus = BookingStatus.PENDING,
    price=50,
) -> Booking:
    """Insert a booking directly, bypassing the service checks."""
    booking = Booking(
        court_id=court_id,
        user_id=user_id,
        start_time=start,
        end_time=start + timedelta(hours=1),
        total_price=Decimal(str(price)),
        status=status.value,
    )
    session.add(booking)
    await session.commit()
    await session.refresh(booking)
    return booking


async def status_of(session, booking_id: int) -> str:
    """Current status straight from the database."""
    result = await session.execute(select(Booking.status).where(Booking.id == booking_id))
    return result.scalar_one()


def principal_headers(principal: Principal) -> dict:
    return {"X-User-Id": str(principal.id)}
