"""Booking ledger: creation, rescheduling, status changes and expiration."""
import logging
import math
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import select, update, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from app.core.config import settings
from app.core.errors import ErrorKind, ServiceResult
from app.models.booking import (
    Booking,
    BookingStatus,
    BLOCKING_STATUSES,
    ACTIVE_STATUSES,
)
from app.models.court import Court
from app.models.venue import Venue
from app.schemas.auth import Principal
from app.schemas.booking import BookingCreate, BookingReschedule, BookingStatusUpdate
from app.services.base import BaseService, ServiceError, service_operation
from app.services.pricing import PricingResolver

logger = logging.getLogger(__name__)

SLOT_UNAVAILABLE_MESSAGE = "This time slot is no longer available"


class BookingService(BaseService):
    """Service for the booking ledger."""

    @property
    def slot_length(self) -> timedelta:
        return timedelta(minutes=settings.SLOT_MINUTES)

    @service_operation("create booking")
    async def create_booking(
        self, command: BookingCreate, actor: Optional[Principal]
    ) -> ServiceResult:
        """
        Reserve a slot for a client.

        The stored price always comes from the pricing resolver. The caller's
        proposed price is only logged.

        Args:
            command: Validated booking request
            actor: Authenticated principal

        Returns:
            ServiceResult carrying the new Booking
        """
        actor = self._require_actor(actor)

        if actor.is_owner:
            raise ServiceError(
                ErrorKind.ROLE_NOT_ALLOWED,
                "Owners cannot make bookings, they can only view availability",
            )

        court = await self._get_court(command.court_id)
        start = command.start_time

        if start < self.clock.now():
            raise ServiceError(ErrorKind.PAST_DATE, "Bookings cannot be made in the past")

        price = await PricingResolver(self.db).resolve_price(court, start)
        if command.proposed_price is not None and command.proposed_price != price:
            logger.info(
                f"Proposed price {command.proposed_price} for court {court.id} at {start} "
                f"differs from resolved price {price}"
            )

        if await self._has_conflict(court.id, start):
            raise ServiceError(ErrorKind.SLOT_UNAVAILABLE, SLOT_UNAVAILABLE_MESSAGE)

        booking = Booking(
            user_id=actor.id,
            court_id=court.id,
            start_time=start,
            end_time=start + self.slot_length,
            total_price=price,
            status=BookingStatus.PENDING.value,
        )
        self.db.add(booking)

        try:
            await self.db.commit()
        except IntegrityError:
            # A concurrent request took the slot between the check and the insert
            await self.db.rollback()
            raise ServiceError(ErrorKind.SLOT_UNAVAILABLE, SLOT_UNAVAILABLE_MESSAGE)

        await self.db.refresh(booking)
        logger.info(
            f"Booking {booking.id} created for court {court.id} at {start} "
            f"by user {actor.id} ({price})"
        )

        return ServiceResult.ok(booking, "Booking created")

    @service_operation("reschedule booking")
    async def reschedule_booking(
        self, booking_id: int, command: BookingReschedule, actor: Optional[Principal]
    ) -> ServiceResult:
        """
        Move a booking to a new start time.

        Allowed for the client who made the booking and for the owner of the
        venue. The price paid is kept.
        """
        actor = self._require_actor(actor)
        booking = await self._get_booking(booking_id)

        if booking.user_id != actor.id and booking.court.venue.owner_id != actor.id:
            raise ServiceError(
                ErrorKind.FORBIDDEN, "You are not allowed to modify this booking"
            )

        if booking.status in (BookingStatus.REJECTED.value, BookingStatus.COMPLETED.value):
            raise ServiceError(
                ErrorKind.INVALID_STATE,
                "Rejected or completed bookings cannot be rescheduled",
            )

        new_start = command.start_time
        new_end = new_start + self.slot_length

        if new_start < self.clock.now():
            raise ServiceError(ErrorKind.PAST_DATE, "Bookings cannot be moved into the past")

        if await self._range_taken(
            booking.court_id, new_start, new_end, exclude_id=booking.id
        ):
            raise ServiceError(ErrorKind.SLOT_UNAVAILABLE, "The selected time is already taken")

        old_start = booking.start_time
        booking.start_time = new_start
        booking.end_time = new_end

        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ServiceError(ErrorKind.SLOT_UNAVAILABLE, "The selected time is already taken")

        await self.db.refresh(booking)
        logger.info(
            f"Booking {booking.id} moved from {old_start} to {new_start} by user {actor.id}"
        )

        return ServiceResult.ok(booking, "Booking rescheduled")

    @service_operation("update booking status")
    async def update_booking_status(
        self, booking_id: int, command: BookingStatusUpdate, actor: Optional[Principal]
    ) -> ServiceResult:
        """
        Set a booking's status on behalf of the venue owner.

        Any status may move to any other status.
        """
        actor = self._require_actor(actor)
        booking = await self._get_booking(booking_id)

        if booking.court.venue.owner_id != actor.id:
            raise ServiceError(
                ErrorKind.FORBIDDEN, "You are not allowed to modify this booking"
            )

        valid_statuses = [s.value for s in BookingStatus]
        if command.status not in valid_statuses:
            raise ServiceError(
                ErrorKind.INVALID_STATUS,
                f"Invalid status '{command.status}', expected one of {', '.join(valid_statuses)}",
            )

        old_status = booking.status
        booking.status = command.status

        try:
            await self.db.commit()
        except IntegrityError:
            # Reviving a rejected booking whose slot was taken meanwhile
            await self.db.rollback()
            raise ServiceError(ErrorKind.SLOT_UNAVAILABLE, SLOT_UNAVAILABLE_MESSAGE)

        await self.db.refresh(booking)
        logger.info(f"Booking {booking.id} status {old_status} -> {booking.status}")

        return ServiceResult.ok(booking, "Status updated")

    @service_operation("expire bookings")
    async def expire_bookings(self) -> ServiceResult:
        """
        Mark pending and confirmed bookings that have ended as completed.

        Safe to call repeatedly. The value is the number of bookings changed.
        """
        now = self.clock.now()

        result = await self.db.execute(
            select(Booking.id).where(
                Booking.status.in_(ACTIVE_STATUSES),
                Booking.end_time < now,
            )
        )
        expired_ids = result.scalars().all()

        if expired_ids:
            await self.db.execute(
                update(Booking)
                .where(
                    Booking.id.in_(expired_ids),
                    Booking.status.in_(ACTIVE_STATUSES),
                )
                .values(status=BookingStatus.COMPLETED.value)
                .execution_options(synchronize_session=False)
            )
            await self.db.commit()
            logger.info(f"Marked {len(expired_ids)} ended booking(s) as completed")

        return ServiceResult.ok(len(expired_ids))

    @service_operation("list upcoming bookings")
    async def get_upcoming_bookings(self, actor: Optional[Principal]) -> ServiceResult:
        """Active bookings of the actor starting within the notification window."""
        actor = self._require_actor(actor)

        now = self.clock.now()
        window_end = now + timedelta(hours=settings.NOTIFICATION_WINDOW_HOURS)

        result = await self.db.execute(
            select(Booking)
            .where(
                Booking.user_id == actor.id,
                Booking.status.in_(ACTIVE_STATUSES),
                Booking.start_time >= now,
                Booking.start_time <= window_end,
            )
            .order_by(Booking.start_time.asc())
        )

        return ServiceResult.ok(list(result.scalars().all()))

    @service_operation("list bookings")
    async def list_user_bookings(self, actor: Optional[Principal]) -> ServiceResult:
        """All bookings made by the actor, newest first."""
        actor = self._require_actor(actor)

        result = await self.db.execute(
            select(Booking)
            .where(Booking.user_id == actor.id)
            .order_by(Booking.start_time.desc())
        )

        return ServiceResult.ok(list(result.scalars().all()))

    @service_operation("list owner bookings")
    async def list_owner_bookings(
        self,
        actor: Optional[Principal],
        page: int = 1,
        page_size: int = 10,
        court_id: Optional[int] = None,
    ) -> ServiceResult:
        """
        Page through bookings on every venue the actor owns.

        Args:
            actor: Authenticated owner
            page: 1-based page number
            page_size: Bookings per page
            court_id: Restrict to a single court

        Returns:
            ServiceResult with ``bookings`` and ``pagination``
        """
        actor = self._require_actor(actor)

        if not actor.is_owner:
            raise ServiceError(ErrorKind.FORBIDDEN, "Only venue owners can list venue bookings")

        owned_courts = (
            select(Court.id)
            .join(Venue, Court.venue_id == Venue.id)
            .where(Venue.owner_id == actor.id)
        )
        conditions = [Booking.court_id.in_(owned_courts)]
        if court_id is not None:
            conditions.append(Booking.court_id == court_id)

        total_count = await self.db.scalar(
            select(func.count()).select_from(Booking).where(*conditions)
        )

        result = await self.db.execute(
            select(Booking)
            .where(*conditions)
            .order_by(Booking.start_time.desc(), Booking.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )

        return ServiceResult.ok(
            {
                "bookings": list(result.scalars().all()),
                "pagination": {
                    "current_page": page,
                    "total_pages": math.ceil(total_count / page_size),
                    "total_count": total_count,
                    "page_size": page_size,
                },
            }
        )

    async def _get_booking(self, booking_id: int) -> Booking:
        """Load a booking with its court and venue."""
        result = await self.db.execute(
            select(Booking)
            .options(selectinload(Booking.court).selectinload(Court.venue))
            .where(Booking.id == booking_id)
        )
        booking = result.scalar_one_or_none()

        if booking is None:
            raise ServiceError(ErrorKind.NOT_FOUND, f"Booking {booking_id} not found")

        return booking

    async def _has_conflict(self, court_id: int, start: datetime) -> bool:
        """Whether a slot-occupying booking already starts exactly at ``start``."""
        result = await self.db.execute(
            select(Booking.id)
            .where(
                Booking.court_id == court_id,
                Booking.status.in_(BLOCKING_STATUSES),
                Booking.start_time == start,
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def _range_taken(
        self,
        court_id: int,
        start: datetime,
        end: datetime,
        exclude_id: Optional[int] = None,
    ) -> bool:
        """
        Whether any other booking of the court starts in [start, end).

        Every status counts here, rejected bookings included.
        """
        query = select(Booking.id).where(
            Booking.court_id == court_id,
            Booking.start_time >= start,
            Booking.start_time < end,
        )
        if exclude_id is not None:
            query = query.where(Booking.id != exclude_id)

        result = await self.db.execute(query.limit(1))
        return result.scalar_one_or_none() is not None
