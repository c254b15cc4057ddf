"""Venue and court registry for owners."""
import logging
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.orm import selectinload

from app.core.errors import ErrorKind, ServiceResult
from app.models.booking import Booking, ACTIVE_STATUSES
from app.models.court import Court
from app.models.venue import Venue
from app.schemas.auth import Principal
from app.schemas.venue import CourtCreate, CourtUpdate, VenueCreate, VenueUpdate
from app.services.base import BaseService, ServiceError, service_operation

logger = logging.getLogger(__name__)


class VenueService(BaseService):
    """Service for venues and their courts."""

    @service_operation("create venue")
    async def create_venue(
        self, command: VenueCreate, actor: Optional[Principal]
    ) -> ServiceResult:
        actor = self._require_actor(actor)

        if not actor.is_owner:
            raise ServiceError(ErrorKind.ROLE_NOT_ALLOWED, "Only owners can list venues")

        venue = Venue(owner_id=actor.id, **command.model_dump())
        self.db.add(venue)
        await self.db.commit()
        await self.db.refresh(venue)

        logger.info(f"Venue {venue.id} '{venue.name}' created by owner {actor.id}")
        return ServiceResult.ok(venue, "Venue created")

    @service_operation("list venues")
    async def list_venues(
        self,
        city: Optional[str] = None,
        owner_id: Optional[int] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> ServiceResult:
        query = select(Venue)
        if city:
            query = query.where(func.lower(Venue.city) == city.lower())
        if owner_id is not None:
            query = query.where(Venue.owner_id == owner_id)

        result = await self.db.execute(query.order_by(Venue.id).offset(skip).limit(limit))
        return ServiceResult.ok(list(result.scalars().all()))

    @service_operation("load venue")
    async def get_venue(self, venue_id: int) -> ServiceResult:
        result = await self.db.execute(
            select(Venue).options(selectinload(Venue.courts)).where(Venue.id == venue_id)
        )
        venue = result.scalar_one_or_none()

        if venue is None:
            raise ServiceError(ErrorKind.NOT_FOUND, f"Venue {venue_id} not found")

        return ServiceResult.ok(venue)

    @service_operation("update venue")
    async def update_venue(
        self, venue_id: int, command: VenueUpdate, actor: Optional[Principal]
    ) -> ServiceResult:
        venue = await self._get_owned_venue(venue_id, actor)

        for field, value in command.model_dump(exclude_unset=True).items():
            setattr(venue, field, value)

        await self.db.commit()
        await self.db.refresh(venue)

        logger.info(f"Venue {venue.id} updated")
        return ServiceResult.ok(venue, "Venue updated")

    @service_operation("create court")
    async def create_court(
        self, venue_id: int, command: CourtCreate, actor: Optional[Principal]
    ) -> ServiceResult:
        venue = await self._get_owned_venue(venue_id, actor)

        court = Court(venue_id=venue.id, **command.model_dump())
        self.db.add(court)
        await self.db.commit()
        await self.db.refresh(court)

        logger.info(f"Court {court.id} '{court.name}' created at venue {venue.id}")
        return ServiceResult.ok(court, "Court created")

    @service_operation("update court")
    async def update_court(
        self, court_id: int, command: CourtUpdate, actor: Optional[Principal]
    ) -> ServiceResult:
        """Update a court. Existing bookings keep the price they were made at."""
        court = await self._get_owned_court(court_id, actor)

        for field, value in command.model_dump(exclude_unset=True).items():
            setattr(court, field, value)

        await self.db.commit()
        await self.db.refresh(court)

        logger.info(f"Court {court.id} updated")
        return ServiceResult.ok(court, "Court updated")

    @service_operation("delete court")
    async def delete_court(self, court_id: int, actor: Optional[Principal]) -> ServiceResult:
        """
        Delete a court with its schedules and bookings.

        Blocked while the court still has pending or confirmed bookings in the
        future.
        """
        court = await self._get_owned_court(court_id, actor)

        upcoming = await self.db.scalar(
            select(func.count())
            .select_from(Booking)
            .where(
                Booking.court_id == court.id,
                Booking.status.in_(ACTIVE_STATUSES),
                Booking.start_time >= self.clock.now(),
            )
        )
        if upcoming:
            raise ServiceError(
                ErrorKind.INVALID_STATE,
                f"Court has {upcoming} upcoming booking(s); reject or reschedule them first",
            )

        await self.db.delete(court)
        await self.db.commit()

        logger.info(f"Court {court_id} deleted")
        return ServiceResult.ok(message="Court deleted")
