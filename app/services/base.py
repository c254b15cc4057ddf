"""Shared plumbing for the booking services."""
import functools
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.clock import Clock
from app.core.errors import ErrorKind, ServiceResult
from app.models.court import Court
from app.models.venue import Venue
from app.schemas.auth import Principal

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Raised inside a service operation to abort it with a failure result."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


def service_operation(action: str):
    """
    Turn a service coroutine into one that always returns a ServiceResult.

    ServiceError becomes a failure result. Store errors roll back the session,
    are logged and become a generic StoreFailure result.
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs) -> ServiceResult:
            try:
                return await func(self, *args, **kwargs)
            except ServiceError as e:
                logger.warning(f"Could not {action}: {e.kind.value} - {e.message}")
                return ServiceResult.fail(e.kind, e.message)
            except SQLAlchemyError as e:
                logger.error(f"Store failure while trying to {action}: {e}", exc_info=True)
                await self.db.rollback()
                return ServiceResult.fail(
                    ErrorKind.STORE_FAILURE, f"Failed to {action}"
                )

        return wrapper

    return decorator


class BaseService:
    """Base class holding the session and clock a service works against."""

    def __init__(self, db: AsyncSession, clock: Optional[Clock] = None):
        self.db = db
        self.clock = clock or Clock()

    @staticmethod
    def _require_actor(actor: Optional[Principal]) -> Principal:
        if actor is None:
            raise ServiceError(ErrorKind.UNAUTHORIZED, "You must be signed in")
        return actor

    async def _get_court(self, court_id: int) -> Court:
        court = await self.db.get(Court, court_id)
        if court is None:
            raise ServiceError(ErrorKind.NOT_FOUND, f"Court {court_id} not found")
        return court

    async def _get_owned_venue(self, venue_id: int, actor: Optional[Principal]) -> Venue:
        actor = self._require_actor(actor)

        venue = await self.db.get(Venue, venue_id)
        if venue is None:
            raise ServiceError(ErrorKind.NOT_FOUND, f"Venue {venue_id} not found")
        if venue.owner_id != actor.id:
            raise ServiceError(ErrorKind.FORBIDDEN, "You do not own this venue")

        return venue

    async def _get_owned_court(self, court_id: int, actor: Optional[Principal]) -> Court:
        actor = self._require_actor(actor)

        result = await self.db.execute(
            select(Court)
            .options(selectinload(Court.venue))
            .where(Court.id == court_id)
        )
        court = result.scalar_one_or_none()

        if court is None:
            raise ServiceError(ErrorKind.NOT_FOUND, f"Court {court_id} not found")
        if court.venue.owner_id != actor.id:
            raise ServiceError(ErrorKind.FORBIDDEN, "You do not own this court's venue")

        return court
