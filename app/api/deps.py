"""Shared request dependencies."""
import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.clock import Clock
from app.core.database import get_db
from app.core.errors import ServiceResult
from app.models.user import User
from app.schemas.auth import Principal

logger = logging.getLogger(__name__)


def get_clock(request: Request) -> Clock:
    """Clock configured on the application."""
    return request.app.state.clock


async def get_principal(
    x_user_id: Optional[int] = Header(default=None, description="Authenticated user ID set by the session provider"),
    db: AsyncSession = Depends(get_db),
) -> Optional[Principal]:
    """
    Resolve the caller from the session provider's user header.

    Returns None for anonymous or unknown callers; the services decide whether
    that is acceptable.
    """
    if x_user_id is None:
        return None

    user = await db.get(User, x_user_id)
    if user is None:
        logger.warning(f"Request with unknown user id {x_user_id}")
        return None

    return Principal.model_validate(user)


def unwrap(result: ServiceResult):
    """Return the result value or raise the matching HTTP error."""
    if result.success:
        return result.value

    raise HTTPException(
        status_code=result.status_code,
        detail={"error": result.error.value, "message": result.message},
    )
