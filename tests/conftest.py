"""Shared fixtures: a temporary SQLite database, a fixed clock and seed data."""
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.core.database import Database
from app.main import create_app
from app.models import Court, UserRole, Venue
from tests.helpers import NOW, FixedClock, add_user


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest_asyncio.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'bookings.db'}")
    db.connect()
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def session(database):
    async with database.session() as s:
        yield s


@pytest_asyncio.fixture
async def owner(session):
    return await add_user(session, "owner@example.com", UserRole.OWNER)


@pytest_asyncio.fixture
async def other_owner(session):
    return await add_user(session, "rival@example.com", UserRole.OWNER)


@pytest_asyncio.fixture
async def client_user(session):
    return await add_user(session, "client@example.com", UserRole.CLIENT)


@pytest_asyncio.fixture
async def second_client(session):
    return await add_user(session, "second@example.com", UserRole.CLIENT)


@pytest_asyncio.fixture
async def venue(session, owner):
    venue = Venue(
        owner_id=owner.id,
        name="Complejo El Golazo",
        address="Av. El Ejercito 123",
        city="Lima",
        district="Miraflores",
    )
    session.add(venue)
    await session.commit()
    await session.refresh(venue)
    return venue


@pytest_asyncio.fixture
async def court(session, venue):
    court = Court(
        venue_id=venue.id,
        name="Cancha 1",
        sport="football",
        surface_type="synthetic",
        price_per_hour=Decimal("50"),
    )
    session.add(court)
    await session.commit()
    await session.refresh(court)
    return court


@pytest_asyncio.fixture
async def api(database, clock):
    """HTTP client against an app wired to the test database and clock."""
    app = create_app(database=database, clock=clock)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
