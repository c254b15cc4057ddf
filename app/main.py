"""Main FastAPI application."""
import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import availability, bookings, schedules, venues
from app.core.clock import Clock
from app.core.config import settings
from app.core.database import Database
from app.services.scheduler import ExpirationScheduler

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting Court Booking Service")
    logger.info(f"Debug mode: {settings.DEBUG}, operating timezone: {settings.TIMEZONE}")

    database: Database = app.state.database
    database.connect()

    if settings.AUTO_CREATE_TABLES:
        await database.create_all()

    scheduler: Optional[ExpirationScheduler] = None
    if settings.EXPIRATION_SWEEP_ENABLED:
        scheduler = ExpirationScheduler(database, app.state.clock)
        await scheduler.start()
    app.state.scheduler = scheduler

    yield

    # Shutdown
    logger.info("Shutting down Court Booking Service")
    if scheduler is not None:
        await scheduler.stop()
    await database.dispose()


def create_app(
    database: Optional[Database] = None,
    clock: Optional[Clock] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        database: Store handle; defaults to one built from DATABASE_URL
        clock: Time source; defaults to the operating timezone's wall clock

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Court Booking Service",
        description="Hourly court availability, bookings and venue revenue",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.database = database or Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    app.state.clock = clock or Clock()
    app.state.scheduler = None

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(venues.router)
    app.include_router(schedules.router)
    app.include_router(availability.router)
    app.include_router(bookings.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        scheduler = app.state.scheduler
        return {
            "status": "healthy",
            "scheduler_running": bool(scheduler and scheduler.running),
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
