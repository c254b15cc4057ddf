"""Background scheduler for the periodic expiration sweep."""
import logging
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from app.core.clock import Clock
from app.core.config import settings
from app.core.database import Database
from app.services.booking_service import BookingService

logger = logging.getLogger(__name__)


class ExpirationScheduler:
    """
    Periodically marks ended bookings as completed.

    Availability reads already sweep on their own; this job only keeps
    statuses tidy for reporting between reads.
    """

    def __init__(
        self,
        database: Database,
        clock: Optional[Clock] = None,
        interval_minutes: Optional[int] = None,
    ):
        """Initialize the scheduler."""
        self.database = database
        self.clock = clock or Clock()
        self.interval_minutes = interval_minutes or settings.EXPIRATION_SWEEP_MINUTES
        self.scheduler = AsyncIOScheduler()
        self.running = False

    async def start(self):
        """Start the scheduler."""
        if self.running:
            logger.warning("Scheduler is already running")
            return

        logger.info(
            f"Starting expiration scheduler (every {self.interval_minutes} minutes)"
        )

        self.scheduler.add_job(
            self.sweep,
            IntervalTrigger(minutes=self.interval_minutes),
            id="expiration_sweep",
            name="Mark ended bookings as completed",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )

        self.scheduler.start()
        self.running = True
        logger.info("Expiration scheduler started")

    async def stop(self):
        """Stop the scheduler."""
        if not self.running:
            return

        logger.info("Stopping expiration scheduler")
        self.scheduler.shutdown(wait=False)
        self.running = False
        logger.info("Expiration scheduler stopped")

    async def sweep(self) -> int:
        """Run one expiration sweep and return the number of bookings completed."""
        logger.debug("Running expiration sweep")

        async with self.database.session() as db:
            result = await BookingService(db, self.clock).expire_bookings()

        if not result.success:
            logger.error(f"Expiration sweep failed: {result.message}")
            return 0

        return result.value
