"""Revenue and booking statistics per venue."""
import logging
from collections import defaultdict
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import select

from app.core.config import settings
from app.core.errors import ServiceResult
from app.models.booking import Booking, REVENUE_STATUSES
from app.models.court import Court
from app.schemas.auth import Principal
from app.schemas.booking import BookingInDB
from app.schemas.stats import CourtStats, MonthlyCount, VenueStats
from app.services.base import BaseService, service_operation

logger = logging.getLogger(__name__)


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move (year, month) by ``delta`` months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_key(value: date) -> str:
    return f"{value.year}-{value.month:02d}"


def trailing_months(today: date, months: int) -> List[str]:
    """Keys "YYYY-MM" of the last ``months`` calendar months, oldest first, ending with today's."""
    keys = []
    for offset in range(months - 1, -1, -1):
        year, month = shift_month(today.year, today.month, -offset)
        keys.append(f"{year}-{month:02d}")
    return keys


def dense_histogram(months: List[str], counts: dict) -> List[MonthlyCount]:
    return [MonthlyCount(month=key, count=counts.get(key, 0)) for key in months]


class StatsService(BaseService):
    """Service aggregating the booking ledger for owners."""

    @service_operation("compute venue stats")
    async def compute_venue_stats(
        self, venue_id: int, actor: Optional[Principal]
    ) -> ServiceResult:
        """
        Revenue dashboard for a venue over the trailing months.

        Only confirmed and completed bookings count. Every figure comes from the
        same windowed set of bookings, so the totals always equal the sums of
        the per-court figures and of the histogram.

        Args:
            venue_id: Venue ID
            actor: Owner of the venue

        Returns:
            ServiceResult with VenueStats
        """
        venue = await self._get_owned_venue(venue_id, actor)

        today = self.clock.today()
        months = trailing_months(today, settings.STATS_MONTHS)
        first_year, first_month = shift_month(today.year, today.month, -(settings.STATS_MONTHS - 1))
        next_year, next_month = shift_month(today.year, today.month, 1)
        window_start = datetime(first_year, first_month, 1)
        window_end = datetime(next_year, next_month, 1)

        courts_result = await self.db.execute(
            select(Court).where(Court.venue_id == venue.id).order_by(Court.id)
        )
        courts = list(courts_result.scalars().all())

        bookings_result = await self.db.execute(
            select(Booking)
            .join(Court, Booking.court_id == Court.id)
            .where(
                Court.venue_id == venue.id,
                Booking.status.in_(REVENUE_STATUSES),
                Booking.start_time >= window_start,
                Booking.start_time < window_end,
            )
            .order_by(Booking.start_time.desc(), Booking.id.desc())
        )
        bookings = list(bookings_result.scalars().all())

        revenue = Decimal("0")
        monthly = defaultdict(int)
        court_revenue = defaultdict(lambda: Decimal("0"))
        court_counts = defaultdict(int)
        court_monthly = defaultdict(lambda: defaultdict(int))

        for booking in bookings:
            key = month_key(booking.start_time)
            price = Decimal(booking.total_price)

            revenue += price
            monthly[key] += 1
            court_revenue[booking.court_id] += price
            court_counts[booking.court_id] += 1
            court_monthly[booking.court_id][key] += 1

        court_stats = [
            CourtStats(
                id=court.id,
                name=court.name,
                total_bookings=court_counts[court.id],
                revenue=court_revenue[court.id],
                histogram=dense_histogram(months, court_monthly[court.id]),
            )
            for court in courts
        ]

        # Highest count wins, ties go to the lowest court id
        popular = None
        for stats in court_stats:
            if stats.total_bookings > 0 and (
                popular is None or stats.total_bookings > popular.total_bookings
            ):
                popular = stats

        logger.info(
            f"Stats for venue {venue.id}: {len(bookings)} booking(s), revenue {revenue}"
        )

        return ServiceResult.ok(
            VenueStats(
                venue_id=venue.id,
                from_month=months[0],
                to_month=months[-1],
                revenue=revenue,
                total_bookings=len(bookings),
                popular_court_id=popular.id if popular else None,
                popular_court_name=popular.name if popular else None,
                recent_bookings=[
                    BookingInDB.model_validate(b)
                    for b in bookings[: settings.RECENT_BOOKINGS_LIMIT]
                ],
                histogram=dense_histogram(months, monthly),
                courts=court_stats,
            )
        )
