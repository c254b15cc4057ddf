from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.core.errors import ErrorKind
from app.schemas.schedule import ScheduleWindowIn
from app.services.schedule_service import ScheduleService, find_overlap
from tests.helpers import MONDAY, TUESDAY, add_window


def windows(*rows):
    return [ScheduleWindowIn(start_time=s, end_time=e, price=Decimal(p)) for s, e, p in rows]


class TestWindowValidation:

    def test_end_must_follow_start(self):
        with pytest.raises(ValidationError):
            ScheduleWindowIn(start_time="18:00", end_time="18:00", price=Decimal("10"))

    def test_midnight_is_a_valid_end(self):
        window = ScheduleWindowIn(start_time="22:00", end_time="24:00", price=Decimal("10"))
        assert window.end_time == "24:00"

    @pytest.mark.parametrize("value", ["7:00", "25:00", "12:60", "24:00"])
    def test_malformed_start_is_rejected(self, value):
        with pytest.raises(ValidationError):
            ScheduleWindowIn(start_time=value, end_time="24:00", price=Decimal("10"))

    def test_negative_price_is_rejected(self):
        with pytest.raises(ValidationError):
            ScheduleWindowIn(start_time="08:00", end_time="09:00", price=Decimal("-1"))

    def test_find_overlap(self):
        assert find_overlap(windows(("08:00", "12:00", "40"), ("12:00", "14:00", "50"))) is None

        pair = find_overlap(windows(("14:00", "18:00", "60"), ("08:00", "15:00", "40")))
        assert [w.start_time for w in pair] == ["08:00", "14:00"]


class TestReplaceDaySchedule:

    @pytest.mark.asyncio
    async def test_replaces_all_windows_of_the_day(self, session, court, owner, clock):
        await add_window(session, court.id, TUESDAY, "06:00", "12:00", 30)
        await add_window(session, court.id, TUESDAY, "12:00", "23:00", 60)
        await add_window(session, court.id, MONDAY, "08:00", "10:00", 45)
        service = ScheduleService(session, clock)

        result = await service.replace_day_schedule(
            court.id, TUESDAY, windows(("18:00", "22:00", "90"), ("08:00", "12:00", "40")), owner
        )

        assert result.success
        assert [(w.start_time, w.end_time, w.price) for w in result.value] == [
            ("08:00", "12:00", Decimal("40")),
            ("18:00", "22:00", Decimal("90")),
        ]
        monday = await service.get_day_windows(court.id, MONDAY)
        assert [(w.start_time, w.end_time) for w in monday] == [("08:00", "10:00")]

    @pytest.mark.asyncio
    async def test_empty_list_closes_the_day(self, session, court, owner, clock):
        await add_window(session, court.id, TUESDAY, "06:00", "12:00", 30)
        service = ScheduleService(session, clock)

        result = await service.replace_day_schedule(court.id, TUESDAY, [], owner)

        assert result.success
        assert result.value == []
        assert await service.get_day_windows(court.id, TUESDAY) == []

    @pytest.mark.asyncio
    async def test_overlapping_windows_leave_schedule_untouched(self, session, court, owner, clock):
        await add_window(session, court.id, TUESDAY, "06:00", "12:00", 30)
        service = ScheduleService(session, clock)

        result = await service.replace_day_schedule(
            court.id, TUESDAY, windows(("08:00", "12:00", "40"), ("11:00", "14:00", "50")), owner
        )

        assert result.error == ErrorKind.VALIDATION_FAILED
        stored = await service.get_day_windows(court.id, TUESDAY)
        assert [(w.start_time, w.end_time) for w in stored] == [("06:00", "12:00")]

    @pytest.mark.asyncio
    async def test_invalid_day_is_rejected(self, session, court, owner, clock):
        result = await ScheduleService(session, clock).replace_day_schedule(court.id, 7, [], owner)

        assert result.error == ErrorKind.VALIDATION_FAILED

    @pytest.mark.asyncio
    async def test_only_the_venue_owner_may_edit(self, session, court, other_owner, client_user, clock):
        service = ScheduleService(session, clock)
        new = windows(("08:00", "12:00", "40"))

        assert (await service.replace_day_schedule(court.id, TUESDAY, new, other_owner)).error == ErrorKind.FORBIDDEN
        assert (await service.replace_day_schedule(court.id, TUESDAY, new, client_user)).error == ErrorKind.FORBIDDEN
        assert (await service.replace_day_schedule(court.id, TUESDAY, new, None)).error == ErrorKind.UNAUTHORIZED
        assert await service.get_day_windows(court.id, TUESDAY) == []

    @pytest.mark.asyncio
    async def test_unknown_court(self, session, owner, clock):
        result = await ScheduleService(session, clock).replace_day_schedule(404, TUESDAY, [], owner)

        assert result.error == ErrorKind.NOT_FOUND


class TestScheduleReads:

    @pytest.mark.asyncio
    async def test_list_windows_ordered_by_day_and_start(self, session, court, clock):
        await add_window(session, court.id, TUESDAY, "18:00", "22:00", 90)
        await add_window(session, court.id, MONDAY, "08:00", "10:00", 45)
        await add_window(session, court.id, TUESDAY, "08:00", "12:00", 40)
        service = ScheduleService(session, clock)

        everything = await service.list_windows(court.id)
        tuesday = await service.list_windows(court.id, TUESDAY)

        assert [(w.day_of_week, w.start_time) for w in everything.value] == [
            (MONDAY, "08:00"),
            (TUESDAY, "08:00"),
            (TUESDAY, "18:00"),
        ]
        assert len(tuesday.value) == 2

    @pytest.mark.asyncio
    async def test_list_windows_of_unknown_court(self, session, clock):
        result = await ScheduleService(session, clock).list_windows(404)

        assert result.error == ErrorKind.NOT_FOUND


class TestDeleteWindow:

    @pytest.mark.asyncio
    async def test_owner_deletes_window(self, session, court, owner, clock):
        window = await add_window(session, court.id, TUESDAY, "08:00", "12:00", 40)
        service = ScheduleService(session, clock)

        result = await service.delete_window(window.id, owner)

        assert result.success
        assert await service.get_day_windows(court.id, TUESDAY) == []

    @pytest.mark.asyncio
    async def test_other_owner_cannot_delete(self, session, court, other_owner, clock):
        window = await add_window(session, court.id, TUESDAY, "08:00", "12:00", 40)
        service = ScheduleService(session, clock)

        result = await service.delete_window(window.id, other_owner)

        assert result.error == ErrorKind.FORBIDDEN
        assert len(await service.get_day_windows(court.id, TUESDAY)) == 1

    @pytest.mark.asyncio
    async def test_unknown_window(self, session, owner, clock):
        result = await ScheduleService(session, clock).delete_window(404, owner)

        assert result.error == ErrorKind.NOT_FOUND
