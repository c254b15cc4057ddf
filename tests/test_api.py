"""End-to-end checks through the HTTP layer."""
from datetime import datetime
from decimal import Decimal

import pytest

from app.models import BookingStatus
from tests.helpers import TUESDAY, add_booking, principal_headers

BOOKING_DAY = "2025-06-24"


@pytest.mark.asyncio
async def test_health(api):
    response = await api.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "scheduler_running": False}


@pytest.mark.asyncio
async def test_booking_flow(api, court, venue, owner, client_user, second_client):
    owner_headers = principal_headers(owner)

    # Owner opens Tuesdays 06:00-23:00 at 60
    response = await api.put(
        f"/courts/{court.id}/schedules/{TUESDAY}",
        json={"windows": [{"start_time": "06:00", "end_time": "23:00", "price": "60"}]},
        headers=owner_headers,
    )
    assert response.status_code == 200
    assert len(response.json()) == 1

    response = await api.get(f"/courts/{court.id}/availability", params={"date": BOOKING_DAY})
    assert response.status_code == 200
    slots = response.json()["slots"]
    assert len(slots) == 17
    assert slots[0]["time"] == "06:00"
    assert slots[-1]["time"] == "22:00"
    assert all(Decimal(str(s["price"])) == Decimal("60") for s in slots)
    assert not any(s["is_booked"] for s in slots)

    # Client books 18:00
    response = await api.post(
        "/bookings",
        json={"court_id": court.id, "start_time": f"{BOOKING_DAY}T18:00:00", "proposed_price": "45"},
        headers=principal_headers(client_user),
    )
    assert response.status_code == 201
    booking = response.json()
    assert booking["status"] == BookingStatus.PENDING.value
    assert Decimal(str(booking["total_price"])) == Decimal("60")

    response = await api.get(f"/courts/{court.id}/availability", params={"date": BOOKING_DAY})
    booked = [s["time"] for s in response.json()["slots"] if s["is_booked"]]
    assert booked == ["18:00"]

    # Another client loses the race
    response = await api.post(
        "/bookings",
        json={"court_id": court.id, "start_time": f"{BOOKING_DAY}T18:00:00"},
        headers=principal_headers(second_client),
    )
    assert response.status_code == 409
    assert response.json()["detail"]["error"] == "SlotUnavailable"

    # Owner confirms and sees the revenue
    response = await api.patch(
        f"/bookings/{booking['id']}/status",
        json={"status": "CONFIRMED"},
        headers=owner_headers,
    )
    assert response.status_code == 200
    assert response.json()["status"] == BookingStatus.CONFIRMED.value

    response = await api.get(f"/venues/{venue.id}/stats", headers=owner_headers)
    assert response.status_code == 200
    stats = response.json()
    assert stats["total_bookings"] == 1
    assert Decimal(str(stats["revenue"])) == Decimal("60")
    assert stats["popular_court_id"] == court.id
    assert len(stats["histogram"]) == 12

    response = await api.get("/owner/bookings", headers=owner_headers)
    assert response.json()["pagination"]["total_count"] == 1

    response = await api.get("/bookings/me", headers=principal_headers(client_user))
    assert [b["id"] for b in response.json()] == [booking["id"]]


@pytest.mark.asyncio
async def test_anonymous_and_unknown_callers_are_unauthorized(api, court):
    payload = {"court_id": court.id, "start_time": f"{BOOKING_DAY}T18:00:00"}

    anonymous = await api.post("/bookings", json=payload)
    unknown = await api.post("/bookings", json=payload, headers={"X-User-Id": "9999"})

    assert anonymous.status_code == 401
    assert anonymous.json()["detail"]["error"] == "Unauthorized"
    assert unknown.status_code == 401


@pytest.mark.asyncio
async def test_owner_cannot_book(api, court, owner):
    response = await api.post(
        "/bookings",
        json={"court_id": court.id, "start_time": f"{BOOKING_DAY}T18:00:00"},
        headers=principal_headers(owner),
    )

    assert response.status_code == 403
    assert response.json()["detail"]["error"] == "RoleNotAllowed"


@pytest.mark.asyncio
async def test_booking_in_the_past(api, court, client_user):
    response = await api.post(
        "/bookings",
        json={"court_id": court.id, "start_time": "2025-06-16T18:00:00"},
        headers=principal_headers(client_user),
    )

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "PastDate"


@pytest.mark.asyncio
async def test_availability_errors(api, court):
    unknown = await api.get("/courts/404/availability", params={"date": BOOKING_DAY})
    missing_date = await api.get(f"/courts/{court.id}/availability")

    assert unknown.status_code == 404
    assert missing_date.status_code == 422


@pytest.mark.asyncio
async def test_overlapping_schedule_is_rejected(api, court, owner):
    response = await api.put(
        f"/courts/{court.id}/schedules/{TUESDAY}",
        json={
            "windows": [
                {"start_time": "08:00", "end_time": "12:00", "price": "40"},
                {"start_time": "11:00", "end_time": "14:00", "price": "50"},
            ]
        },
        headers=principal_headers(owner),
    )

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "ValidationFailed"


@pytest.mark.asyncio
async def test_invalid_status_value(api, session, court, client_user, owner):
    booking = await add_booking(session, court.id, client_user.id, datetime(2025, 6, 24, 18))

    response = await api.patch(
        f"/bookings/{booking.id}/status",
        json={"status": "CANCELLED"},
        headers=principal_headers(owner),
    )

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "InvalidStatus"


@pytest.mark.asyncio
async def test_court_deletion_waits_for_upcoming_bookings(api, session, court, client_user, owner):
    booking = await add_booking(session, court.id, client_user.id, datetime(2025, 6, 24, 18))
    headers = principal_headers(owner)

    blocked = await api.delete(f"/courts/{court.id}", headers=headers)
    await api.patch(f"/bookings/{booking.id}/status", json={"status": "REJECTED"}, headers=headers)
    deleted = await api.delete(f"/courts/{court.id}", headers=headers)
    gone = await api.get(f"/courts/{court.id}/availability", params={"date": BOOKING_DAY})

    assert blocked.status_code == 409
    assert blocked.json()["detail"]["error"] == "InvalidState"
    assert deleted.status_code == 204
    assert gone.status_code == 404


@pytest.mark.asyncio
async def test_stats_are_forbidden_to_other_owners(api, venue, other_owner):
    response = await api.get(f"/venues/{venue.id}/stats", headers=principal_headers(other_owner))

    assert response.status_code == 403
