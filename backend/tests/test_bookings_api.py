"""Booking API integration tests."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def _authenticate(client: AsyncClient, email: str, password: str) -> str:
    response = await client.post(
        "/api/v1/auth/token",
        data={"username": email, "password": password},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert response.status_code == 200
    return response.json()["access_token"]


async def _bookable_listing(
    client: AsyncClient, owner_headers: dict[str, str], staff_headers: dict[str, str]
) -> dict[str, str]:
    listing_resp = await client.post(
        "/api/v1/accommodations",
        json={
            "title": "Quiet Padstow Hideaway",
            "description": "A quiet retreat near Padstow harbour.",
            "type": "cottage",
            "address_line1": "7 Harbour Road",
            "town": "Padstow",
            "post_code": "PL28 8BY",
            "latitude": 50.5432,
            "longitude": -4.936,
            "bedrooms": 2,
            "bathrooms": 2,
            "max_occupancy": 4,
            "amenities": ["wifi", "bbq"],
            "base_price_per_night": "130.00",
        },
        headers=owner_headers,
    )
    assert listing_resp.status_code == 201
    listing_id = listing_resp.json()["id"]

    today = date.today()
    period_resp = await client.post(
        f"/api/v1/accommodations/{listing_id}/availability",
        json={
            "start_date": today.isoformat(),
            "end_date": (today + timedelta(days=365)).isoformat(),
        },
        headers=owner_headers,
    )
    assert period_resp.status_code == 201

    guest_resp = await client.post(
        "/api/v1/guests",
        json={
            "first_name": "Charlie",
            "last_name": "Brown",
            "email": "charlie.b@example.com",
            "phone": "07700900003",
        },
        headers=staff_headers,
    )
    assert guest_resp.status_code == 201
    return {"accommodation_id": listing_id, "guest_id": guest_resp.json()["id"]}


async def test_booking_lifecycle(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    owner_token = await _authenticate(
        client, app_context["owner_email"], app_context["owner_password"]
    )
    staff_token = await _authenticate(
        client, app_context["staff_email"], app_context["staff_password"]
    )
    owner_headers = {"Authorization": f"Bearer {owner_token}"}
    headers = {"Authorization": f"Bearer {staff_token}"}
    ids = await _bookable_listing(client, owner_headers, headers)

    check_in = date.today() + timedelta(days=10)
    check_out = check_in + timedelta(days=3)

    availability = await client.get(
        "/api/v1/bookings/check-availability",
        params={
            "accommodation_id": ids["accommodation_id"],
            "check_in": check_in.isoformat(),
            "check_out": check_out.isoformat(),
        },
    )
    assert availability.status_code == 200
    assert availability.json()["available"] is True

    create_resp = await client.post(
        "/api/v1/bookings",
        json={
            **ids,
            "check_in_date": check_in.isoformat(),
            "check_out_date": check_out.isoformat(),
            "guest_count": 2,
            "special_requests": "Travel cot please",
        },
        headers=headers,
    )
    assert create_resp.status_code == 201
    booking = create_resp.json()
    booking_id = booking["id"]
    assert booking["status"] == "confirmed"
    assert booking["total_price"] == "390.00"
    assert booking["nights_count"] == 3
    assert booking["guest"]["full_name"] == "Charlie Brown"
    assert booking["accommodation"]["title"] == "Quiet Padstow Hideaway"

    overlap = await client.post(
        "/api/v1/bookings",
        json={
            **ids,
            "check_in_date": (check_in + timedelta(days=2)).isoformat(),
            "check_out_date": (check_out + timedelta(days=2)).isoformat(),
            "guest_count": 2,
        },
        headers=headers,
    )
    assert overlap.status_code == 409

    blocked = await client.get(
        "/api/v1/bookings/check-availability",
        params={
            "accommodation_id": ids["accommodation_id"],
            "check_in": check_in.isoformat(),
            "check_out": check_out.isoformat(),
        },
    )
    assert blocked.json()["available"] is False

    update_resp = await client.put(
        f"/api/v1/bookings/{booking_id}",
        json={"check_out_date": (check_out + timedelta(days=1)).isoformat()},
        headers=headers,
    )
    assert update_resp.status_code == 200
    assert update_resp.json()["total_price"] == "520.00"

    guest_bookings = await client.get(
        f"/api/v1/bookings/guest/{ids['guest_id']}", headers=headers
    )
    assert [item["id"] for item in guest_bookings.json()] == [booking_id]
    listing_bookings = await client.get(
        f"/api/v1/bookings/accommodation/{ids['accommodation_id']}", headers=headers
    )
    assert listing_bookings.json()[0]["guest_name"] == "Charlie Brown"

    cancel_resp = await client.post(
        f"/api/v1/bookings/{booking_id}/cancel",
        json={"reason": "Change of plans"},
        headers=headers,
    )
    assert cancel_resp.status_code == 200
    cancelled = cancel_resp.json()
    assert cancelled["status"] == "cancelled"
    assert cancelled["cancellation_reason"] == "Change of plans"

    again = await client.post(
        f"/api/v1/bookings/{booking_id}/cancel",
        json={"reason": "Second attempt"},
        headers=headers,
    )
    assert again.status_code == 200
    assert again.json()["cancellation_date"] == cancelled["cancellation_date"]
    assert again.json()["cancellation_reason"] == "Change of plans"

    search = await client.get(
        "/api/v1/bookings", params={"status": "cancelled"}, headers=headers
    )
    assert search.status_code == 200
    assert search.json()["total_count"] == 1

    reopened = await client.get(
        "/api/v1/bookings/check-availability",
        params={
            "accommodation_id": ids["accommodation_id"],
            "check_in": check_in.isoformat(),
            "check_out": check_out.isoformat(),
        },
    )
    assert reopened.json()["available"] is True


async def test_booking_errors_map_to_status_codes(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    owner_token = await _authenticate(
        client, app_context["owner_email"], app_context["owner_password"]
    )
    staff_token = await _authenticate(
        client, app_context["staff_email"], app_context["staff_password"]
    )
    headers = {"Authorization": f"Bearer {staff_token}"}
    ids = await _bookable_listing(
        client, {"Authorization": f"Bearer {owner_token}"}, headers
    )
    check_in = date.today() + timedelta(days=20)

    unauthenticated = await client.post("/api/v1/bookings", json={})
    assert unauthenticated.status_code == 401

    inverted = await client.post(
        "/api/v1/bookings",
        json={
            **ids,
            "check_in_date": check_in.isoformat(),
            "check_out_date": check_in.isoformat(),
            "guest_count": 2,
        },
        headers=headers,
    )
    assert inverted.status_code == 400
    assert "Check-out date must be after check-in date" in inverted.json()["detail"]["errors"]

    crowded = await client.post(
        "/api/v1/bookings",
        json={
            **ids,
            "check_in_date": check_in.isoformat(),
            "check_out_date": (check_in + timedelta(days=2)).isoformat(),
            "guest_count": 9,
        },
        headers=headers,
    )
    assert crowded.status_code == 400

    unknown_guest = await client.post(
        "/api/v1/bookings",
        json={
            "accommodation_id": ids["accommodation_id"],
            "guest_id": "00000000-0000-0000-0000-000000000000",
            "check_in_date": check_in.isoformat(),
            "check_out_date": (check_in + timedelta(days=2)).isoformat(),
            "guest_count": 2,
        },
        headers=headers,
    )
    assert unknown_guest.status_code == 404

    past = await client.post(
        "/api/v1/bookings",
        json={
            **ids,
            "check_in_date": (date.today() - timedelta(days=3)).isoformat(),
            "check_out_date": (date.today() + timedelta(days=1)).isoformat(),
            "guest_count": 2,
        },
        headers=headers,
    )
    assert past.status_code == 409

    bad_range = await client.get(
        "/api/v1/bookings/check-availability",
        params={
            "accommodation_id": ids["accommodation_id"],
            "check_in": check_in.isoformat(),
            "check_out": check_in.isoformat(),
        },
    )
    assert bad_range.status_code == 400

    missing = await client.get(
        "/api/v1/bookings/00000000-0000-0000-0000-000000000000", headers=headers
    )
    assert missing.status_code == 404

    blank_reason = await client.post(
        "/api/v1/bookings/00000000-0000-0000-0000-000000000000/cancel",
        json={"reason": ""},
        headers=headers,
    )
    assert blank_reason.status_code == 400


async def test_completed_stay_can_be_reviewed(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    owner_token = await _authenticate(
        client, app_context["owner_email"], app_context["owner_password"]
    )
    admin_token = await _authenticate(
        client, app_context["admin_email"], app_context["admin_password"]
    )
    staff_token = await _authenticate(
        client, app_context["staff_email"], app_context["staff_password"]
    )
    headers = {"Authorization": f"Bearer {staff_token}"}
    admin_headers = {"Authorization": f"Bearer {admin_token}"}
    ids = await _bookable_listing(
        client, {"Authorization": f"Bearer {owner_token}"}, headers
    )
    check_in = date.today() + timedelta(days=40)

    create_resp = await client.post(
        "/api/v1/bookings",
        json={
            **ids,
            "check_in_date": check_in.isoformat(),
            "check_out_date": (check_in + timedelta(days=2)).isoformat(),
            "guest_count": 2,
        },
        headers=headers,
    )
    booking_id = create_resp.json()["id"]

    too_early = await client.post(
        f"/api/v1/bookings/{booking_id}/review",
        json={"rating": 5},
        headers=headers,
    )
    assert too_early.status_code == 409

    complete = await client.put(
        f"/api/v1/bookings/{booking_id}",
        json={"status": "completed"},
        headers=headers,
    )
    assert complete.status_code == 200

    backwards = await client.put(
        f"/api/v1/bookings/{booking_id}",
        json={"status": "pending"},
        headers=headers,
    )
    assert backwards.status_code == 409

    review_resp = await client.post(
        f"/api/v1/bookings/{booking_id}/review",
        json={"rating": 4, "comment": "Lovely and quiet"},
        headers=headers,
    )
    assert review_resp.status_code == 201
    review = review_resp.json()
    assert review["guest_name"] == "Charlie Brown"

    detail = await client.get(f"/api/v1/accommodations/{ids['accommodation_id']}")
    assert detail.json()["review_count"] == 1
    assert detail.json()["average_rating"] == "4.00"

    staff_moderation = await client.patch(
        f"/api/v1/reviews/{review['id']}/approval",
        json={"is_approved": False},
        headers=headers,
    )
    assert staff_moderation.status_code == 403

    hidden = await client.patch(
        f"/api/v1/reviews/{review['id']}/approval",
        json={"is_approved": False},
        headers=admin_headers,
    )
    assert hidden.status_code == 200
    assert hidden.json()["is_approved"] is False

    reviews = await client.get(f"/api/v1/accommodations/{ids['accommodation_id']}/reviews")
    assert reviews.json() == []
