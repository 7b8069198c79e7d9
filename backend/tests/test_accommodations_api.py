"""Accommodation API integration tests."""

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


async def _headers_for(app_context: dict[str, Any], key: str) -> dict[str, str]:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    token = await _authenticate(
        client, app_context[f"{key}_email"], app_context[f"{key}_password"]
    )
    return {"Authorization": f"Bearer {token}"}


def _listing_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "title": "Charming Sea View Cottage",
        "name": "Sea View Cottage",
        "description": "Charming cottage with stunning sea views.",
        "type": "cottage",
        "address_line1": "1 Cliff Road",
        "town": "St Ives",
        "post_code": "TR26 1AB",
        "latitude": 50.2108,
        "longitude": -5.4806,
        "bedrooms": 2,
        "bathrooms": 1,
        "max_occupancy": 4,
        "has_sea_view": True,
        "amenities": ["wifi", "pet_friendly"],
        "image_urls": ["stives_cottage1.jpg", "stives_cottage2.jpg"],
        "base_price_per_night": "135.71",
    }
    payload.update(overrides)
    return payload


async def test_owner_creates_and_manages_listing(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    headers = await _headers_for(app_context, "owner")

    create_resp = await client.post(
        "/api/v1/accommodations", json=_listing_payload(), headers=headers
    )
    assert create_resp.status_code == 201
    listing = create_resp.json()
    listing_id = listing["id"]
    assert listing["owner_id"] == str(app_context["owner_id"])
    assert listing["amenities"] == ["pet_friendly", "wifi"]
    assert listing["is_pet_friendly"] is True
    assert listing["primary_image_url"] == "stives_cottage1.jpg"
    assert listing["review_count"] == 0
    assert listing["average_rating"] is None

    patch_resp = await client.patch(
        f"/api/v1/accommodations/{listing_id}",
        json={"base_price_per_night": "150.00", "amenities": ["wifi"]},
        headers=headers,
    )
    assert patch_resp.status_code == 200
    patched = patch_resp.json()
    assert patched["base_price_per_night"] == "150.00"
    assert patched["is_pet_friendly"] is False
    assert patched["title"] == "Charming Sea View Cottage"

    put_resp = await client.put(
        f"/api/v1/accommodations/{listing_id}",
        json=_listing_payload(title="Renamed Clifftop Cottage", amenities=[]),
        headers=headers,
    )
    assert put_resp.status_code == 200
    assert put_resp.json()["title"] == "Renamed Clifftop Cottage"
    assert put_resp.json()["amenities"] == []

    read_resp = await client.get(f"/api/v1/accommodations/{listing_id}")
    assert read_resp.status_code == 200
    assert read_resp.json()["title"] == "Renamed Clifftop Cottage"

    delete_resp = await client.delete(
        f"/api/v1/accommodations/{listing_id}", headers=headers
    )
    assert delete_resp.status_code == 204
    missing = await client.get(f"/api/v1/accommodations/{listing_id}")
    assert missing.status_code == 404


async def test_listing_writes_are_restricted(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    owner_headers = await _headers_for(app_context, "owner")
    other_headers = await _headers_for(app_context, "other_owner")
    staff_headers = await _headers_for(app_context, "staff")
    admin_headers = await _headers_for(app_context, "admin")

    anonymous = await client.post("/api/v1/accommodations", json=_listing_payload())
    assert anonymous.status_code == 401

    staff = await client.post(
        "/api/v1/accommodations", json=_listing_payload(), headers=staff_headers
    )
    assert staff.status_code == 403

    created = await client.post(
        "/api/v1/accommodations", json=_listing_payload(), headers=owner_headers
    )
    listing_id = created.json()["id"]

    foreign = await client.patch(
        f"/api/v1/accommodations/{listing_id}",
        json={"bedrooms": 3},
        headers=other_headers,
    )
    assert foreign.status_code == 403

    admin = await client.patch(
        f"/api/v1/accommodations/{listing_id}",
        json={"bedrooms": 3},
        headers=admin_headers,
    )
    assert admin.status_code == 200
    assert admin.json()["bedrooms"] == 3


async def test_invalid_listing_reports_every_violation(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    headers = await _headers_for(app_context, "owner")

    response = await client.post(
        "/api/v1/accommodations",
        json=_listing_payload(post_code="NOT A CODE", max_occupancy=0, latitude=120),
        headers=headers,
    )
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["message"] == "Validation failed"
    assert "Invalid UK Postcode format" in detail["errors"]
    assert "Max occupancy must be between 1 and 100" in detail["errors"]
    assert "Latitude must be between -90 and 90" in detail["errors"]


async def test_patch_with_null_collections_is_rejected(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    headers = await _headers_for(app_context, "owner")
    create_resp = await client.post(
        "/api/v1/accommodations", json=_listing_payload(), headers=headers
    )
    listing_id = create_resp.json()["id"]

    response = await client.patch(
        f"/api/v1/accommodations/{listing_id}",
        json={"image_urls": None, "amenities": None},
        headers=headers,
    )
    assert response.status_code == 400
    errors = response.json()["detail"]["errors"]
    assert "Image URLs are required" in errors
    assert "Amenities is required" in errors

    unchanged = await client.get(f"/api/v1/accommodations/{listing_id}")
    assert unchanged.json()["primary_image_url"] == "stives_cottage1.jpg"


async def test_search_filters_and_clamps_page_size(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    headers = await _headers_for(app_context, "owner")

    for title, town, price in [
        ("Fistral Beach Apartment", "Newquay", "144.00"),
        ("Harbour House Mousehole", "Mousehole", "136.00"),
        ("Bude Surfer's Lodge", "Bude", "150.00"),
    ]:
        response = await client.post(
            "/api/v1/accommodations",
            json=_listing_payload(title=title, town=town, base_price_per_night=price),
            headers=headers,
        )
        assert response.status_code == 201

    everything = await client.get(
        "/api/v1/accommodations", params={"page_size": 500, "sort_by": "price"}
    )
    assert everything.status_code == 200
    page = everything.json()
    assert page["page_size"] == 50
    assert page["total_count"] == 3
    assert [item["town"] for item in page["items"]] == ["Mousehole", "Newquay", "Bude"]

    filtered = await client.get(
        "/api/v1/accommodations",
        params={"town": "new", "required_amenities": ["wifi", "pet_friendly"]},
    )
    assert filtered.status_code == 200
    assert [item["title"] for item in filtered.json()["items"]] == [
        "Fistral Beach Apartment"
    ]

    paged = await client.get(
        "/api/v1/accommodations", params={"page_size": 2, "page_number": 2}
    )
    body = paged.json()
    assert len(body["items"]) == 1
    assert body["total_pages"] == 2
    assert body["has_previous_page"] is True
    assert body["has_next_page"] is False


async def test_availability_periods_and_reviews_listing(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    headers = await _headers_for(app_context, "owner")
    other_headers = await _headers_for(app_context, "other_owner")

    created = await client.post(
        "/api/v1/accommodations", json=_listing_payload(), headers=headers
    )
    listing_id = created.json()["id"]
    start = date.today() + timedelta(days=30)

    period_resp = await client.post(
        f"/api/v1/accommodations/{listing_id}/availability",
        json={
            "start_date": start.isoformat(),
            "end_date": (start + timedelta(days=60)).isoformat(),
            "price_per_night_override": "185.00",
            "minimum_stay_nights": 7,
            "notes": "School holidays",
        },
        headers=headers,
    )
    assert period_resp.status_code == 201
    assert period_resp.json()["accommodation_id"] == listing_id

    inverted = await client.post(
        f"/api/v1/accommodations/{listing_id}/availability",
        json={
            "start_date": start.isoformat(),
            "end_date": (start - timedelta(days=1)).isoformat(),
        },
        headers=headers,
    )
    assert inverted.status_code == 400

    foreign = await client.post(
        f"/api/v1/accommodations/{listing_id}/availability",
        json={"start_date": start.isoformat(), "end_date": start.isoformat()},
        headers=other_headers,
    )
    assert foreign.status_code == 403

    periods = await client.get(f"/api/v1/accommodations/{listing_id}/availability")
    assert periods.status_code == 200
    assert [period["notes"] for period in periods.json()] == ["School holidays"]

    reviews = await client.get(f"/api/v1/accommodations/{listing_id}/reviews")
    assert reviews.status_code == 200
    assert reviews.json() == []

    detail = await client.get(f"/api/v1/accommodations/{listing_id}")
    assert len(detail.json()["availability_periods"]) == 1

    unknown = "00000000-0000-0000-0000-000000000000"
    assert (await client.get(f"/api/v1/accommodations/{unknown}/availability")).status_code == 404
    assert (await client.get(f"/api/v1/accommodations/{unknown}/reviews")).status_code == 404
