"""Guest API integration tests."""

from __future__ import annotations

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


async def test_guest_crud(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    token = await _authenticate(
        client, app_context["staff_email"], app_context["staff_password"]
    )
    headers = {"Authorization": f"Bearer {token}"}

    create_resp = await client.post(
        "/api/v1/guests",
        json={
            "first_name": "Ethan",
            "last_name": "Miller",
            "email": "ethan.m@example.com",
            "phone": "07700 900005",
            "address": "12 Fore Street, Fowey",
        },
        headers=headers,
    )
    assert create_resp.status_code == 201
    guest = create_resp.json()
    guest_id = guest["id"]
    assert guest["address"] == "12 Fore Street, Fowey"

    await client.post(
        "/api/v1/guests",
        json={
            "first_name": "Alice",
            "last_name": "Johnson",
            "email": "alice.j@example.com",
            "phone": "07700900001",
        },
        headers=headers,
    )

    listing = await client.get("/api/v1/guests", headers=headers)
    assert listing.status_code == 200
    assert [item["last_name"] for item in listing.json()] == ["Johnson", "Miller"]

    by_email = await client.get(
        "/api/v1/guests", params={"email": "ethan.m@example.com"}, headers=headers
    )
    assert [item["id"] for item in by_email.json()] == [guest_id]

    update_resp = await client.patch(
        f"/api/v1/guests/{guest_id}",
        json={"phone": "+44 7700 900099"},
        headers=headers,
    )
    assert update_resp.status_code == 200
    assert update_resp.json()["phone"] == "+44 7700 900099"
    assert update_resp.json()["first_name"] == "Ethan"

    read_resp = await client.get(f"/api/v1/guests/{guest_id}", headers=headers)
    assert read_resp.status_code == 200

    delete_resp = await client.delete(f"/api/v1/guests/{guest_id}", headers=headers)
    assert delete_resp.status_code == 204
    gone = await client.get(f"/api/v1/guests/{guest_id}", headers=headers)
    assert gone.status_code == 404


async def test_guest_validation_and_auth(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]

    anonymous = await client.get("/api/v1/guests")
    assert anonymous.status_code == 401

    token = await _authenticate(
        client, app_context["staff_email"], app_context["staff_password"]
    )
    headers = {"Authorization": f"Bearer {token}"}

    invalid = await client.post(
        "/api/v1/guests",
        json={
            "first_name": "",
            "last_name": "Davis",
            "email": "not-an-email",
            "phone": "call me",
        },
        headers=headers,
    )
    assert invalid.status_code == 400
    errors = invalid.json()["detail"]["errors"]
    assert "First name is required" in errors
    assert "Email is not a valid address" in errors
    assert "Phone is not a valid number" in errors

    missing = await client.patch(
        "/api/v1/guests/00000000-0000-0000-0000-000000000000",
        json={"first_name": "Nobody"},
        headers=headers,
    )
    assert missing.status_code == 404


async def test_wrong_password_is_rejected(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    response = await client.post(
        "/api/v1/auth/token",
        data={"username": app_context["staff_email"], "password": "wrong-password"},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert response.status_code == 401

    token = await _authenticate(
        client, app_context["admin_email"], app_context["admin_password"]
    )
    me = await client.get(
        "/api/v1/users/me", headers={"Authorization": f"Bearer {token}"}
    )
    assert me.status_code == 200
    assert me.json()["role"] == "admin"
