"""
tests/test_admin.py
Tests for the admin dashboard summary, audit log, health and error shape.
"""

import pytest
from httpx import AsyncClient

from shared.models.models import User
from tests.conftest import auth_headers, image_file
from tests.test_events import create_event


@pytest.mark.asyncio
async def test_summary_counts(
    client: AsyncClient, admin_user: User, pending_user: User
):
    headers = auth_headers(admin_user)
    first = await create_event(client, admin_user, title="First")
    await create_event(client, admin_user, title="Second")
    await client.post(f"/gallery/{first['id']}", files=image_file(), headers=headers)
    await client.post("/testimonials", json={"name": "A", "message": "m"}, headers=headers)
    await client.post(
        "/contact",
        json={"name": "Q", "email": "q@example.com", "message": "Hello there"},
    )

    response = await client.get("/admin/summary", headers=headers)
    assert response.status_code == 200
    data = response.json()
    assert data["totalEvents"] == 2
    assert data["galleryImages"] == 1
    assert data["testimonials"] == 1
    assert data["newMessages"] == 1
    assert data["pendingUsers"] == 1
    assert [e["title"] for e in data["recentEvents"]] == ["Second", "First"]


@pytest.mark.asyncio
async def test_summary_requires_admin(client: AsyncClient, user: User):
    response = await client.get("/admin/summary", headers=auth_headers(user))
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_audit_log_lists_moderation(
    client: AsyncClient, admin_user: User, pending_user: User
):
    headers = auth_headers(admin_user)
    await client.put(f"/users/{pending_user.id}/approve", headers=headers)
    await client.put(f"/users/{pending_user.id}/block", headers=headers)

    response = await client.get("/admin/audit-logs", headers=headers)
    assert response.status_code == 200
    page = response.json()
    assert page["total"] == 2
    assert {item["action"] for item in page["items"]} == {"APPROVE_USER", "BLOCK_USER"}

    filtered = (
        await client.get("/admin/audit-logs", params={"action": "block_user"}, headers=headers)
    ).json()
    assert [item["action"] for item in filtered["items"]] == ["BLOCK_USER"]


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "OK"
    assert data["database"] == "ok"
    assert "X-Request-ID" in response.headers


@pytest.mark.asyncio
async def test_request_id_is_echoed(client: AsyncClient):
    response = await client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


@pytest.mark.asyncio
async def test_validation_errors_are_flattened(client: AsyncClient):
    response = await client.post("/auth/register", json={})
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert isinstance(detail, str)
    assert "email:" in detail and "password:" in detail
