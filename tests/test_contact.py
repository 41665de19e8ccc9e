"""
tests/test_contact.py
Tests for the public contact form and the admin inbox workflow.
"""

import pytest
from httpx import AsyncClient

from shared.models.models import User
from tests.conftest import auth_headers

MESSAGE = {
    "name": "Dana",
    "email": "dana@example.com",
    "phone": "",
    "eventType": "Wedding",
    "message": "We are planning a June wedding for 120 guests.",
}


async def submit(client: AsyncClient, **overrides) -> dict:
    response = await client.post("/contact", json={**MESSAGE, **overrides})
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_submit_is_public_and_starts_new(client: AsyncClient):
    body = await submit(client)
    assert body["success"] is True
    contact = body["contact"]
    assert contact["status"] == "NEW"
    assert contact["phone"] is None
    assert contact["eventType"] == "Wedding"


@pytest.mark.asyncio
async def test_submit_validates_email(client: AsyncClient):
    response = await client.post("/contact", json={**MESSAGE, "email": "nope"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_submit_requires_message(client: AsyncClient):
    response = await client.post("/contact", json={**MESSAGE, "message": ""})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_inbox_requires_admin(client: AsyncClient, user: User):
    assert (await client.get("/contact")).status_code == 401
    assert (await client.get("/contact", headers=auth_headers(user))).status_code == 403


@pytest.mark.asyncio
async def test_status_workflow(client: AsyncClient, admin_user: User):
    headers = auth_headers(admin_user)
    contact = (await submit(client))["contact"]

    inbox = (await client.get("/contact", headers=headers)).json()
    assert [m["id"] for m in inbox] == [contact["id"]]

    read = await client.put(
        f"/contact/{contact['id']}/status", json={"status": "READ"}, headers=headers
    )
    assert read.status_code == 200
    assert read.json()["status"] == "READ"

    new_only = (await client.get("/contact", params={"status": "NEW"}, headers=headers)).json()
    assert new_only == []

    replied = await client.put(
        f"/contact/{contact['id']}/status", json={"status": "REPLIED"}, headers=headers
    )
    assert replied.json()["status"] == "REPLIED"


@pytest.mark.asyncio
async def test_status_can_skip_ahead(client: AsyncClient, admin_user: User):
    contact = (await submit(client))["contact"]
    response = await client.put(
        f"/contact/{contact['id']}/status",
        json={"status": "REPLIED"},
        headers=auth_headers(admin_user),
    )
    assert response.json()["status"] == "REPLIED"


@pytest.mark.asyncio
async def test_invalid_status_is_400(client: AsyncClient, admin_user: User):
    contact = (await submit(client))["contact"]
    response = await client.put(
        f"/contact/{contact['id']}/status",
        json={"status": "ARCHIVED"},
        headers=auth_headers(admin_user),
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_message(client: AsyncClient, admin_user: User):
    headers = auth_headers(admin_user)
    contact = (await submit(client))["contact"]

    assert (await client.delete(f"/contact/{contact['id']}", headers=headers)).status_code == 200
    assert (await client.get("/contact", headers=headers)).json() == []
    missing = await client.put(
        f"/contact/{contact['id']}/status", json={"status": "READ"}, headers=headers
    )
    assert missing.status_code == 404
