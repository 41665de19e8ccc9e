"""
tests/test_stats.py
"""

import pytest
from httpx import AsyncClient

from shared.models.models import User
from tests.conftest import auth_headers


@pytest.mark.asyncio
async def test_stats_filtered_by_page_and_ordered(client: AsyncClient, admin_user: User):
    headers = auth_headers(admin_user)
    for label, page, order in [
        ("Clients", "HOME", 2),
        ("Events", "HOME", 1),
        ("Years", "ABOUT", 0),
    ]:
        response = await client.post(
            "/stats",
            json={"label": label, "value": "500+", "page": page, "order": order},
            headers=headers,
        )
        assert response.status_code == 201

    home = (await client.get("/stats", params={"page": "HOME"})).json()
    assert [s["label"] for s in home] == ["Events", "Clients"]
    assert all(s["page"] == "HOME" for s in home)

    assert len((await client.get("/stats")).json()) == 3


@pytest.mark.asyncio
async def test_unknown_page_rejected(client: AsyncClient, admin_user: User):
    response = await client.post(
        "/stats",
        json={"label": "X", "value": "1", "page": "FOOTER"},
        headers=auth_headers(admin_user),
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_stat_writes_require_admin(client: AsyncClient, user: User):
    anonymous = await client.post(
        "/stats", json={"label": "X", "value": "1", "page": "HOME"}
    )
    assert anonymous.status_code == 401

    member = await client.post(
        "/stats",
        json={"label": "X", "value": "1", "page": "HOME"},
        headers=auth_headers(user),
    )
    assert member.status_code == 403


@pytest.mark.asyncio
async def test_update_and_delete_stat(client: AsyncClient, admin_user: User):
    headers = auth_headers(admin_user)
    stat = (
        await client.post(
            "/stats", json={"label": "Events", "value": "100", "page": "HOME"}, headers=headers
        )
    ).json()

    updated = await client.put(f"/stats/{stat['id']}", json={"value": "200+"}, headers=headers)
    assert updated.json()["value"] == "200+"
    assert updated.json()["label"] == "Events"

    assert (await client.delete(f"/stats/{stat['id']}", headers=headers)).status_code == 200
    assert (await client.put(f"/stats/{stat['id']}", json={"value": "1"}, headers=headers)).status_code == 404
