"""
tests/test_testimonials.py
"""

import pytest
from httpx import AsyncClient

from shared.models.models import User
from tests.conftest import auth_headers


@pytest.mark.asyncio
async def test_testimonial_crud(client: AsyncClient, admin_user: User):
    headers = auth_headers(admin_user)
    created = await client.post(
        "/testimonials",
        json={"name": "Ana", "role": "Bride", "message": "Flawless day!", "rating": 5},
        headers=headers,
    )
    assert created.status_code == 201
    testimonial = created.json()
    assert testimonial["rating"] == 5
    assert testimonial["featured"] is False

    updated = await client.put(
        f"/testimonials/{testimonial['id']}", json={"featured": True}, headers=headers
    )
    assert updated.json()["featured"] is True
    assert updated.json()["message"] == "Flawless day!"

    deleted = await client.delete(f"/testimonials/{testimonial['id']}", headers=headers)
    assert deleted.json() == {"success": True}
    assert (await client.get("/testimonials")).json() == []


@pytest.mark.asyncio
async def test_rating_out_of_range_is_400(client: AsyncClient, admin_user: User):
    response = await client.post(
        "/testimonials",
        json={"name": "Bo", "message": "Great", "rating": 6},
        headers=auth_headers(admin_user),
    )
    assert response.status_code == 400
    assert "rating" in response.json()["detail"]


@pytest.mark.asyncio
async def test_rating_is_optional(client: AsyncClient, admin_user: User):
    response = await client.post(
        "/testimonials",
        json={"name": "Cy", "message": "Lovely"},
        headers=auth_headers(admin_user),
    )
    assert response.status_code == 201
    assert response.json()["rating"] is None
    assert response.json()["role"] == ""


@pytest.mark.asyncio
async def test_featured_filter(client: AsyncClient, admin_user: User):
    headers = auth_headers(admin_user)
    await client.post(
        "/testimonials", json={"name": "A", "message": "m", "featured": True}, headers=headers
    )
    await client.post("/testimonials", json={"name": "B", "message": "m"}, headers=headers)

    featured = (await client.get("/testimonials", params={"featured": "true"})).json()
    assert [t["name"] for t in featured] == ["A"]
    assert len((await client.get("/testimonials")).json()) == 2


@pytest.mark.asyncio
async def test_testimonial_writes_require_admin(client: AsyncClient, user: User):
    response = await client.post(
        "/testimonials", json={"name": "X", "message": "m"}, headers=auth_headers(user)
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_update_missing_testimonial_404(client: AsyncClient, admin_user: User):
    response = await client.put(
        "/testimonials/nope", json={"name": "X"}, headers=auth_headers(admin_user)
    )
    assert response.status_code == 404
