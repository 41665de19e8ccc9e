"""
tests/test_events.py
Tests for portfolio events: public reads, admin CRUD, cover uploads.
"""

import pytest
from httpx import AsyncClient

from shared.models.models import User
from tests.conftest import FakeMediaStorage, auth_headers, image_file


def event_payload(**overrides) -> dict:
    payload = {
        "title": "Garden Wedding",
        "description": "An evening ceremony under fairy lights.",
        "category": "Weddings",
        "date": "2024-06-01T17:00:00Z",
        "client": "The Smiths",
    }
    payload.update(overrides)
    return payload


async def create_event(client: AsyncClient, admin: User, **overrides) -> dict:
    response = await client.post(
        "/events", json=event_payload(**overrides), headers=auth_headers(admin)
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_event(client: AsyncClient, admin_user: User):
    event = await create_event(client, admin_user, coverImage="https://img/cover.jpg")
    assert event["title"] == "Garden Wedding"
    assert event["coverImage"] == "https://img/cover.jpg"
    assert event["featured"] is False
    assert event["gallery"] == []
    assert "createdAt" in event and "updatedAt" in event


@pytest.mark.asyncio
async def test_create_event_requires_admin(client: AsyncClient, user: User):
    anonymous = await client.post("/events", json=event_payload())
    assert anonymous.status_code == 401

    member = await client.post("/events", json=event_payload(), headers=auth_headers(user))
    assert member.status_code == 403


@pytest.mark.asyncio
async def test_create_event_missing_fields_is_400(client: AsyncClient, admin_user: User):
    response = await client.post(
        "/events", json={"title": "Only a title"}, headers=auth_headers(admin_user)
    )
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert "description" in detail and "client" in detail


@pytest.mark.asyncio
async def test_unknown_fields_are_ignored(client: AsyncClient, admin_user: User):
    event = await create_event(client, admin_user, id="forced-id", hacked=True)
    assert event["id"] != "forced-id"
    assert "hacked" not in event


@pytest.mark.asyncio
async def test_list_events_public_newest_first(client: AsyncClient, admin_user: User):
    first = await create_event(client, admin_user, title="First")
    second = await create_event(client, admin_user, title="Second")

    response = await client.get("/events")
    assert response.status_code == 200
    ids = [e["id"] for e in response.json()]
    assert ids == [second["id"], first["id"]]


@pytest.mark.asyncio
async def test_list_events_filters(client: AsyncClient, admin_user: User):
    await create_event(client, admin_user, title="Gala", category="Corporate", featured=True)
    await create_event(client, admin_user, title="Wedding", category="Weddings")

    featured = await client.get("/events", params={"featured": "true"})
    assert [e["title"] for e in featured.json()] == ["Gala"]

    weddings = await client.get("/events", params={"category": "Weddings"})
    assert [e["title"] for e in weddings.json()] == ["Wedding"]


@pytest.mark.asyncio
async def test_get_event_and_404(client: AsyncClient, admin_user: User):
    event = await create_event(client, admin_user)
    found = await client.get(f"/events/{event['id']}")
    assert found.status_code == 200
    assert found.json()["client"] == "The Smiths"

    missing = await client.get("/events/nope")
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_update_event_is_partial(client: AsyncClient, admin_user: User):
    event = await create_event(client, admin_user)
    response = await client.put(
        f"/events/{event['id']}",
        json={"featured": True},
        headers=auth_headers(admin_user),
    )
    assert response.status_code == 200
    data = response.json()
    assert data["featured"] is True
    assert data["title"] == event["title"]
    assert data["description"] == event["description"]


@pytest.mark.asyncio
async def test_update_missing_event_404(client: AsyncClient, admin_user: User):
    response = await client.put(
        "/events/nope", json={"title": "x"}, headers=auth_headers(admin_user)
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_replacing_cover_discards_old_asset(
    client: AsyncClient, admin_user: User, media: FakeMediaStorage
):
    event = await create_event(
        client, admin_user, coverImage="https://img/a.jpg", coverImagePublicId="events/a"
    )
    await client.put(
        f"/events/{event['id']}",
        json={"coverImage": "https://img/b.jpg", "coverImagePublicId": "events/b"},
        headers=auth_headers(admin_user),
    )
    assert media.deleted == ["events/a"]


@pytest.mark.asyncio
async def test_upload_cover(client: AsyncClient, admin_user: User, media: FakeMediaStorage):
    response = await client.post(
        "/events/upload-cover", files=image_file(), headers=auth_headers(admin_user)
    )
    assert response.status_code == 200
    data = response.json()
    assert data["publicId"] == "events/img1"
    assert data["url"].endswith("events/img1.jpg")
    assert media.uploads[0]["folder"] == "events"


@pytest.mark.asyncio
async def test_delete_event_detaches_gallery(
    client: AsyncClient, admin_user: User, media: FakeMediaStorage
):
    headers = auth_headers(admin_user)
    event = await create_event(client, admin_user, coverImagePublicId="events/cover")
    image = (
        await client.post(f"/gallery/{event['id']}", files=image_file(), headers=headers)
    ).json()

    response = await client.delete(f"/events/{event['id']}", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert "events/cover" in media.deleted

    gallery = (await client.get("/gallery")).json()
    assert len(gallery) == 1
    assert gallery[0]["id"] == image["id"]
    assert gallery[0]["eventId"] is None
    assert gallery[0]["event"] is None

    assert (await client.get(f"/events/{event['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_delete_missing_event_404(client: AsyncClient, admin_user: User):
    response = await client.delete("/events/nope", headers=auth_headers(admin_user))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_new_cover_without_public_id_drops_stale_id(
    client: AsyncClient, admin_user: User, media: FakeMediaStorage
):
    headers = auth_headers(admin_user)
    event = await create_event(
        client, admin_user, coverImage="https://img/a.jpg", coverImagePublicId="events/a"
    )
    response = await client.put(
        f"/events/{event['id']}",
        json={"coverImage": "https://elsewhere.com/b.jpg"},
        headers=headers,
    )
    assert response.json()["coverImage"] == "https://elsewhere.com/b.jpg"
    assert media.deleted == ["events/a"]

    # Deleting the event must not destroy the already-removed asset again
    await client.delete(f"/events/{event['id']}", headers=headers)
    assert media.deleted == ["events/a"]


@pytest.mark.asyncio
async def test_same_cover_url_keeps_public_id(
    client: AsyncClient, admin_user: User, media: FakeMediaStorage
):
    headers = auth_headers(admin_user)
    event = await create_event(
        client, admin_user, coverImage="https://img/a.jpg", coverImagePublicId="events/a"
    )
    await client.put(
        f"/events/{event['id']}",
        json={"coverImage": "https://img/a.jpg", "title": "Renamed"},
        headers=headers,
    )
    assert media.deleted == []

    await client.delete(f"/events/{event['id']}", headers=headers)
    assert media.deleted == ["events/a"]
