"""
services/event/router.py
Portfolio events: public listing/detail, admin CRUD and cover uploads.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from config.database import get_db
from shared.middleware.auth import TokenData, require_admin
from shared.models.models import Event
from shared.schemas.schemas import (
    EventCreate,
    EventResponse,
    EventUpdate,
    SuccessResponse,
    UploadResponse,
)
from shared.utils.media import MediaStorage, discard_image, get_media_storage, upload_image

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["Events"])

COVER_FOLDER = "events"


async def _get_event(db: AsyncSession, event_id: str) -> Event:
    event = await db.scalar(
        select(Event).options(selectinload(Event.gallery)).where(Event.id == event_id)
    )
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.get("", response_model=list[EventResponse])
async def list_events(
    featured: Optional[bool] = Query(None, description="true → homepage featured events only"),
    category: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """Public: all events newest first, each with its gallery images."""
    query = (
        select(Event)
        .options(selectinload(Event.gallery))
        .order_by(Event.created_at.desc())
    )
    if featured:
        query = query.where(Event.featured.is_(True))
    if category:
        query = query.where(Event.category == category)

    result = await db.execute(query)
    return [EventResponse.model_validate(e) for e in result.scalars()]


# Registered before /{event_id} so the literal path wins
@router.post("/upload-cover", response_model=UploadResponse)
async def upload_cover(
    image: UploadFile = File(...),
    admin: TokenData = Depends(require_admin),
    storage: MediaStorage = Depends(get_media_storage),
):
    """
    Upload a cover image and return its URL and public id.
    The client then sends both back in the event create/update payload.
    """
    stored = await upload_image(storage, image, COVER_FOLDER)
    return UploadResponse(url=stored.url, public_id=stored.public_id)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(event_id: str, db: AsyncSession = Depends(get_db)):
    """Public: a single event with its gallery."""
    return EventResponse.model_validate(await _get_event(db, event_id))


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    data: EventCreate,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    event = Event(**data.model_dump(), gallery=[])
    db.add(event)
    await db.commit()
    logger.info("Event %s created by %s", event.id, admin.email)
    return EventResponse.model_validate(event)


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: str,
    data: EventUpdate,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    storage: MediaStorage = Depends(get_media_storage),
):
    """Partial update: only fields present in the body are written."""
    event = await _get_event(db, event_id)
    updates = data.model_dump(exclude_unset=True, exclude_none=True)

    replaced_public_id = None
    new_public_id = updates.get("cover_image_public_id")
    if new_public_id and new_public_id != event.cover_image_public_id:
        replaced_public_id = event.cover_image_public_id
    elif (
        new_public_id is None
        and "cover_image" in updates
        and updates["cover_image"] != event.cover_image
    ):
        # New cover URL from elsewhere: the stored id no longer describes it
        replaced_public_id = event.cover_image_public_id
        updates["cover_image_public_id"] = None

    for field, value in updates.items():
        setattr(event, field, value)
    await db.commit()

    await discard_image(storage, replaced_public_id)
    return EventResponse.model_validate(event)


@router.delete("/{event_id}", response_model=SuccessResponse)
async def delete_event(
    event_id: str,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    storage: MediaStorage = Depends(get_media_storage),
):
    """
    Delete an event. Its gallery images are detached, not deleted,
    and stay visible on the public gallery.
    """
    event = await _get_event(db, event_id)
    cover_public_id = event.cover_image_public_id

    # Clearing the loaded collection nulls each image.event_id on flush
    event.gallery = []
    await db.delete(event)
    await db.commit()

    await discard_image(storage, cover_public_id)
    return SuccessResponse()
