"""
services/gallery/router.py
Public gallery wall and admin image management.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from config.database import get_db
from shared.middleware.auth import TokenData, require_admin
from shared.models.models import Event, GalleryImage
from shared.schemas.schemas import GalleryImageResponse, SuccessResponse
from shared.utils.media import MediaStorage, discard_image, get_media_storage, upload_image

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/gallery", tags=["Gallery"])

GALLERY_FOLDER = "gallery"


@router.get("", response_model=list[GalleryImageResponse])
async def list_gallery(
    event_id: Optional[str] = Query(None, alias="eventId"),
    db: AsyncSession = Depends(get_db),
):
    """Public: every image newest first, with {id, title} of its event when linked."""
    query = (
        select(GalleryImage)
        .options(selectinload(GalleryImage.event))
        .order_by(GalleryImage.created_at.desc())
    )
    if event_id:
        query = query.where(GalleryImage.event_id == event_id)

    result = await db.execute(query)
    return [GalleryImageResponse.model_validate(img) for img in result.scalars()]


@router.post(
    "/{event_id}",
    response_model=GalleryImageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_gallery_image(
    event_id: str,
    image: UploadFile = File(...),
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    storage: MediaStorage = Depends(get_media_storage),
):
    """Upload an image and attach it to an event. The event is checked first."""
    event = await db.get(Event, event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")

    stored = await upload_image(storage, image, GALLERY_FOLDER)
    row = GalleryImage(
        image_url=stored.url,
        public_id=stored.public_id,
        event_id=event.id,
        event=event,
    )
    db.add(row)
    await db.commit()
    return GalleryImageResponse.model_validate(row)


@router.delete("/{image_id}", response_model=SuccessResponse)
async def delete_gallery_image(
    image_id: str,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    storage: MediaStorage = Depends(get_media_storage),
):
    row = await db.get(GalleryImage, image_id)
    if not row:
        raise HTTPException(status_code=404, detail="Image not found")

    public_id = row.public_id
    await db.delete(row)
    await db.commit()

    await discard_image(storage, public_id)
    return SuccessResponse()
