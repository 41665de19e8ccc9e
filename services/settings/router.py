"""
services/settings/router.py
Site-wide settings singleton: brand, home hero, about teaser, CTA, footer.

GET creates the row with defaults on first read. Images are changed through
dedicated upload endpoints, each returning the full settings object.
"""

import logging

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from config.database import get_db
from shared.middleware.auth import TokenData, require_admin
from shared.models.models import SETTINGS_ID, SiteSettings
from shared.schemas.schemas import SiteSettingsResponse, SiteSettingsUpdate
from shared.utils.media import MediaStorage, discard_image, get_media_storage, upload_image
from shared.utils.singletons import SITE_SETTINGS_DEFAULTS, get_or_create, upsert

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["Site Settings"])

SETTINGS_FOLDER = "settings"


async def _replace_image(
    db: AsyncSession,
    storage: MediaStorage,
    file: UploadFile,
    field: str,
) -> SiteSettings:
    """Upload `file`, point `field` at it, then drop the asset it replaced."""
    stored = await upload_image(storage, file, SETTINGS_FOLDER)

    row = await get_or_create(db, SiteSettings, SETTINGS_ID, SITE_SETTINGS_DEFAULTS)
    previous_public_id = getattr(row, f"{field}_public_id")
    setattr(row, field, stored.url)
    setattr(row, f"{field}_public_id", stored.public_id)
    await db.commit()

    await discard_image(storage, previous_public_id)
    logger.info("Site settings %s replaced", field)
    return row


@router.get("", response_model=SiteSettingsResponse)
async def get_site_settings(db: AsyncSession = Depends(get_db)):
    row = await get_or_create(db, SiteSettings, SETTINGS_ID, SITE_SETTINGS_DEFAULTS)
    return SiteSettingsResponse.model_validate(row)


@router.put("", response_model=SiteSettingsResponse)
async def update_site_settings(
    data: SiteSettingsUpdate,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Partial update of text fields. socialLinks replaces the stored object."""
    values = data.model_dump(exclude_unset=True, exclude_none=True)
    if "social_links" in values:
        values["social_links"] = data.social_links.model_dump(exclude_none=True)
    row = await upsert(db, SiteSettings, SETTINGS_ID, SITE_SETTINGS_DEFAULTS, values)
    return SiteSettingsResponse.model_validate(row)


@router.post("/hero-image", response_model=SiteSettingsResponse)
async def upload_hero_image(
    image: UploadFile = File(...),
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    storage: MediaStorage = Depends(get_media_storage),
):
    return SiteSettingsResponse.model_validate(
        await _replace_image(db, storage, image, "hero_image")
    )


@router.post("/brand-logo", response_model=SiteSettingsResponse)
async def upload_brand_logo(
    image: UploadFile = File(...),
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    storage: MediaStorage = Depends(get_media_storage),
):
    return SiteSettingsResponse.model_validate(
        await _replace_image(db, storage, image, "brand_logo")
    )


@router.post("/about-image-1", response_model=SiteSettingsResponse)
async def upload_about_image_1(
    image: UploadFile = File(...),
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    storage: MediaStorage = Depends(get_media_storage),
):
    return SiteSettingsResponse.model_validate(
        await _replace_image(db, storage, image, "about_image1")
    )


@router.post("/about-image-2", response_model=SiteSettingsResponse)
async def upload_about_image_2(
    image: UploadFile = File(...),
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    storage: MediaStorage = Depends(get_media_storage),
):
    return SiteSettingsResponse.model_validate(
        await _replace_image(db, storage, image, "about_image2")
    )
