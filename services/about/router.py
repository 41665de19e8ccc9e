"""
services/about/router.py
About page singleton (id "about").
"""

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from config.database import get_db
from shared.middleware.auth import TokenData, require_admin
from shared.models.models import ABOUT_ID, AboutPage
from shared.schemas.schemas import AboutHeroResponse, AboutPageResponse, AboutPageUpdate
from shared.utils.media import MediaStorage, discard_image, get_media_storage, upload_image
from shared.utils.singletons import ABOUT_PAGE_DEFAULTS, get_or_create, upsert

router = APIRouter(prefix="/about", tags=["About Page"])

ABOUT_FOLDER = "about"


@router.get("", response_model=AboutPageResponse)
async def get_about(db: AsyncSession = Depends(get_db)):
    row = await get_or_create(db, AboutPage, ABOUT_ID, ABOUT_PAGE_DEFAULTS)
    return AboutPageResponse.model_validate(row)


@router.put("", response_model=AboutPageResponse)
async def update_about(
    data: AboutPageUpdate,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """
    Partial update. `values`, when present, replaces the whole list;
    each icon must be one of the supported icon names.
    """
    values = data.model_dump(exclude_unset=True, exclude_none=True)
    if "values" in values:
        values["values"] = [v.model_dump(mode="json") for v in data.values]
    row = await upsert(db, AboutPage, ABOUT_ID, ABOUT_PAGE_DEFAULTS, values)
    return AboutPageResponse.model_validate(row)


@router.post("/upload-hero", response_model=AboutHeroResponse)
async def upload_about_hero(
    image: UploadFile = File(...),
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    storage: MediaStorage = Depends(get_media_storage),
):
    stored = await upload_image(storage, image, ABOUT_FOLDER)

    row = await get_or_create(db, AboutPage, ABOUT_ID, ABOUT_PAGE_DEFAULTS)
    previous_public_id = row.hero_image_public_id
    row.hero_image = stored.url
    row.hero_image_public_id = stored.public_id
    await db.commit()

    await discard_image(storage, previous_public_id)
    return AboutHeroResponse(hero_image=row.hero_image)
