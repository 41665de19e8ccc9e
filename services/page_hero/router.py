"""
services/page_hero/router.py
Hero banners for the secondary pages, one row per page id.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from config.database import get_db
from shared.middleware.auth import TokenData, require_admin
from shared.models.models import HeroPage, PageHero
from shared.schemas.schemas import PageHeroResponse, PageHeroUpdate
from shared.utils.singletons import PAGE_HERO_DEFAULTS, get_or_create, upsert

router = APIRouter(prefix="/page-hero", tags=["Page Hero"])


@router.get("/{page_id}", response_model=PageHeroResponse)
async def get_page_hero(page_id: HeroPage, db: AsyncSession = Depends(get_db)):
    """Unknown page ids are rejected; known ones get their defaults on first read."""
    row = await get_or_create(db, PageHero, page_id.value, PAGE_HERO_DEFAULTS[page_id])
    return PageHeroResponse.model_validate(row)


@router.put("/{page_id}", response_model=PageHeroResponse)
async def update_page_hero(
    page_id: HeroPage,
    data: PageHeroUpdate,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    values = data.model_dump(exclude_unset=True, exclude_none=True)
    row = await upsert(db, PageHero, page_id.value, PAGE_HERO_DEFAULTS[page_id], values)
    return PageHeroResponse.model_validate(row)
