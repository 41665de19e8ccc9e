"""
services/contact_page/router.py
Contact page copy singleton (id "contact").
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from config.database import get_db
from shared.middleware.auth import TokenData, require_admin
from shared.models.models import CONTACT_PAGE_ID, ContactPage
from shared.schemas.schemas import ContactPageResponse, ContactPageUpdate
from shared.utils.singletons import CONTACT_PAGE_DEFAULTS, get_or_create, upsert

router = APIRouter(prefix="/contact-page", tags=["Contact Page"])


@router.get("", response_model=ContactPageResponse)
async def get_contact_page(db: AsyncSession = Depends(get_db)):
    row = await get_or_create(db, ContactPage, CONTACT_PAGE_ID, CONTACT_PAGE_DEFAULTS)
    return ContactPageResponse.model_validate(row)


@router.put("", response_model=ContactPageResponse)
async def update_contact_page(
    data: ContactPageUpdate,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    values = data.model_dump(exclude_unset=True, exclude_none=True)
    row = await upsert(db, ContactPage, CONTACT_PAGE_ID, CONTACT_PAGE_DEFAULTS, values)
    return ContactPageResponse.model_validate(row)
