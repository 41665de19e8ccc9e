"""
services/testimonial/router.py
Client testimonials: public read, admin CRUD.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from config.database import get_db
from shared.middleware.auth import TokenData, require_admin
from shared.models.models import Testimonial
from shared.schemas.schemas import (
    SuccessResponse,
    TestimonialCreate,
    TestimonialResponse,
    TestimonialUpdate,
)

router = APIRouter(prefix="/testimonials", tags=["Testimonials"])


async def _get_testimonial(db: AsyncSession, testimonial_id: str) -> Testimonial:
    testimonial = await db.get(Testimonial, testimonial_id)
    if not testimonial:
        raise HTTPException(status_code=404, detail="Testimonial not found")
    return testimonial


@router.get("", response_model=list[TestimonialResponse])
async def list_testimonials(
    featured: Optional[bool] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """Public: newest first. ?featured=true for the homepage carousel."""
    query = select(Testimonial).order_by(Testimonial.created_at.desc())
    if featured:
        query = query.where(Testimonial.featured.is_(True))
    result = await db.execute(query)
    return [TestimonialResponse.model_validate(t) for t in result.scalars()]


@router.post("", response_model=TestimonialResponse, status_code=status.HTTP_201_CREATED)
async def create_testimonial(
    data: TestimonialCreate,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    testimonial = Testimonial(**data.model_dump())
    db.add(testimonial)
    await db.commit()
    return TestimonialResponse.model_validate(testimonial)


@router.put("/{testimonial_id}", response_model=TestimonialResponse)
async def update_testimonial(
    testimonial_id: str,
    data: TestimonialUpdate,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    testimonial = await _get_testimonial(db, testimonial_id)
    for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(testimonial, field, value)
    await db.commit()
    return TestimonialResponse.model_validate(testimonial)


@router.delete("/{testimonial_id}", response_model=SuccessResponse)
async def delete_testimonial(
    testimonial_id: str,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    testimonial = await _get_testimonial(db, testimonial_id)
    await db.delete(testimonial)
    await db.commit()
    return SuccessResponse()
