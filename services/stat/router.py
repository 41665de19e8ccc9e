"""
services/stat/router.py
Headline numbers shown on the home, about and testimonials pages.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from config.database import get_db
from shared.middleware.auth import TokenData, require_admin
from shared.models.models import Stat, StatPage
from shared.schemas.schemas import StatCreate, StatResponse, StatUpdate, SuccessResponse

router = APIRouter(prefix="/stats", tags=["Stats"])


async def _get_stat(db: AsyncSession, stat_id: str) -> Stat:
    stat = await db.get(Stat, stat_id)
    if not stat:
        raise HTTPException(status_code=404, detail="Stat not found")
    return stat


@router.get("", response_model=list[StatResponse])
async def list_stats(
    page: Optional[StatPage] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    query = select(Stat).order_by(Stat.order.asc(), Stat.created_at.asc())
    if page:
        query = query.where(Stat.page == page)
    result = await db.execute(query)
    return [StatResponse.model_validate(s) for s in result.scalars()]


@router.post("", response_model=StatResponse, status_code=status.HTTP_201_CREATED)
async def create_stat(
    data: StatCreate,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    stat = Stat(**data.model_dump())
    db.add(stat)
    await db.commit()
    return StatResponse.model_validate(stat)


@router.put("/{stat_id}", response_model=StatResponse)
async def update_stat(
    stat_id: str,
    data: StatUpdate,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    stat = await _get_stat(db, stat_id)
    for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(stat, field, value)
    await db.commit()
    return StatResponse.model_validate(stat)


@router.delete("/{stat_id}", response_model=SuccessResponse)
async def delete_stat(
    stat_id: str,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    stat = await _get_stat(db, stat_id)
    await db.delete(stat)
    await db.commit()
    return SuccessResponse()
