"""
services/category/router.py
Portfolio categories. The slug is always derived from the name server-side.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from config.database import get_db
from shared.middleware.auth import TokenData, require_admin
from shared.models.models import Category
from shared.schemas.schemas import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    SuccessResponse,
)
from shared.utils.slug import slugify

router = APIRouter(prefix="/categories", tags=["Categories"])


async def _ensure_slug_free(db: AsyncSession, slug: str, exclude_id: str | None = None) -> None:
    query = select(Category.id).where(Category.slug == slug)
    if exclude_id:
        query = query.where(Category.id != exclude_id)
    if await db.scalar(query):
        raise HTTPException(status_code=409, detail="Category already exists")


async def _commit_or_conflict(db: AsyncSession) -> None:
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=409, detail="Category already exists")


@router.get("", response_model=list[CategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)):
    """Public: ordered by the admin-controlled `order` field."""
    result = await db.execute(select(Category).order_by(Category.order.asc(), Category.name.asc()))
    return [CategoryResponse.model_validate(c) for c in result.scalars()]


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreate,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    slug = slugify(data.name)
    await _ensure_slug_free(db, slug)

    category = Category(name=data.name, slug=slug, order=data.order)
    db.add(category)
    await _commit_or_conflict(db)
    return CategoryResponse.model_validate(category)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str,
    data: CategoryUpdate,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    category = await db.get(Category, category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")

    if data.name is not None and data.name != category.name:
        slug = slugify(data.name)
        await _ensure_slug_free(db, slug, exclude_id=category_id)
        category.name = data.name
        category.slug = slug
    if data.order is not None:
        category.order = data.order

    await _commit_or_conflict(db)
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}", response_model=SuccessResponse)
async def delete_category(
    category_id: str,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    category = await db.get(Category, category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    await db.delete(category)
    await db.commit()
    return SuccessResponse()
