"""
services/admin/router.py
Admin dashboard: content counters and the moderation audit trail.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from config.database import get_db
from shared.middleware.auth import TokenData, require_admin
from shared.models.models import (
    AdminAuditLog,
    ContactMessage,
    Event,
    GalleryImage,
    MessageStatus,
    Testimonial,
    User,
    UserStatus,
)
from shared.schemas.schemas import (
    AdminSummaryResponse,
    AuditLogPage,
    AuditLogResponse,
    EventBrief,
)

router = APIRouter(prefix="/admin", tags=["Admin"])

RECENT_EVENTS_LIMIT = 5


@router.get("/summary", response_model=AdminSummaryResponse)
async def get_summary(
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Counters for the dashboard cards plus the latest events."""
    total_events = await db.scalar(select(func.count(Event.id)))
    gallery_images = await db.scalar(select(func.count(GalleryImage.id)))
    testimonials = await db.scalar(select(func.count(Testimonial.id)))
    new_messages = await db.scalar(
        select(func.count(ContactMessage.id)).where(ContactMessage.status == MessageStatus.NEW)
    )
    pending_users = await db.scalar(
        select(func.count(User.id)).where(User.status == UserStatus.PENDING)
    )
    recent = await db.execute(
        select(Event.id, Event.title)
        .order_by(Event.created_at.desc())
        .limit(RECENT_EVENTS_LIMIT)
    )

    return AdminSummaryResponse(
        total_events=total_events or 0,
        gallery_images=gallery_images or 0,
        testimonials=testimonials or 0,
        new_messages=new_messages or 0,
        pending_users=pending_users or 0,
        recent_events=[EventBrief(id=row.id, title=row.title) for row in recent],
    )


# ── Audit Log ─────────────────────────────────────────────────────────────────

@router.get("/audit-logs", response_model=AuditLogPage)
async def get_audit_logs(
    action: Optional[str] = Query(None, description="Filter by action type e.g. BLOCK_USER"),
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=100, alias="pageSize"),
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Append-only admin audit log, newest first."""
    query = select(AdminAuditLog).order_by(AdminAuditLog.created_at.desc())
    if action:
        query = query.where(AdminAuditLog.action == action.upper())

    total = await db.scalar(select(func.count()).select_from(query.subquery()))
    result = await db.execute(query.offset((page - 1) * page_size).limit(page_size))

    return AuditLogPage(
        items=[AuditLogResponse.model_validate(log) for log in result.scalars()],
        total=total or 0,
        page=page,
        page_size=page_size,
    )
