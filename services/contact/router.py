"""
services/contact/router.py
Public contact form and the admin inbox.

Status lifecycle: NEW → READ → REPLIED (admins may skip ahead).
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from config.database import get_db
from shared.middleware.auth import TokenData, require_admin
from shared.models.models import ContactMessage, MessageStatus
from shared.schemas.schemas import (
    ContactMessageCreate,
    ContactMessageResponse,
    ContactStatusUpdate,
    ContactSubmitResponse,
    SuccessResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contact", tags=["Contact Messages"])


async def _get_message(db: AsyncSession, message_id: str) -> ContactMessage:
    message = await db.get(ContactMessage, message_id)
    if not message:
        raise HTTPException(status_code=404, detail="Message not found")
    return message


@router.post("", response_model=ContactSubmitResponse, status_code=status.HTTP_201_CREATED)
async def submit_contact(data: ContactMessageCreate, db: AsyncSession = Depends(get_db)):
    """Public: store a contact-form submission with status NEW."""
    message = ContactMessage(**data.model_dump(), status=MessageStatus.NEW)
    db.add(message)
    await db.commit()
    logger.info("Contact message %s received", message.id)
    return ContactSubmitResponse(contact=ContactMessageResponse.model_validate(message))


@router.get("", response_model=list[ContactMessageResponse])
async def list_messages(
    status_filter: Optional[MessageStatus] = Query(None, alias="status"),
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    query = select(ContactMessage).order_by(ContactMessage.created_at.desc())
    if status_filter:
        query = query.where(ContactMessage.status == status_filter)
    result = await db.execute(query)
    return [ContactMessageResponse.model_validate(m) for m in result.scalars()]


@router.put("/{message_id}/status", response_model=ContactMessageResponse)
async def update_message_status(
    message_id: str,
    data: ContactStatusUpdate,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    message = await _get_message(db, message_id)
    message.status = MessageStatus(data.status)
    await db.commit()
    return ContactMessageResponse.model_validate(message)


@router.delete("/{message_id}", response_model=SuccessResponse)
async def delete_message(
    message_id: str,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    message = await _get_message(db, message_id)
    await db.delete(message)
    await db.commit()
    return SuccessResponse()
