"""
services/user/router.py
Admin-only account moderation: approve, block, unblock, promote, delete.

Every mutation is logged to AdminAuditLog before returning.
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from config.database import get_db
from shared.middleware.auth import TokenData, require_admin
from shared.models.models import AdminAuditLog, User, UserRole, UserStatus
from shared.schemas.schemas import SuccessResponse, UserResponse

router = APIRouter(prefix="/users", tags=["Users"])


# ── Helpers ────────────────────────────────────────────────────────────────────

def _log(
    db: AsyncSession,
    admin: TokenData,
    action: str,
    entity_id: str,
    payload: dict | None = None,
    request: Request | None = None,
) -> None:
    """Append an immutable record to AdminAuditLog."""
    db.add(AdminAuditLog(
        admin_id=admin.user_id,
        action=action,
        entity_type="User",
        entity_id=entity_id,
        payload=payload or {},
        ip_address=request.client.host if request and request.client else None,
    ))


async def _get_user(db: AsyncSession, user_id: str) -> User:
    user = await db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


# ── Listing ────────────────────────────────────────────────────────────────────

@router.get("", response_model=list[UserResponse])
async def list_users(
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """All accounts, newest first. Never includes password hashes."""
    result = await db.execute(select(User).order_by(User.created_at.desc()))
    return [UserResponse.model_validate(u) for u in result.scalars()]


# ── Status transitions ─────────────────────────────────────────────────────────

@router.put("/{user_id}/approve", response_model=UserResponse)
async def approve_user(
    user_id: str,
    request: Request,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """PENDING → APPROVED (also re-approves a BLOCKED account)."""
    user = await _get_user(db, user_id)
    previous = user.status.value
    user.status = UserStatus.APPROVED
    _log(db, admin, "APPROVE_USER", user_id, {"from": previous}, request)
    await db.commit()
    return UserResponse.model_validate(user)


@router.put("/{user_id}/block", response_model=UserResponse)
async def block_user(
    user_id: str,
    request: Request,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Block an account. Existing tokens stay valid until they expire."""
    user = await _get_user(db, user_id)
    previous = user.status.value
    user.status = UserStatus.BLOCKED
    _log(db, admin, "BLOCK_USER", user_id, {"from": previous}, request)
    await db.commit()
    return UserResponse.model_validate(user)


@router.put("/{user_id}/unblock", response_model=UserResponse)
async def unblock_user(
    user_id: str,
    request: Request,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """BLOCKED → APPROVED."""
    user = await _get_user(db, user_id)
    previous = user.status.value
    user.status = UserStatus.APPROVED
    _log(db, admin, "UNBLOCK_USER", user_id, {"from": previous}, request)
    await db.commit()
    return UserResponse.model_validate(user)


@router.put("/{user_id}/promote", response_model=UserResponse)
async def promote_user(
    user_id: str,
    request: Request,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """USER → ADMIN. Status is left as is."""
    user = await _get_user(db, user_id)
    user.role = UserRole.ADMIN
    _log(db, admin, "PROMOTE_USER", user_id, {}, request)
    await db.commit()
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", response_model=SuccessResponse)
async def delete_user(
    user_id: str,
    request: Request,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Delete an account. Admins cannot delete themselves."""
    if admin.user_id == user_id:
        raise HTTPException(status_code=400, detail="You cannot delete your own account")

    user = await _get_user(db, user_id)
    _log(db, admin, "DELETE_USER", user_id, {"email": user.email}, request)
    await db.delete(user)
    await db.commit()
    return SuccessResponse()
