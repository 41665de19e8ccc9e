"""
services/auth/router.py
Email + password authentication for the admin console.
Implements: Register (PENDING) → Admin approval → Login → JWT issue
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from config.database import get_db
from shared.middleware.auth import TokenData, protect
from shared.models.models import User, UserRole, UserStatus
from shared.schemas.schemas import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    SessionUser,
)
from shared.utils.security import (
    DUMMY_PASSWORD_HASH,
    create_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _normalize_email(email: str) -> str:
    return email.strip().lower()


@router.post(
    "/register",
    response_model=MessageResponse,
    summary="Self-register an account (awaits admin approval)",
)
async def register(data: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """
    Create a PENDING / USER account. Never returns the password or its hash.
    An admin must approve the account before it can log in.
    """
    email = _normalize_email(data.email)
    existing = await db.scalar(select(User).where(User.email == email))
    if existing:
        raise HTTPException(status_code=409, detail="Email already registered")

    db.add(User(
        email=email,
        password_hash=hash_password(data.password),
        role=UserRole.USER,
        status=UserStatus.PENDING,
    ))
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration of the same email
        await db.rollback()
        raise HTTPException(status_code=409, detail="Email already registered")

    logger.info("Registered new account %s (pending approval)", email)
    return MessageResponse(message="Registration successful. Awaiting admin approval.")


@router.post("/login", response_model=LoginResponse, summary="Exchange credentials for a token")
async def login(data: LoginRequest, db: AsyncSession = Depends(get_db)):
    """
    - 401 for unknown email or wrong password (same message for both)
    - 403 when the account is PENDING or BLOCKED
    - otherwise a 7-day token carrying {sub, role, status, email}
    """
    user = await db.scalar(select(User).where(User.email == _normalize_email(data.email)))

    if user is None:
        verify_password(data.password, DUMMY_PASSWORD_HASH)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    if not verify_password(data.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    if user.status == UserStatus.PENDING:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account awaiting approval")
    if user.status == UserStatus.BLOCKED:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is blocked")

    token = create_access_token(
        user_id=user.id,
        role=user.role.value,
        status=user.status.value,
        email=user.email,
    )
    return LoginResponse(token=token, user=SessionUser.model_validate(user))


@router.get("/me", response_model=SessionUser, summary="Claims of the current token")
async def get_me(token: TokenData = Depends(protect)):
    """Echoes the identity embedded in the bearer token."""
    return SessionUser(
        id=token.user_id,
        email=token.email,
        role=token.role,
        status=token.status,
    )
