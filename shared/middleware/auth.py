"""
shared/middleware/auth.py
FastAPI dependency functions for authentication and authorization.

The token's role claim is trusted as issued; there is no per-request
database lookup of the user.
"""

from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from shared.models.models import UserRole, UserStatus
from shared.utils.security import verify_access_token

security = HTTPBearer(auto_error=False)


class TokenData:
    def __init__(self, payload: dict):
        self.user_id: str = payload["sub"]
        self.role: UserRole = UserRole(payload["role"])
        self.status: UserStatus = UserStatus(payload["status"])
        self.email: str = payload.get("email", "")


async def protect(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> TokenData:
    """
    Extract and validate the bearer token from the Authorization header.
    Missing, malformed, tampered or expired tokens all yield 401.
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = verify_access_token(credentials.credentials)
        return TokenData(payload)
    except (JWTError, KeyError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )


class RoleRequired:
    """Dependency factory for role-based access control. Always runs after protect."""

    def __init__(self, *roles: UserRole):
        self.roles = roles

    async def __call__(self, token: TokenData = Depends(protect)) -> TokenData:
        if token.role not in self.roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Admins only",
            )
        return token


require_admin = RoleRequired(UserRole.ADMIN)
