from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional

from app.core.database import get_db
from app.core.exceptions import AuthorizationError, InactiveAccountError, InvalidTokenError
from app.core.logging_config import set_user_id
from app.core.security import decode_token, ACCESS_TOKEN_TYPE
from app.models.user import User, UserRole

# auto_error=False so a missing header is reported as 401 rather than 403
security = HTTPBearer(auto_error=False)


async def _user_from_token(token: str, db: AsyncSession) -> User:
    payload = decode_token(token, expected_type=ACCESS_TOKEN_TYPE)

    user_id = payload.get("sub")
    if not user_id:
        raise InvalidTokenError("Invalid token payload")

    result = await db.execute(
        select(User).where(User.id == user_id)
    )
    user = result.scalar_one_or_none()

    if not user:
        raise InvalidTokenError("User not found")

    if not user.is_active:
        raise InactiveAccountError()

    return user


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Get current authenticated user"""
    if not credentials:
        raise InvalidTokenError("Not authenticated")

    user = await _user_from_token(credentials.credentials, db)

    request.state.user_id = str(user.id)
    set_user_id(str(user.id))
    return user


async def get_current_admin(
    current_user: User = Depends(get_current_user)
) -> User:
    """Get current admin user"""
    if current_user.role != UserRole.ADMIN:
        raise AuthorizationError("Admin access required")
    return current_user


async def get_optional_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> Optional[User]:
    """Get current user (optional). Anonymous callers get None; a bad token is still 401."""
    if not credentials:
        return None

    user = await _user_from_token(credentials.credentials, db)

    request.state.user_id = str(user.id)
    set_user_id(str(user.id))
    return user
