"""
Auth Service
Account registration, login and password reset
"""

from datetime import timedelta
from typing import Dict, Optional, Tuple

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import (
    DuplicateError,
    InactiveAccountError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    InvalidTokenError,
    UserNotFoundError,
)
from app.core.security import (
    PASSWORD_RESET_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    build_token_pair,
    create_password_reset_token,
    decode_token,
    get_password_hash,
    hash_token,
    token_matches,
    verify_password,
)
from app.core.types import utcnow
from app.models.user import User, UserRole


class AuthService:
    """Service for account operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user(self, user_id: str) -> User:
        result = await self.db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if not user:
            raise UserNotFoundError(user_id)
        return user

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def get_by_identifier(self, identifier: str) -> Optional[User]:
        """Find an account whose username or email equals the identifier"""
        result = await self.db.execute(
            select(User).where(or_(User.username == identifier, User.email == identifier))
        )
        return result.scalars().first()

    async def register(
        self,
        email: str,
        password: str,
        username: Optional[str] = None,
        role: UserRole = UserRole.USER,
    ) -> User:
        """Create an account. Duplicate email or username raises DuplicateError."""
        if await self.get_by_email(email):
            raise DuplicateError("email")
        if username and await self.get_by_username(username):
            raise DuplicateError("username", "Username already taken")

        user = User(
            email=email,
            username=username,
            hashed_password=get_password_hash(password),
            role=role,
        )
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def authenticate(self, identifier: str, password: str) -> User:
        """Check credentials and stamp last_login"""
        user = await self.get_by_identifier(identifier)
        if not user or not verify_password(password, user.hashed_password):
            raise InvalidCredentialsError()
        if not user.is_active:
            raise InactiveAccountError()

        user.last_login = utcnow()
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def refresh_tokens(self, refresh_token: str) -> Dict[str, str]:
        payload = decode_token(refresh_token, expected_type=REFRESH_TOKEN_TYPE)

        result = await self.db.execute(select(User).where(User.id == payload.get("sub")))
        user = result.scalar_one_or_none()
        if not user:
            raise InvalidTokenError("User not found")
        if not user.is_active:
            raise InactiveAccountError()

        return build_token_pair(user)

    # ==================== Password reset ====================

    async def create_password_reset(self, email: str) -> Tuple[Optional[User], Optional[str]]:
        """
        Issue a reset token for the account with this email.

        Returns (None, None) for unknown emails; callers answer the same way
        in both cases.
        """
        user = await self.get_by_email(email)
        if not user or not user.is_active:
            return None, None

        token = create_password_reset_token(str(user.id), user.email)
        user.reset_token_hash = hash_token(token)
        user.reset_token_expires = utcnow() + timedelta(minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES)
        await self.db.commit()
        return user, token

    async def reset_password(self, token: str, new_password: str) -> User:
        try:
            payload = decode_token(token, expected_type=PASSWORD_RESET_TOKEN_TYPE)
        except InvalidTokenError:
            raise InvalidResetTokenError()

        result = await self.db.execute(select(User).where(User.id == payload.get("sub")))
        user = result.scalar_one_or_none()

        # The stored hash is cleared on use, so each token works once
        if not user or not token_matches(token, user.reset_token_hash):
            raise InvalidResetTokenError()
        if user.reset_token_expires and user.reset_token_expires < utcnow():
            raise InvalidResetTokenError("Reset token has expired")

        user.hashed_password = get_password_hash(new_password)
        user.reset_token_hash = None
        user.reset_token_expires = None
        await self.db.commit()
        return user

    # ==================== Management ====================

    async def ensure_admin(
        self,
        email: str,
        password: str,
        username: Optional[str] = None,
    ) -> Tuple[User, bool]:
        """Create an admin account, or promote and re-key an existing one.

        Returns (user, created).
        """
        user = await self.get_by_email(email)
        if user is None:
            user = await self.register(email, password, username=username, role=UserRole.ADMIN)
            return user, True

        user.role = UserRole.ADMIN
        user.is_active = True
        user.hashed_password = get_password_hash(password)
        if username and username != user.username:
            if await self.get_by_username(username):
                raise DuplicateError("username", "Username already taken")
            user.username = username
        await self.db.commit()
        await self.db.refresh(user)
        return user, False
