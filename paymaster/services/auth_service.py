"""
PayMaster - Authentication Service

Business logic for user registration, login and refresh tokens.

Access tokens are short-lived JWTs. Refresh tokens are opaque strings
stored in the refresh_tokens table; each refresh rotates the token and
logout deletes it.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from sqlalchemy import select, delete, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from paymaster.config import settings
from paymaster.models.user import RefreshToken, User, UserRole
from paymaster.utils.error_handling import (
    AccountDisabledException,
    DuplicateEntryException,
    InvalidCredentialsException,
    TokenInvalidException,
)
from paymaster.utils.security import (
    create_access_token,
    generate_refresh_token,
    get_password_hash,
    verify_password,
)


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user_by_username(self, username: str) -> Optional[User]:
        result = await self.db.execute(
            select(User).where(User.username == username)
        )
        return result.scalar_one_or_none()

    async def get_user_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def count_users(self) -> int:
        result = await self.db.execute(select(func.count(User.id)))
        return result.scalar() or 0

    async def register_user(
        self,
        username: str,
        email: str,
        password: str,
        role: UserRole = UserRole.EMPLOYEE,
    ) -> User:
        """
        Register a new user.

        Raises:
            DuplicateEntryException: username or email already taken
        """
        result = await self.db.execute(
            select(User).where(or_(User.username == username, User.email == email.lower()))
        )
        existing = result.scalars().first()
        if existing is not None:
            if existing.username == username:
                raise DuplicateEntryException("User", "username", username)
            raise DuplicateEntryException("User", "email", email)

        user = User(
            username=username,
            email=email.lower(),
            hashed_password=get_password_hash(password),
            role=role,
            is_active=True,
        )
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def authenticate_user(self, username: str, password: str) -> User:
        """
        Authenticate a user with username and password.

        Raises:
            InvalidCredentialsException: unknown user or wrong password
            AccountDisabledException: user is deactivated
        """
        user = await self.get_user_by_username(username)

        if not user or not verify_password(password, user.hashed_password):
            raise InvalidCredentialsException()

        if not user.is_active:
            raise AccountDisabledException()

        return user

    async def issue_tokens(self, user: User) -> dict:
        """
        Create an access token and store a new refresh token for the user.

        Returns:
            Dictionary with access_token, refresh_token, token_type, expires_in
        """
        token_data = {
            "sub": str(user.id),
            "username": user.username,
            "role": user.role.value,
        }
        access_token = create_access_token(token_data)

        refresh_token = RefreshToken(
            user_id=user.id,
            token=generate_refresh_token(),
            expires_at=datetime.now(timezone.utc) + timedelta(days=settings.refresh_token_expire_days),
        )
        self.db.add(refresh_token)
        await self.db.commit()

        return {
            "access_token": access_token,
            "refresh_token": refresh_token.token,
            "token_type": "bearer",
            "expires_in": settings.access_token_expire_minutes * 60,
        }

    async def refresh(self, token: str) -> Tuple[User, dict]:
        """
        Exchange a refresh token for a new token pair.

        The presented token is deleted whether or not it is still valid.

        Raises:
            TokenInvalidException: unknown, expired or orphaned token
        """
        result = await self.db.execute(
            select(RefreshToken).where(RefreshToken.token == token)
        )
        stored = result.scalar_one_or_none()
        if stored is None:
            raise TokenInvalidException("Invalid refresh token")

        user = await self.get_user_by_id(stored.user_id)
        expired = _as_utc(stored.expires_at) <= datetime.now(timezone.utc)

        await self.db.delete(stored)
        await self.db.commit()

        if expired:
            raise TokenInvalidException("Refresh token has expired")
        if user is None or not user.is_active:
            raise TokenInvalidException("Invalid refresh token")

        return user, await self.issue_tokens(user)

    async def revoke(self, token: str) -> bool:
        """Delete a refresh token. Returns False if it was not found."""
        result = await self.db.execute(
            delete(RefreshToken).where(RefreshToken.token == token)
        )
        await self.db.commit()
        return result.rowcount > 0


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
