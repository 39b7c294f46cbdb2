"""User repository for database operations."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import AppError
from ..models.user import User

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Emails are stored and looked up trimmed and lowercased."""
    return email.strip().lower()


class UserRepository:
    """Credential store backed by the users table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_user(self, email: str, username: str, password_hash: str) -> User:
        """Create new user.

        Email and username uniqueness is enforced by the table's unique
        constraints; losing a race to another insert raises CONFLICT.
        """
        user = User(email=normalize_email(email), username=username, password_hash=password_hash)
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.info(f"User insert rejected by unique constraint: {e.orig}")
            raise AppError.conflict("User already exists")
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID."""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        stmt = select(User).where(User.email == normalize_email(email))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        stmt = select(User).where(User.username == username)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        """Check if email is registered."""
        stmt = select(User.id).where(User.email == normalize_email(email)).limit(1)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def username_exists(self, username: str) -> bool:
        """Check if username exists."""
        stmt = select(User.id).where(User.username == username).limit(1)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def update_password_hash(self, user_id: UUID, password_hash: str) -> Optional[User]:
        """Replace the stored hash (used for transparent rehashing)."""
        user = await self.get_by_id(user_id)
        if not user:
            return None

        user.password_hash = password_hash
        await self.session.commit()
        await self.session.refresh(user)
        return user

    async def delete_user(self, user_id: UUID) -> bool:
        """Delete user."""
        user = await self.get_by_id(user_id)
        if not user:
            return False

        await self.session.delete(user)
        await self.session.commit()
        return True
