from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from login_service.app.repositories.user_repository import (
    DuplicateEmailError,
    IUserRepository,
)
from login_service.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_reset_token(self, token_hash: str) -> Optional[User]:
        """Get user by reset token digest"""
        stmt = select(User).where(User.reset_token == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            # Unique constraint on email lost a race with a concurrent signup
            await self.session.rollback()
            raise DuplicateEmailError(user.email) from exc
        await self.session.refresh(user)
        return user

    async def update_credentials(
        self,
        user_id: UUID,
        password_hash: str,
        expected_reset_token: str,
        now: datetime,
    ) -> bool:
        """Compare-and-swap the password hash, clearing the reset token"""
        stmt = (
            update(User)
            .where(
                User.id == user_id,
                User.reset_token == expected_reset_token,
                User.reset_token_expires_at >= now,
            )
            .values(
                password_hash=password_hash,
                reset_token=None,
                reset_token_expires_at=None,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def update_reset_token(
        self, user_id: UUID, token_hash: str, expires_at: datetime
    ) -> None:
        """Store a pending reset token, replacing any previous one"""
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(reset_token=token_hash, reset_token_expires_at=expires_at)
        )
        await self.session.execute(stmt)
        await self.session.flush()
