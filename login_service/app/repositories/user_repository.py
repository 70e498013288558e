from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from login_service.domain.entities import User


class DuplicateEmailError(Exception):
    """Raised by create() when the email is already registered"""

    def __init__(self, email: str):
        self.email = email
        super().__init__("Email already registered")


class IUserRepository(ABC):
    """
    User repository interface - application layer

    This is the credential store contract. Backends (SQL, JSON file) are
    swappable without touching the use cases.
    """

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address (exact match)"""
        pass

    @abstractmethod
    async def get_by_reset_token(self, token_hash: str) -> Optional[User]:
        """Get user whose pending reset token digest equals token_hash"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user, raising DuplicateEmailError if the email exists"""
        pass

    @abstractmethod
    async def update_credentials(
        self,
        user_id: UUID,
        password_hash: str,
        expected_reset_token: str,
        now: datetime,
    ) -> bool:
        """
        Set a new password hash and clear the reset token in one write.

        Applies only if the user still holds expected_reset_token and it has
        not expired at `now`. Returns False when nothing was updated.
        """
        pass

    @abstractmethod
    async def update_reset_token(
        self, user_id: UUID, token_hash: str, expires_at: datetime
    ) -> None:
        """Store a pending reset token, replacing any previous one"""
        pass
