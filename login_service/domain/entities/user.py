"""
User Entity

Represents a registered account and its pending password reset, if any.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from login_service.domain.base import utcnow


class User(SQLModel, table=True):
    """
    User entity - one record per registered email.

    Business Rules:
    - Email must be unique across all users (case-sensitive as stored)
    - Password stored as bcrypt hash, never plaintext
    - reset_token holds the SHA-256 digest of the pending reset token
    - reset_token and reset_token_expires_at are set and cleared together
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    # Password reset (forgot-password / reset-password)
    reset_token: Optional[str] = Field(
        default=None, unique=True, index=True, max_length=64
    )
    reset_token_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    def has_pending_reset(self) -> bool:
        return self.reset_token is not None and self.reset_token_expires_at is not None
