"""
Reset Token Manager

Issues, validates and consumes password reset tokens.
"""

import hashlib
import secrets
from datetime import datetime, timedelta
from typing import Callable

from login_service.libs.result import Error, Result, Return
from login_service.app.services.unit_of_work import UnitOfWork
from login_service.domain.base import utcnow
from login_service.domain import messages
from login_service.domain.entities import User

DEFAULT_TOKEN_TTL = timedelta(hours=1)


def hash_token(token: str) -> str:
    """SHA-256 hex digest of a plain reset token, the form kept in the store"""
    return hashlib.sha256(token.encode()).hexdigest()


class ResetTokenManager:
    """
    Single-use, time-bounded password reset tokens.

    Business Rules:
    - Token is 32 bytes from secrets.token_urlsafe (URL safe, unguessable)
    - Only the SHA-256 digest of the token is stored
    - Token expires TTL after issue (1 hour by default)
    - At most one pending token per user; issuing again replaces it
    - Expired, unknown and already used tokens all fail with the same
      INVALID_TOKEN error
    - Consuming the token and writing the new password hash is one
      conditional update, so concurrent resets with the same token cannot
      both succeed

    Must be used inside an entered UnitOfWork; the caller commits.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        ttl: timedelta = DEFAULT_TOKEN_TTL,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.ttl = ttl
        self.clock = clock

    async def issue(self, user: User) -> str:
        """
        Generate a new reset token for user and store its digest.

        Returns:
            The plain token, to be delivered out of band. It is not
            recoverable from the store.
        """
        token = secrets.token_urlsafe(32)
        expires_at = self.clock() + self.ttl
        await self.uow.users.update_reset_token(user.id, hash_token(token), expires_at)
        return token

    async def validate(self, token: str) -> Result[User]:
        """
        Resolve a plain token to the user it was issued for.

        Returns:
            Result with the User, or Error(INVALID_TOKEN)
        """
        user = await self.uow.users.get_by_reset_token(hash_token(token))

        if (
            user is None
            or not user.has_pending_reset()
            or self.clock() > user.reset_token_expires_at
        ):
            return Return.err(Error("INVALID_TOKEN", messages.INVALID_TOKEN))

        return Return.ok(user)

    async def consume(self, user: User, password_hash: str) -> Result[None]:
        """
        Write the new password hash and clear the user's reset token.

        The write only applies if the token that validate() saw is still the
        user's pending token and still unexpired; otherwise another request
        got there first and the result is INVALID_TOKEN.
        """
        updated = await self.uow.users.update_credentials(
            user.id,
            password_hash=password_hash,
            expected_reset_token=user.reset_token,
            now=self.clock(),
        )
        if not updated:
            return Return.err(Error("INVALID_TOKEN", messages.INVALID_TOKEN))

        return Return.ok(None)
