"""
Reset Password Use Case

Sets a new password using a password reset token.
"""

import logging
from datetime import datetime
from typing import Callable

from login_service.libs.result import Error, Result, Return
from login_service.app.services.password_hasher import IPasswordHasher, password_too_long
from login_service.app.services.reset_token_manager import ResetTokenManager
from login_service.app.services.unit_of_work import UnitOfWork
from login_service.domain import messages
from login_service.domain.base import utcnow
from .dtos import ResetPasswordResponse

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """
    Use case for resetting a password with a reset token.

    Business Rules:
    - Token and new password are both required
    - Unknown, expired, superseded and already used tokens fail with one
      INVALID_TOKEN error
    - The new password hash is written and the token cleared in a single
      conditional update; of two concurrent requests with the same token
      only one succeeds
    - On any failure nothing is committed: the old password and token stay
      as they were
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: IPasswordHasher,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.hasher = hasher
        self.tokens = ResetTokenManager(uow, clock=clock)

    async def execute(self, token: str, new_password: str) -> Result[ResetPasswordResponse]:
        """
        Execute reset password use case.

        Args:
            token: Password reset token (plain text from the reset link)
            new_password: New password to set

        Returns:
            Result with confirmation status, or Error

        Errors:
            - VALIDATION_ERROR: token or password missing, password too long
            - INVALID_TOKEN: token not usable
            - INTERNAL_ERROR: storage or hashing failed
        """
        try:
            return await self._reset(token, new_password)
        except Exception:
            logger.exception("Password reset failed")
            return Return.err(Error("INTERNAL_ERROR", messages.INTERNAL_ERROR))

    async def _reset(self, token: str, new_password: str) -> Result[ResetPasswordResponse]:
        if not token or not new_password:
            return Return.err(Error("VALIDATION_ERROR", messages.RESET_FIELDS_REQUIRED))

        if password_too_long(new_password):
            return Return.err(Error("VALIDATION_ERROR", messages.PASSWORD_TOO_LONG))

        async with self.uow:
            validation = await self.tokens.validate(token)
            if validation.is_err():
                return Return.err(validation.error)

            user = validation.value
            password_hash = self.hasher.hash(new_password)

            consumed = await self.tokens.consume(user, password_hash)
            if consumed.is_err():
                return Return.err(consumed.error)

            await self.uow.commit()

            logger.info(f"Password reset for user {user.id}")
            return Return.ok(
                ResetPasswordResponse(status="success", message=messages.PASSWORD_RESET)
            )
