"""
Login Use Case

Verifies an email/password pair and returns the user's public identity.
"""

import logging

from login_service.libs.result import Error, Result, Return
from login_service.app.services.password_hasher import IPasswordHasher, password_too_long
from login_service.app.services.unit_of_work import UnitOfWork
from login_service.domain import messages
from .dtos import UserInfo

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login.

    Business Rules:
    - Unknown email and wrong password fail with the same INVALID_CREDENTIALS
      error and message
    - A bcrypt verification runs even when the email is unknown, so the
      response time does not reveal whether the account exists
    - No session or token is issued
    """

    def __init__(self, uow: UnitOfWork, hasher: IPasswordHasher):
        self.uow = uow
        self.hasher = hasher

    async def execute(self, email: str, password: str) -> Result[UserInfo]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with UserInfo, or Error
        """
        try:
            return await self._login(email, password)
        except Exception:
            logger.exception("Login failed")
            return Return.err(Error("INTERNAL_ERROR", messages.INTERNAL_ERROR))

    async def _login(self, email: str, password: str) -> Result[UserInfo]:
        if not email or not password:
            return Return.err(Error("VALIDATION_ERROR", messages.LOGIN_FIELDS_REQUIRED))

        # Too long to have been stored, so it cannot match any account
        if password_too_long(password):
            return Return.err(Error("INVALID_CREDENTIALS", messages.INVALID_CREDENTIALS))

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                self.hasher.verify_dummy(password)
                return Return.err(
                    Error("INVALID_CREDENTIALS", messages.INVALID_CREDENTIALS)
                )

            if not self.hasher.verify(password, user.password_hash):
                return Return.err(
                    Error("INVALID_CREDENTIALS", messages.INVALID_CREDENTIALS)
                )

            return Return.ok(UserInfo(id=str(user.id), name=user.name, email=user.email))
