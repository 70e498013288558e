"""
Forgot Password Use Case

Issues a password reset token and delivers the reset link out of band.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable
from urllib.parse import urlencode

from login_service.libs.result import Error, Result, Return
from login_service.app.services.reset_notifier import IResetNotifier
from login_service.app.services.reset_token_manager import (
    DEFAULT_TOKEN_TTL,
    ResetTokenManager,
)
from login_service.app.services.unit_of_work import UnitOfWork
from login_service.domain import messages
from login_service.domain.base import utcnow
from .dtos import ForgotPasswordResponse

logger = logging.getLogger(__name__)


def build_reset_link(reset_url: str, token: str) -> str:
    return f"{reset_url}?{urlencode({'token': token})}"


class ForgotPasswordUseCase:
    """
    Use case for requesting a password reset link.

    Business Rules:
    - No email enumeration: the response is identical whether or not the
      email is registered
    - A token is only issued for a registered email
    - Issuing replaces any token still pending for the user
    - The link is delivered only after the token is committed; a delivery
      failure is logged and does not change the response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: IResetNotifier,
        reset_url: str,
        token_ttl: timedelta = DEFAULT_TOKEN_TTL,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.notifier = notifier
        self.reset_url = reset_url
        self.tokens = ResetTokenManager(uow, ttl=token_ttl, clock=clock)

    async def execute(self, email: str) -> Result[ForgotPasswordResponse]:
        """
        Execute forgot password use case.

        Args:
            email: Email address the reset is requested for

        Returns:
            Result with the generic response, or Error(VALIDATION_ERROR)
            or Error(INTERNAL_ERROR)
        """
        try:
            return await self._request_reset(email)
        except Exception:
            logger.exception("Forgot password request failed")
            return Return.err(Error("INTERNAL_ERROR", messages.INTERNAL_ERROR))

    async def _request_reset(self, email: str) -> Result[ForgotPasswordResponse]:
        if not email:
            return Return.err(Error("VALIDATION_ERROR", messages.EMAIL_REQUIRED))

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                logger.info("Password reset requested for an unregistered email")
                return Return.ok(self._generic_response())

            reset_token = await self.tokens.issue(user)
            await self.uow.commit()

        try:
            await self.notifier.send_reset_link(
                email, build_reset_link(self.reset_url, reset_token)
            )
        except Exception:
            logger.exception("Failed to deliver password reset link")

        return Return.ok(self._generic_response())

    @staticmethod
    def _generic_response() -> ForgotPasswordResponse:
        return ForgotPasswordResponse(status="sent", message=messages.RESET_LINK_SENT)
