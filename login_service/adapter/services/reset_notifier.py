import logging

from login_service.app.services.reset_notifier import IResetNotifier

logger = logging.getLogger(__name__)


class LoggingResetNotifier(IResetNotifier):
    """
    Delivers reset links by writing them to the application log.

    Stands in for an email sender; swap in a real implementation of
    IResetNotifier to send mail.
    """

    async def send_reset_link(self, email: str, reset_link: str) -> None:
        logger.info(f"Password reset link for {email}: {reset_link}")
