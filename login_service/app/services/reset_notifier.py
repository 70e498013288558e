from abc import ABC, abstractmethod


class IResetNotifier(ABC):
    """Out-of-band delivery of password reset links"""

    @abstractmethod
    async def send_reset_link(self, email: str, reset_link: str) -> None:
        pass
