from abc import ABC, abstractmethod

from login_service.app.services.unit_of_work import UnitOfWork


class CredentialStore(ABC):
    """
    Long-lived handle on the backing store.

    Constructed once at process start, initialized by the application
    lifespan, handed to each request as a fresh UnitOfWork, and closed
    on shutdown.
    """

    @abstractmethod
    async def init(self) -> None:
        """Prepare the backing store (create schema, check paths)"""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release resources held by the store"""
        pass

    @abstractmethod
    def unit_of_work(self) -> UnitOfWork:
        """Create a new, not yet entered, UnitOfWork"""
        pass
