from abc import ABC, abstractmethod

from login_service.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """
    Abstract UnitOfWork - defines repository access and transaction management

    Leaving the block without commit() discards changes; leaving it with an
    exception calls rollback() first.
    """

    # Repository properties (initialized in __aenter__)
    users: IUserRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
