import copy

from login_service.adapter.repositories.file_user_repository import FileUserRepository
from login_service.app.services.unit_of_work import UnitOfWork


class FileUnitOfWork(UnitOfWork):
    """
    UnitOfWork over a JSON users file.

    Holds the store lock from __aenter__ to __aexit__, so every unit of work
    on the same store runs serially: load, mutate in memory, write on commit.
    Uncommitted changes never reach the file; an error inside the block
    rolls the in-memory records back before the lock is released.
    """

    def __init__(self, store):
        self.store = store
        self._snapshot = []

    async def __aenter__(self):
        await self.store.lock.acquire()
        try:
            self._snapshot = await self.store.load()
        except BaseException:
            self.store.lock.release()
            raise
        self.users = FileUserRepository(copy.deepcopy(self._snapshot))
        return self

    async def __aexit__(self, exc_type, *args):
        try:
            if exc_type is not None:
                await self.rollback()
        finally:
            self.store.lock.release()

    async def commit(self):
        await self.store.save(self.users.records)
        self._snapshot = copy.deepcopy(self.users.records)

    async def rollback(self):
        self.users.records = copy.deepcopy(self._snapshot)
