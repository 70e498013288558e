from sqlalchemy.orm import sessionmaker

from login_service.adapter.repositories.user_repository import UserRepository
from login_service.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory
        self.session = None

    async def __aenter__(self):
        self.session = self.session_factory()
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        return self

    async def __aexit__(self, exc_type, *args):
        # Roll back only on error: rollback() expires loaded objects, while
        # close() discards uncommitted work and leaves them readable
        try:
            if exc_type is not None:
                await self.rollback()
        finally:
            await self.session.close()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
