import logging

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from login_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from login_service.app.services.credential_store import CredentialStore
from login_service.app.services.unit_of_work import UnitOfWork

# Registers the users table on SQLModel.metadata
from login_service.domain.entities import User  # noqa: F401

logger = logging.getLogger(__name__)


class SqlCredentialStore(CredentialStore):
    """Credential store backed by a relational database through SQLModel"""

    def __init__(self, db_uri: str, echo: bool = False):
        self.db_uri = db_uri
        self.engine = create_async_engine(db_uri, echo=echo, future=True)
        self.session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

    async def init(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info(f"SQL credential store ready ({self.engine.url.get_backend_name()})")

    async def close(self) -> None:
        await self.engine.dispose()

    def unit_of_work(self) -> UnitOfWork:
        return SqlAlchemyUnitOfWork(self.session_factory)
