import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from login_service.adapter.services.file_credential_store import FileCredentialStore
from login_service.adapter.services.password_hasher import BcryptPasswordHasher
from login_service.adapter.services.sql_credential_store import SqlCredentialStore
from login_service.api.app import create_app
from tests.fixtures.app_config import IntegrationConfig
from tests.fixtures.json_loader import TestDataLoader


@pytest.fixture
def test_data():
    return TestDataLoader()


@pytest.fixture
def hasher():
    return BcryptPasswordHasher(rounds=4)


def make_store(kind: str, tmp_path):
    if kind == "sql":
        return SqlCredentialStore(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    return FileCredentialStore(str(tmp_path / "users.json"))


@pytest_asyncio.fixture(params=["sql", "file"])
async def store(request, tmp_path):
    """Initialized credential store, once per backend"""
    store = make_store(request.param, tmp_path)
    await store.init()
    yield store
    await store.close()


@pytest_asyncio.fixture
async def file_store(tmp_path):
    store = FileCredentialStore(str(tmp_path / "users.json"))
    await store.init()
    yield store
    await store.close()


@pytest_asyncio.fixture
async def client(store):
    # The store is initialized by the fixture, so the lifespan is not needed
    app = create_app(IntegrationConfig, store=store)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
