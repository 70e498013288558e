from unittest.mock import AsyncMock, MagicMock

import pytest

from login_service.api.app import create_app, lifespan
from login_service.app.services.credential_store import CredentialStore
from tests.fixtures.app_config import IntegrationConfig


@pytest.mark.asyncio
async def test_lifespan_opens_and_closes_store():
    store = MagicMock(spec=CredentialStore)
    store.init = AsyncMock()
    store.close = AsyncMock()
    app = create_app(IntegrationConfig, store=store)

    async with lifespan(app):
        store.init.assert_awaited_once()
        store.close.assert_not_awaited()

    store.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_lifespan_closes_store_on_error():
    store = MagicMock(spec=CredentialStore)
    store.init = AsyncMock()
    store.close = AsyncMock()
    app = create_app(IntegrationConfig, store=store)

    with pytest.raises(RuntimeError):
        async with lifespan(app):
            raise RuntimeError("shutdown")

    store.close.assert_awaited_once()


def test_unknown_store_kind_rejected():
    class BadConfig(IntegrationConfig):
        CREDENTIAL_STORE = "redis"

    with pytest.raises(ValueError):
        create_app(BadConfig)
