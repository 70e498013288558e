from fastapi import Request

from login_service.adapter.services.file_credential_store import FileCredentialStore
from login_service.adapter.services.sql_credential_store import SqlCredentialStore
from login_service.app.services.credential_store import CredentialStore
from login_service.app.services.password_hasher import IPasswordHasher
from login_service.app.services.reset_notifier import IResetNotifier


def build_credential_store(config) -> CredentialStore:
    """Construct the configured store; the app lifespan initializes and closes it"""
    if config.CREDENTIAL_STORE == "sql":
        return SqlCredentialStore(config.DB_URI)
    if config.CREDENTIAL_STORE == "file":
        return FileCredentialStore(config.USERS_FILE)
    raise ValueError(f"Unknown CREDENTIAL_STORE: {config.CREDENTIAL_STORE!r}")


async def get_unit_of_work(request: Request):
    store: CredentialStore = request.app.state.credential_store
    yield store.unit_of_work()


def get_password_hasher(request: Request) -> IPasswordHasher:
    return request.app.state.password_hasher


def get_reset_notifier(request: Request) -> IResetNotifier:
    return request.app.state.reset_notifier


def get_config(request: Request):
    return request.app.state.config
